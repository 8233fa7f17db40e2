"""
JSON output for RDAP documents.

Documents are written pretty-printed with sorted keys so that two runs over
the same input differ only in the "last update of RDAP database" timestamp.
"""

import json
from pathlib import Path
from typing import Any

from .exceptions import OutputError


def encode_document(document: Any) -> str:
    """Serialize a document tree to canonical, pretty JSON."""
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


class OutputWriter:
    """Writes ``<directory>/<name>.json`` files."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    def path_for(self, name: str) -> Path:
        return self._directory / f"{name}.json"

    def write(self, name: str, document: Any) -> Path:
        """
        Write a document as ``<name>.json``.

        Raises:
            OutputError: If the file cannot be written; details carry the
                path and the operating system's reason
        """
        path = self.path_for(name)
        try:
            path.write_text(encode_document(document), encoding="utf-8")
        except OSError as e:
            reason = e.strerror or str(e)
            raise OutputError(
                code="write_failed",
                message=f"Unable to write to '{path}': {reason}",
                details={"path": str(path), "reason": reason},
            ) from e
        return path
