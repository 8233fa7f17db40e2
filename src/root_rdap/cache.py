"""
File cache for fetched text and JSON documents.

Everything the generator downloads (the TLD list, each TLD's whois
response, the RDAP bootstrap registry and the gTLD registry) is kept in the
output directory and reused while it is younger than the freshness window.
"""

import os
import time
from email.utils import formatdate
from pathlib import Path
from typing import Callable, Optional

import httpx

from .enums import FetchErrorCode
from .exceptions import NetworkError, OutputError

DEFAULT_TTL_SECONDS = 86400


class FileCache:
    """
    Age-based cache rooted at the output directory.

    A file is fresh when its modification time is no older than
    ``ttl_seconds``.
    """

    def __init__(
        self,
        directory: Path,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            directory: Directory holding cached files
            ttl_seconds: Freshness window in seconds
            clock: Source of the current time (defaults to time.time)
        """
        self._directory = Path(directory)
        self._ttl_seconds = ttl_seconds
        self._clock = clock or time.time

    def path(self, name: str) -> Path:
        return self._directory / name

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def is_fresh(self, name: str) -> bool:
        """Return True if the cached file exists and is within the window."""
        path = self.path(name)
        try:
            mtime = path.stat().st_mtime
        except OSError:
            return False
        return mtime >= self._clock() - self._ttl_seconds

    def read_text(self, name: str) -> str:
        return self.path(name).read_text(encoding="utf-8", errors="replace")

    def read_lines(self, name: str) -> list[str]:
        return self.read_text(name).splitlines()

    def write_text(self, name: str, text: str) -> Path:
        """
        Write a cache file.

        Raises:
            OutputError: If the file cannot be written
        """
        path = self.path(name)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputError(
                code="write_failed",
                message=f"Unable to write data to '{path}': {e.strerror or e}",
                details={"path": str(path), "reason": e.strerror or str(e)},
            ) from e
        return path

    def touch(self, name: str) -> None:
        os.utime(self.path(name), None)

    async def mirror(self, client: httpx.AsyncClient, url: str, name: str) -> bool:
        """
        Download ``url`` into the cache unless the server says it's unchanged.

        Sends If-Modified-Since when a cached copy exists. A 304 response
        refreshes the cached file's timestamp.

        Returns:
            True if new content was written, False on 304

        Raises:
            NetworkError: On transport failure or an error status
            OutputError: If the downloaded content cannot be written
        """
        headers = {}
        path = self.path(name)
        if path.exists():
            headers["If-Modified-Since"] = formatdate(path.stat().st_mtime, usegmt=True)

        try:
            response = await client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise NetworkError(
                code=FetchErrorCode.TIMEOUT.value,
                message=f"Request for {url} timed out",
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                code=FetchErrorCode.NETWORK_ERROR.value,
                message=f"Request for {url} failed: {e}",
                details={"url": url},
            ) from e

        if response.status_code == 304:
            self.touch(name)
            return False

        if response.status_code >= 400:
            raise NetworkError(
                code=FetchErrorCode.HTTP_ERROR.value,
                message=f"{response.status_code} {response.reason_phrase}",
                details={"url": url, "status_code": response.status_code},
            )

        self.write_text(name, response.text)
        return True
