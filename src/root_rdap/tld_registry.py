"""
TLD Registry - the list of TLDs in the root zone.

IANA publishes the list as plain text: a ``#`` version header followed by
one upper-case label per line. It is mirrored into the output directory and
refreshed once the cached copy falls out of the freshness window.
"""

import re
from collections.abc import Iterable
from typing import Optional

import httpx

from .audit_logger import AuditLogger
from .cache import FileCache
from .enums import LogLevel
from .exceptions import NetworkError

TLD_LIST_URL = "https://data.iana.org/TLD/tlds-alpha-by-domain.txt"

TLD_LABEL_PATTERN = re.compile(r"^[A-Z0-9-]+$")


def tld_list_cache_name(url: str = TLD_LIST_URL) -> str:
    """Cached copies keep the basename of the URL they came from."""
    return url.rstrip("/").rsplit("/", 1)[-1]


def parse_tld_list(lines: Iterable[str]) -> list[str]:
    """
    Extract TLD labels from the IANA list.

    Lines that aren't bare upper-case labels (the header comment, blank
    lines) are ignored. Labels are returned lowercased, in list order.
    """
    tlds = []
    for line in lines:
        label = line.strip()
        if TLD_LABEL_PATTERN.match(label):
            tlds.append(label.lower())
    return tlds


class TLDListLoader:
    """Keeps the cached TLD list current and reads it."""

    def __init__(
        self,
        cache: FileCache,
        client: httpx.AsyncClient,
        logger: Optional[AuditLogger] = None,
        url: str = TLD_LIST_URL,
    ) -> None:
        self._cache = cache
        self._client = client
        self._logger = logger
        self._url = url
        self._name = tld_list_cache_name(url)

    async def load(self) -> list[str]:
        """
        Return the TLDs in the root zone.

        Raises:
            NetworkError: If the list can't be fetched and no cached copy
                exists
        """
        if not self._cache.is_fresh(self._name):
            self._log(LogLevel.INFO, "Updating TLD list from IANA", {"url": self._url})
            try:
                await self._cache.mirror(self._client, self._url, self._name)
            except NetworkError as e:
                if not self._cache.exists(self._name):
                    raise
                self._log(LogLevel.WARN, e.message, {"url": self._url, "code": e.code})

        return parse_tld_list(self._cache.read_lines(self._name))

    def _log(self, level: LogLevel, message: str, data: Optional[dict] = None) -> None:
        if self._logger:
            self._logger.log(level, "TLDListLoader", message, data)
