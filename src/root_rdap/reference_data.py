"""
Reference data used to enrich the RDAP documents.

Two documents are consulted:
- the IANA RDAP bootstrap registry for DNS (TLD -> RDAP base URL)
- the ICANN gTLD registry (TLD -> application ID, Specification 13
  exemption, U-label)

Both are parsed into plain mappings that are read, never modified, while
TLDs are processed.
"""

import json
from dataclasses import dataclass, field
from typing import Optional

import httpx

from .audit_logger import AuditLogger
from .cache import FileCache
from .enums import FetchErrorCode, LogLevel
from .exceptions import NetworkError
from .models import GTLDInfo

BOOTSTRAP_URL = "https://data.iana.org/rdap/dns.json"
GTLD_URL = "https://www.icann.org/resources/registries/gtlds/v2/gtlds.json"

BOOTSTRAP_CACHE_NAME = "dns.json"
GTLD_CACHE_NAME = "gtlds.json"


@dataclass(frozen=True)
class ReferenceData:
    """Read-only lookups for the RDAP assembler."""

    rdap_urls: dict[str, str] = field(default_factory=dict)
    gtlds: dict[str, GTLDInfo] = field(default_factory=dict)

    def rdap_url_for(self, tld: str) -> Optional[str]:
        return self.rdap_urls.get(tld)

    def gtld_info_for(self, tld: str) -> Optional[GTLDInfo]:
        return self.gtlds.get(tld)


def _preferred_url(urls: list) -> Optional[str]:
    """Pick the HTTPS URL when several are listed, else the first one."""
    candidates = [url for url in urls if isinstance(url, str) and url]
    for url in candidates:
        if url.lower().startswith("https://"):
            return url
    return candidates[0] if candidates else None


def parse_bootstrap(document: dict) -> dict[str, str]:
    """
    Parse an RDAP bootstrap document into a TLD -> base URL map.

    Each service is a ``[[tld, ...], [url, ...]]`` pair; malformed services
    are skipped.
    """
    rdap_urls: dict[str, str] = {}
    services = document.get("services", []) if isinstance(document, dict) else []
    for service in services:
        if not isinstance(service, list) or len(service) < 2:
            continue
        tlds, urls = service[0], service[1]
        if not isinstance(tlds, list) or not isinstance(urls, list):
            continue
        url = _preferred_url(urls)
        if url is None:
            continue
        for tld in tlds:
            if isinstance(tld, str) and tld:
                rdap_urls[tld.lower()] = url
    return rdap_urls


def parse_gtlds(document: dict) -> dict[str, GTLDInfo]:
    """Parse the ICANN gTLD registry into a TLD -> GTLDInfo map."""
    gtlds: dict[str, GTLDInfo] = {}
    entries = document.get("gTLDs", []) if isinstance(document, dict) else []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        label = entry.get("gTLD")
        if not isinstance(label, str) or not label:
            continue
        label = label.lower()
        gtlds[label] = GTLDInfo(
            gtld=label,
            application_id=entry.get("applicationId") or None,
            specification13=bool(entry.get("specification13")),
            u_label=entry.get("uLabel") or None,
        )
    return gtlds


class ReferenceDataLoader:
    """
    Fetches and parses the bootstrap and gTLD documents.

    Documents are mirrored into the cache directory. If a download fails
    the cached copy is used; with no cached copy the lookup is empty. Either
    way a warning is logged and the run goes on.
    """

    def __init__(
        self,
        cache: FileCache,
        client: httpx.AsyncClient,
        logger: Optional[AuditLogger] = None,
        bootstrap_url: str = BOOTSTRAP_URL,
        gtld_url: str = GTLD_URL,
    ) -> None:
        self._cache = cache
        self._client = client
        self._logger = logger
        self._bootstrap_url = bootstrap_url
        self._gtld_url = gtld_url

    async def load(self) -> ReferenceData:
        bootstrap = await self._load_document(self._bootstrap_url, BOOTSTRAP_CACHE_NAME)
        gtlds = await self._load_document(self._gtld_url, GTLD_CACHE_NAME)
        return ReferenceData(
            rdap_urls=parse_bootstrap(bootstrap),
            gtlds=parse_gtlds(gtlds),
        )

    async def _load_document(self, url: str, name: str) -> dict:
        if not self._cache.is_fresh(name):
            self._log(LogLevel.INFO, f"Updating {name}", {"url": url})
            try:
                await self._cache.mirror(self._client, url, name)
            except NetworkError as e:
                self._log(
                    LogLevel.WARN,
                    f"Unable to update {name}: {e.message}",
                    {"url": url, "code": e.code},
                )

        if not self._cache.exists(name):
            return {}

        try:
            document = json.loads(self._cache.read_text(name))
        except (OSError, json.JSONDecodeError) as e:
            self._log(
                LogLevel.WARN,
                f"Unable to parse {name}: {e}",
                {"code": FetchErrorCode.PARSE_ERROR.value},
            )
            return {}
        return document if isinstance(document, dict) else {}

    def _log(self, level: LogLevel, message: str, data: Optional[dict] = None) -> None:
        if self._logger:
            self._logger.log(level, "ReferenceDataLoader", message, data)
