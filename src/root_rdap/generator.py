"""
Root zone RDAP generator.

This module provides the orchestration layer that coordinates all components
to turn the IANA root zone into RDAP documents. It integrates:
- TLD list mirroring
- Reference data loading (RDAP bootstrap, gTLD registry)
- Cached whois fetching on a bounded worker pool
- Whois parsing and RDAP assembly
- Per-TLD and aggregate output

Whois fetches for different TLDs run concurrently, but parsing, writing and
aggregation happen one TLD at a time in list order, so ``_all.json`` keeps
the list order and a fatal error leaves no output for later TLDs.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import httpx

from . import __version__
from .aggregate import AGGREGATE_NAME, AggregateCollector
from .audit_logger import AuditLogger
from .cache import FileCache
from .config import GeneratorConfig
from .enums import LogLevel
from .exceptions import ConfigurationError
from .output_writer import OutputWriter
from .rdap_assembler import RDAPAssembler
from .reference_data import ReferenceData, ReferenceDataLoader
from .tld_registry import TLDListLoader
from .whois_client import WhoisClient
from .whois_parser import WhoisParser


class RecordFetcher(Protocol):
    """Supplies the raw whois lines for a TLD."""

    async def fetch(self, tld: str) -> list[str]:
        ...


@dataclass
class GenerationResult:
    """Outcome of a complete run."""

    tlds: list[str]
    written: list[Path] = field(default_factory=list)
    aggregate_path: Optional[Path] = None


class WhoisRecordFetcher:
    """
    Cached whois lookups.

    A cached ``<tld>.txt`` within the freshness window is used as is.
    Otherwise the whois server is queried and the answer cached. When the
    query fails a warning is logged and the stale cached copy, or nothing,
    is returned.
    """

    def __init__(
        self,
        cache: FileCache,
        whois_client: WhoisClient,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._cache = cache
        self._whois_client = whois_client
        self._logger = logger

    async def fetch(self, tld: str) -> list[str]:
        name = f"{tld}.txt"
        if self._cache.is_fresh(name):
            return self._cache.read_lines(name)

        self._log(LogLevel.INFO, f"Updating data for .{tld.upper()}", {"tld": tld})
        response = await self._whois_client.query(tld)

        if not response.ok:
            self._log(
                LogLevel.WARN,
                response.error.message,
                {"tld": tld, "code": response.error.code.value},
            )
            if self._cache.exists(name):
                return self._cache.read_lines(name)
            return []

        self._cache.write_text(name, response.raw_response or "")
        return response.lines()

    def _log(self, level: LogLevel, message: str, data: Optional[dict] = None) -> None:
        if self._logger:
            self._logger.log(level, "WhoisRecordFetcher", message, data)


class RootZoneGenerator:
    """
    Main orchestrator for a generation run.

    Coordinates loading, fetching, parsing, assembly and output with a
    bounded number of concurrent whois queries.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        logger: Optional[AuditLogger] = None,
        fetcher: Optional[RecordFetcher] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            config: Generator configuration
            logger: Optional logger for progress and warnings
            fetcher: Optional source of whois lines (defaults to the cached
                whois client)
            clock: Optional clock for the last-update event
        """
        self._config = config
        self._logger = logger
        self._clock = clock
        self._cache = FileCache(config.output_dir, config.cache_ttl_seconds)
        self._writer = OutputWriter(config.output_dir)
        self._fetcher = fetcher or WhoisRecordFetcher(
            self._cache,
            WhoisClient(
                host=config.whois.host,
                port=config.whois.port,
                timeout=config.whois.timeout_seconds,
            ),
            logger,
        )

    def check_output_dir(self) -> None:
        """
        Raises:
            ConfigurationError: If the output directory is missing or not a
                directory
        """
        output_dir = Path(self._config.output_dir)
        if not output_dir.is_dir():
            raise ConfigurationError(
                code="bad_directory",
                message=f"{output_dir} doesn't exist, please create it first",
                details={"path": str(output_dir)},
            )

    async def run(self) -> GenerationResult:
        """
        Perform a complete run: list, reference data, per-TLD documents,
        aggregate.

        Raises:
            ConfigurationError: Bad output directory
            NetworkError: TLD list unavailable and not cached
            WhoisParseError: Unknown whois key or status
            OutputError: A file could not be written
        """
        self.check_output_dir()

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.http_timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": f"{self._config.user_agent}/{__version__}"},
        ) as client:
            tlds = await TLDListLoader(
                self._cache, client, self._logger, self._config.sources.tld_list_url
            ).load()
            reference_data = await ReferenceDataLoader(
                self._cache,
                client,
                self._logger,
                bootstrap_url=self._config.sources.bootstrap_url,
                gtld_url=self._config.sources.gtld_url,
            ).load()

        return await self.generate(tlds, reference_data)

    async def generate(
        self,
        tlds: list[str],
        reference_data: Optional[ReferenceData] = None,
    ) -> GenerationResult:
        """Write ``<tld>.json`` for every TLD, then ``_all.json``."""
        reference_data = reference_data or ReferenceData()
        parser = WhoisParser(reference_data.gtlds)
        assembler = RDAPAssembler(reference_data, clock=self._clock, logger=self._logger)
        aggregate = AggregateCollector()
        result = GenerationResult(tlds=list(tlds))

        self._log(LogLevel.INFO, "Generating files", {"tlds": len(tlds)})

        semaphore = asyncio.Semaphore(self._config.workers)

        async def fetch(tld: str) -> list[str]:
            async with semaphore:
                return await self._fetcher.fetch(tld)

        tasks = [asyncio.create_task(fetch(tld)) for tld in tlds]
        try:
            for tld, task in zip(tlds, tasks):
                lines = await task
                document = assembler.assemble(parser.parse(tld, lines))
                result.written.append(self._writer.write(tld, document))
                aggregate.add(document)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        result.aggregate_path = self._writer.write(AGGREGATE_NAME, aggregate.document())
        self._log(LogLevel.INFO, "done", {"documents": len(aggregate)})
        return result

    def process(
        self,
        tld: str,
        lines: list[str],
        reference_data: Optional[ReferenceData] = None,
    ) -> dict[str, Any]:
        """Parse and assemble one TLD without writing anything."""
        reference_data = reference_data or ReferenceData()
        record = WhoisParser(reference_data.gtlds).parse(tld, lines)
        return RDAPAssembler(reference_data, clock=self._clock, logger=self._logger).assemble(record)

    def _log(self, level: LogLevel, message: str, data: Optional[dict] = None) -> None:
        if self._logger:
            self._logger.log(level, "RootZoneGenerator", message, data)
