"""
Configuration dataclasses for the root zone RDAP generator.

This module defines the configuration structures used throughout the
generator (data sources, whois access, caching, concurrency and logging)
and loads them from the environment, including a ``.env`` file if present.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .audit_logger import OUTPUT_FORMATS
from .cache import DEFAULT_TTL_SECONDS
from .enums import LogLevel
from .reference_data import BOOTSTRAP_URL, GTLD_URL
from .tld_registry import TLD_LIST_URL
from .whois_client import DEFAULT_TIMEOUT_SECONDS, DEFAULT_WHOIS_HOST, DEFAULT_WHOIS_PORT

ENV_PREFIX = "ROOTRDAP_"


@dataclass
class SourceConfig:
    """Where the TLD list and reference documents are downloaded from."""

    tld_list_url: str = TLD_LIST_URL
    bootstrap_url: str = BOOTSTRAP_URL
    gtld_url: str = GTLD_URL


@dataclass
class WhoisConfig:
    """Port-43 service queried for each TLD."""

    host: str = DEFAULT_WHOIS_HOST
    port: int = DEFAULT_WHOIS_PORT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'

    @property
    def log_level(self) -> LogLevel:
        return LogLevel(self.level)


@dataclass
class GeneratorConfig:
    """Main configuration combining all sub-configurations."""

    output_dir: Path = field(default_factory=Path.cwd)
    sources: SourceConfig = field(default_factory=SourceConfig)
    whois: WhoisConfig = field(default_factory=WhoisConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    http_timeout_seconds: float = 30.0
    cache_ttl_seconds: float = DEFAULT_TTL_SECONDS
    workers: int = 4
    user_agent: str = "rootrdap"

    def validate(self) -> list[str]:
        """Return a list of problems; empty if the configuration is usable."""
        errors = []
        if self.workers < 1:
            errors.append(f"workers must be at least 1, got {self.workers}")
        if self.whois.timeout_seconds <= 0:
            errors.append("whois timeout must be positive")
        if self.http_timeout_seconds <= 0:
            errors.append("HTTP timeout must be positive")
        if self.cache_ttl_seconds < 0:
            errors.append("cache TTL must not be negative")
        if not 0 < self.whois.port < 65536:
            errors.append(f"invalid whois port: {self.whois.port}")
        if self.logging.output_format not in OUTPUT_FORMATS:
            errors.append(f"invalid log format: {self.logging.output_format}")
        if self.logging.level not in {level.value for level in LogLevel}:
            errors.append(f"invalid log level: {self.logging.level}")
        return errors


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(ENV_PREFIX + name, str(default)))
    except ValueError:
        return default


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env.get(ENV_PREFIX + name, str(default)))
    except ValueError:
        return default


def _str_env(env: Mapping[str, str], name: str, default: str) -> str:
    return (env.get(ENV_PREFIX + name, "") or "").strip() or default


def load_config_from_env(
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = None,
) -> GeneratorConfig:
    """
    Build a GeneratorConfig from ``ROOTRDAP_*`` environment variables.

    Args:
        env: Mapping to read instead of os.environ (no .env loading then)
        dotenv_path: Explicit .env file; by default one is searched for

    Returns:
        GeneratorConfig; malformed numbers fall back to their defaults
    """
    if env is None:
        load_dotenv(dotenv_path)
        env = os.environ

    defaults = GeneratorConfig()

    return GeneratorConfig(
        sources=SourceConfig(
            tld_list_url=_str_env(env, "TLD_LIST_URL", defaults.sources.tld_list_url),
            bootstrap_url=_str_env(env, "BOOTSTRAP_URL", defaults.sources.bootstrap_url),
            gtld_url=_str_env(env, "GTLD_URL", defaults.sources.gtld_url),
        ),
        whois=WhoisConfig(
            host=_str_env(env, "WHOIS_HOST", defaults.whois.host),
            port=_int_env(env, "WHOIS_PORT", defaults.whois.port),
            timeout_seconds=_float_env(env, "WHOIS_TIMEOUT", defaults.whois.timeout_seconds),
        ),
        logging=LoggingConfig(
            level=_str_env(env, "LOG_LEVEL", defaults.logging.level).lower(),
            output_format=_str_env(env, "LOG_FORMAT", defaults.logging.output_format).lower(),
        ),
        http_timeout_seconds=_float_env(env, "HTTP_TIMEOUT", defaults.http_timeout_seconds),
        cache_ttl_seconds=_float_env(env, "CACHE_TTL", defaults.cache_ttl_seconds),
        workers=_int_env(env, "WORKERS", defaults.workers),
    )
