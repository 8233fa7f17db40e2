"""
Root RDAP - RDAP responses for the DNS root zone.

This package scrapes the IANA whois service for every TLD in the root zone
and generates RDAP domain objects for each of them, plus an aggregate
search-results document, ready to be served by a web server.
"""

__version__ = "0.2.0"
__author__ = "Root RDAP Team"

from root_rdap.exceptions import (
    RootRDAPError,
    ConfigurationError,
    NetworkError,
    WhoisParseError,
    OutputError,
)
from root_rdap.enums import (
    LogLevel,
    WhoisKey,
    DomainStatus,
    FetchErrorCode,
)
from root_rdap.models import (
    Link,
    Remark,
    Event,
    Nameserver,
    DSData,
    SecureDNS,
    Entity,
    DomainRecord,
    GTLDInfo,
)
from root_rdap.vcard import (
    VCardBuilder,
    EntityBuilder,
)
from root_rdap.whois_parser import (
    DomainRecordBuilder,
    WhoisParser,
    parse_whois_lines,
)
from root_rdap.reference_data import (
    ReferenceData,
    ReferenceDataLoader,
    parse_bootstrap,
    parse_gtlds,
)
from root_rdap.rdap_assembler import (
    RDAPAssembler,
)
from root_rdap.aggregate import (
    AggregateCollector,
)
from root_rdap.cache import (
    FileCache,
)
from root_rdap.tld_registry import (
    TLDListLoader,
    parse_tld_list,
)
from root_rdap.whois_client import (
    WhoisClient,
    WhoisResponse,
    WhoisError,
)
from root_rdap.output_writer import (
    OutputWriter,
    encode_document,
)
from root_rdap.audit_logger import (
    AuditLogger,
    LogEntry,
)
from root_rdap.config import (
    SourceConfig,
    WhoisConfig,
    LoggingConfig,
    GeneratorConfig,
    load_config_from_env,
)
from root_rdap.generator import (
    RootZoneGenerator,
    WhoisRecordFetcher,
    GenerationResult,
)
from root_rdap.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "RootRDAPError",
    "ConfigurationError",
    "NetworkError",
    "WhoisParseError",
    "OutputError",
    # Enums
    "LogLevel",
    "WhoisKey",
    "DomainStatus",
    "FetchErrorCode",
    # Models
    "Link",
    "Remark",
    "Event",
    "Nameserver",
    "DSData",
    "SecureDNS",
    "Entity",
    "DomainRecord",
    "GTLDInfo",
    # vCard
    "VCardBuilder",
    "EntityBuilder",
    # Whois Parser
    "DomainRecordBuilder",
    "WhoisParser",
    "parse_whois_lines",
    # Reference Data
    "ReferenceData",
    "ReferenceDataLoader",
    "parse_bootstrap",
    "parse_gtlds",
    # RDAP Assembler
    "RDAPAssembler",
    # Aggregate
    "AggregateCollector",
    # Cache
    "FileCache",
    # TLD Registry
    "TLDListLoader",
    "parse_tld_list",
    # WHOIS Client
    "WhoisClient",
    "WhoisResponse",
    "WhoisError",
    # Output
    "OutputWriter",
    "encode_document",
    # Logging
    "AuditLogger",
    "LogEntry",
    # Configuration
    "SourceConfig",
    "WhoisConfig",
    "LoggingConfig",
    "GeneratorConfig",
    "load_config_from_env",
    # Generator
    "RootZoneGenerator",
    "WhoisRecordFetcher",
    "GenerationResult",
    # CLI
    "cli_main",
    "create_parser",
]
