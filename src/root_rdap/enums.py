"""
Enumeration types for the root zone RDAP generator.

These enums provide type-safe constants for log levels, the closed set of
whois keys understood by the parser, domain lifecycle statuses and
transport error codes.
"""

from enum import Enum


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]


_LEVEL_RANKS = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}


class WhoisKey(Enum):
    """
    Keys recognised in IANA whois responses.

    Matching is case-sensitive: ``WhoisKey("nserver")`` succeeds,
    ``WhoisKey("NSERVER")`` raises ValueError.
    """

    DOMAIN = "domain"
    DOMAIN_ACE = "domain-ace"
    SOURCE = "source"
    NSERVER = "nserver"
    DS_RDATA = "ds-rdata"
    STATUS = "status"
    CREATED = "created"
    CHANGED = "changed"
    REMARKS = "remarks"
    CONTACT = "contact"
    NAME = "name"
    ORGANISATION = "organisation"
    ADDRESS = "address"
    PHONE = "phone"
    FAX_NO = "fax-no"
    E_MAIL = "e-mail"
    WHOIS = "whois"


class DomainStatus(Enum):
    """Lifecycle statuses a root zone entry can carry."""

    ACTIVE = "active"
    REMOVED = "removed"
    FORMER = "former"


class FetchErrorCode(Enum):
    """Error codes for fetch operations."""

    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
