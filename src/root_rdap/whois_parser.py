"""
Whois response parser for IANA root zone records.

Converts the ``key: value`` text returned by ``whois.iana.org`` for a TLD
into a DomainRecord. Keys are matched exactly against WhoisKey; anything
outside that set, and any status outside DomainStatus, raises
WhoisParseError, which aborts the whole run.

Example:
    >>> record = parse_whois_lines("xyz", ["domain: XYZ", "status: ACTIVE"])
    >>> record.status
    ('active',)
"""

import re
from collections.abc import Container, Iterable
from typing import Callable, Optional, Union

from .enums import DomainStatus, WhoisKey
from .exceptions import WhoisParseError
from .models import DomainRecord, DSData, Event, Link, Nameserver, Remark, SecureDNS
from .vcard import EntityBuilder

KEY_VALUE_SEPARATOR = re.compile(r": *")

REGISTRATION_URL_PATTERN = re.compile(
    r"Registration information: (https?://\S+)", re.IGNORECASE
)

EVENT_ACTIONS = {
    WhoisKey.CREATED: "registration",
    WhoisKey.CHANGED: "last changed",
}

RECOGNISED_STATUSES = frozenset(status.value for status in DomainStatus)


def split_line(line: str) -> tuple[str, str]:
    """Split a whois line on its first colon into key and value."""
    parts = KEY_VALUE_SEPARATOR.split(line, maxsplit=1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def _numeric(token: str) -> Union[int, str]:
    return int(token) if token.isascii() and token.isdigit() else token


def parse_nameserver(value: str) -> Nameserver:
    """
    Parse an ``nserver`` value: a hostname followed by its addresses.

    Addresses are sorted into families by a plain character test: a token
    containing ``.`` is IPv4, one containing ``:`` is IPv6. A token can end
    up in both lists or in neither.
    """
    tokens = value.split()
    if not tokens:
        return Nameserver(ldh_name="")
    hostname, addresses = tokens[0], tokens[1:]
    return Nameserver(
        ldh_name=hostname,
        ipv4=tuple(ip for ip in addresses if "." in ip),
        ipv6=tuple(ip for ip in addresses if ":" in ip),
    )


def parse_ds_rdata(value: str) -> DSData:
    """Parse a DS record in presentation format (tag, alg, type, digest)."""
    fields = value.split(None, 3)
    fields += [""] * (4 - len(fields))
    key_tag, algorithm, digest_type, digest = fields
    return DSData(
        key_tag=_numeric(key_tag),
        algorithm=_numeric(algorithm),
        digest_type=_numeric(digest_type),
        digest=digest,
    )


class DomainRecordBuilder:
    """
    Single-pass accumulator for one TLD's whois lines.

    Feed lines in response order with feed(), then call build() to get
    the immutable DomainRecord.
    """

    def __init__(self, tld: str, is_gtld: bool = False) -> None:
        self._tld = tld
        self._is_gtld = is_gtld
        self._status: list[str] = []
        self._nameservers: list[Nameserver] = []
        self._ds_data: list[DSData] = []
        self._delegation_signed = False
        self._events: list[Event] = []
        self._remarks: list[Remark] = []
        self._comments: list[str] = []
        self._registration_url: Optional[str] = None
        self._entities = EntityBuilder(tld)

        self._handlers: dict[WhoisKey, Callable[[str], None]] = {
            WhoisKey.DOMAIN: self._discard,
            WhoisKey.DOMAIN_ACE: self._discard,
            WhoisKey.SOURCE: self._handle_source,
            WhoisKey.NSERVER: self._handle_nserver,
            WhoisKey.DS_RDATA: self._handle_ds_rdata,
            WhoisKey.STATUS: self._handle_status,
            WhoisKey.CREATED: lambda value: self._handle_event(WhoisKey.CREATED, value),
            WhoisKey.CHANGED: lambda value: self._handle_event(WhoisKey.CHANGED, value),
            WhoisKey.REMARKS: self._handle_remarks,
            WhoisKey.CONTACT: self._entities.start_contact,
            WhoisKey.NAME: self._entities.add_name,
            WhoisKey.ORGANISATION: self._entities.add_organisation,
            WhoisKey.ADDRESS: self._entities.add_address,
            WhoisKey.PHONE: self._entities.add_phone,
            WhoisKey.FAX_NO: self._entities.add_fax,
            WhoisKey.E_MAIL: self._entities.add_email,
            WhoisKey.WHOIS: self._handle_whois,
        }

    def handled_keys(self) -> set[WhoisKey]:
        return set(self._handlers)

    def feed(self, line: str) -> None:
        """Process one raw whois line."""
        line = line.rstrip("\r\n")

        if line.startswith("%"):
            comment = line[1:].strip()
            if comment:
                self._comments.append(comment)
            return

        if not line.strip():
            return

        raw_key, value = split_line(line)
        try:
            key = WhoisKey(raw_key)
        except ValueError:
            raise WhoisParseError(
                code="unknown_key",
                message=f"Unknown key '{raw_key}'",
                details={"tld": self._tld, "key": raw_key, "line": line},
            ) from None

        self._handlers[key](value)

    def feed_all(self, lines: Iterable[str]) -> "DomainRecordBuilder":
        for line in lines:
            self.feed(line)
        return self

    def build(self) -> DomainRecord:
        secure_dns = None
        if self._delegation_signed:
            secure_dns = SecureDNS(
                delegation_signed=True,
                ds_data=tuple(self._ds_data),
            )

        return DomainRecord(
            ldh_name=self._tld,
            handle=self._tld,
            status=tuple(self._status),
            nameservers=tuple(self._nameservers),
            secure_dns=secure_dns,
            events=tuple(self._events),
            remarks=tuple(self._remarks),
            entities=self._entities.build(),
            registration_url=self._registration_url,
            comments=tuple(self._comments),
        )

    # Key handlers

    def _discard(self, value: str) -> None:
        pass

    def _handle_source(self, value: str) -> None:
        self._remarks.append(Remark(title="Source", description=(value,)))

    def _handle_nserver(self, value: str) -> None:
        self._nameservers.append(parse_nameserver(value))

    def _handle_ds_rdata(self, value: str) -> None:
        self._delegation_signed = True
        self._ds_data.append(parse_ds_rdata(value))

    def _handle_status(self, value: str) -> None:
        status = value.lower()
        if status not in RECOGNISED_STATUSES:
            raise WhoisParseError(
                code="unknown_status",
                message=f"Unknown status '{value}'",
                details={"tld": self._tld, "value": value},
            )
        self._status.append(status)

    def _handle_event(self, key: WhoisKey, value: str) -> None:
        self._events.append(Event(action=EVENT_ACTIONS[key], date=value))

    def _handle_remarks(self, value: str) -> None:
        links: tuple[Link, ...] = ()
        match = REGISTRATION_URL_PATTERN.search(value)
        if match:
            self._registration_url = match.group(1)
            links = (
                Link(
                    href=self._registration_url,
                    title="Registration information",
                    value=self._registration_url,
                ),
            )
        self._remarks.append(Remark(title="Remark", description=(value,), links=links))

    def _handle_whois(self, value: str) -> None:
        host = value.strip()
        if not host:
            if not self._is_gtld:
                return
            # gTLD registries conventionally serve whois at this name
            host = f"whois.nic.{self._tld}"
        self._remarks.append(
            Remark(
                title="Whois Service",
                description=(
                    f"The port-43 whois service for this TLD is {host.upper()}.",
                ),
            )
        )


class WhoisParser:
    """Parses whois responses, knowing which TLDs are gTLDs."""

    def __init__(self, gtlds: Optional[Container[str]] = None) -> None:
        self._gtlds = gtlds if gtlds is not None else frozenset()

    def parse(self, tld: str, lines: Iterable[str]) -> DomainRecord:
        builder = DomainRecordBuilder(tld, is_gtld=tld in self._gtlds)
        return builder.feed_all(lines).build()


def parse_whois_lines(
    tld: str,
    lines: Iterable[str],
    gtlds: Optional[Container[str]] = None,
) -> DomainRecord:
    """Parse one TLD's whois lines into a DomainRecord."""
    return WhoisParser(gtlds).parse(tld, lines)
