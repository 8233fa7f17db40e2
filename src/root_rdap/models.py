"""
Data models for the root zone RDAP generator.

This module defines the immutable records produced by the whois parser
(domain records, nameservers, DNSSEC data, events, remarks, entities) and
the gTLD metadata consumed by the RDAP assembler.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Link:
    """An RDAP link object."""

    href: str
    title: Optional[str] = None
    rel: str = "related"
    value: Optional[str] = None
    media_type: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"rel": self.rel, "href": self.href}
        if self.title is not None:
            data["title"] = self.title
        if self.value is not None:
            data["value"] = self.value
        if self.media_type is not None:
            data["type"] = self.media_type
        return data


@dataclass(frozen=True)
class Remark:
    """A remark or notice: title, description lines, optional links."""

    title: str
    description: tuple[str, ...]
    links: tuple[Link, ...] = ()

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "title": self.title,
            "description": list(self.description),
        }
        if self.links:
            data["links"] = [link.to_dict() for link in self.links]
        return data


@dataclass(frozen=True)
class Event:
    """A single RDAP event (e.g., registration, last changed)."""

    action: str
    date: str

    def to_dict(self) -> dict:
        return {"eventAction": self.action, "eventDate": self.date}


@dataclass(frozen=True)
class Nameserver:
    """A delegated nameserver with its glue addresses."""

    ldh_name: str
    ipv4: tuple[str, ...] = ()
    ipv6: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "objectClassName": "nameserver",
            "ldhName": self.ldh_name,
            "ipAddresses": {
                "v4": list(self.ipv4),
                "v6": list(self.ipv6),
            },
        }


@dataclass(frozen=True)
class DSData:
    """One DS record in presentation format."""

    key_tag: Union[int, str]
    algorithm: Union[int, str]
    digest_type: Union[int, str]
    digest: str

    def to_dict(self) -> dict:
        return {
            "keyTag": self.key_tag,
            "algorithm": self.algorithm,
            "digestType": self.digest_type,
            "digest": self.digest,
        }


@dataclass(frozen=True)
class SecureDNS:
    """DNSSEC delegation data for a TLD."""

    delegation_signed: bool
    ds_data: tuple[DSData, ...] = ()

    def to_dict(self) -> dict:
        return {
            "delegationSigned": self.delegation_signed,
            "dsData": [ds.to_dict() for ds in self.ds_data],
        }


@dataclass(frozen=True)
class Entity:
    """A contact (registrant, administrative, technical) as a jCard entity."""

    handle: str
    roles: tuple[str, ...]
    vcard: tuple[list, ...]

    def to_dict(self) -> dict:
        return {
            "objectClassName": "entity",
            "handle": self.handle,
            "roles": list(self.roles),
            "vcardArray": ["vcard", [list(prop) for prop in self.vcard]],
        }


@dataclass(frozen=True)
class DomainRecord:
    """Everything the whois response for one TLD told us."""

    ldh_name: str
    handle: str
    status: tuple[str, ...] = ()
    nameservers: tuple[Nameserver, ...] = ()
    secure_dns: Optional[SecureDNS] = None
    events: tuple[Event, ...] = ()
    remarks: tuple[Remark, ...] = ()
    entities: dict[str, Entity] = field(default_factory=dict)
    registration_url: Optional[str] = None
    comments: tuple[str, ...] = ()

    def sorted_entities(self) -> list[Entity]:
        """Return entities ordered by contact role key."""
        return [self.entities[key] for key in sorted(self.entities)]


@dataclass(frozen=True)
class GTLDInfo:
    """Registry metadata ICANN publishes for a generic TLD."""

    gtld: str
    application_id: Optional[str] = None
    specification13: bool = False
    u_label: Optional[str] = None
