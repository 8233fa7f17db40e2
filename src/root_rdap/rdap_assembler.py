"""
RDAP document assembly.

Turns a parsed DomainRecord plus the reference data into the JSON-ready
RDAP domain object written to ``<dir>/<tld>.json``.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

import idna

from .audit_logger import AuditLogger
from .enums import LogLevel
from .models import DomainRecord, Link, Remark
from .reference_data import ReferenceData

WHOIS_HOST = "whois.iana.org"

RDAP_CONFORMANCE = ["rdap_level_0"]

LAST_UPDATE_ACTION = "last update of RDAP database"

ROOT_ZONE_DB_URL = "https://www.iana.org/domains/root/db/{tld}.html"
ABOUT_RDAP_URL = "https://about.rdap.org"
REGISTRY_AGREEMENT_URL = "https://www.icann.org/en/registry-agreements/details/{tld}"
SPECIFICATION_13_URL = (
    "https://newgtlds.icann.org/en/applicants/agb/base-agreement-contracting/"
    "specification-13-applications"
)

RDAP_MEDIA_TYPE = "application/rdap+json"

ABOUT_NOTICE = Remark(
    title="About This Service",
    description=(
        "Please note that this RDAP service is NOT provided by the IANA.",
        f"For more information, please see {ABOUT_RDAP_URL}",
    ),
)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) as an RFC 3339 UTC timestamp."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class RDAPAssembler:
    """
    Builds RDAP domain documents.

    The ``clock`` returns the moment stamped on the "last update of RDAP
    database" event; it is the only non-deterministic input.
    """

    def __init__(
        self,
        reference_data: Optional[ReferenceData] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._reference_data = reference_data or ReferenceData()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logger

    def assemble(self, record: DomainRecord) -> dict[str, Any]:
        """Produce the RDAP document tree for one TLD."""
        tld = record.ldh_name
        rdap_url = self._reference_data.rdap_url_for(tld)
        gtld = self._reference_data.gtld_info_for(tld)

        remarks = list(record.remarks)
        links = [
            Link(
                title="Entry for this TLD in the Root Zone Database",
                href=ROOT_ZONE_DB_URL.format(tld=tld),
            ),
            Link(title="About RDAP", href=ABOUT_RDAP_URL),
        ]

        if record.registration_url:
            links.append(
                Link(title="URL for registration services", href=record.registration_url)
            )

        if rdap_url:
            remarks.append(
                Remark(
                    title="RDAP Service",
                    description=(f"The RDAP service for this TLD is {rdap_url}",),
                    links=(self._rdap_link(rdap_url),),
                )
            )
            # Only emitted alongside a registration URL, as earlier releases did
            if record.registration_url:
                links.append(self._rdap_link(rdap_url))

        unicode_name = None
        if gtld:
            links.append(
                Link(
                    title="Registry Agreement",
                    href=REGISTRY_AGREEMENT_URL.format(tld=tld),
                )
            )
            if gtld.application_id:
                remarks.append(
                    Remark(
                        title="New gTLD Application ID",
                        description=(gtld.application_id,),
                    )
                )
            if gtld.specification13:
                remarks.append(
                    Remark(
                        title="Specification 13",
                        description=(
                            "The Registry Agreement for this TLD includes Specification 13, "
                            "which exempts the registry operator from the Registry Operator "
                            "Code of Conduct (Specification 9) for .Brand TLDs.",
                        ),
                        links=(
                            Link(title="About Specification 13", href=SPECIFICATION_13_URL),
                        ),
                    )
                )
            unicode_name = gtld.u_label

        if unicode_name is None and tld.startswith("xn--"):
            unicode_name = self._decode_a_label(tld)

        notices = [ABOUT_NOTICE]
        if record.comments:
            notices.append(Remark(title="Comments", description=record.comments))

        events = [event.to_dict() for event in record.events]
        events.append(
            {"eventAction": LAST_UPDATE_ACTION, "eventDate": utc_timestamp(self._clock())}
        )

        document: dict[str, Any] = {
            "objectClassName": "domain",
            "rdapConformance": list(RDAP_CONFORMANCE),
            "ldhName": record.ldh_name,
            "handle": record.handle,
            "port43": WHOIS_HOST,
            "events": events,
            "notices": [notice.to_dict() for notice in notices],
            "links": [link.to_dict() for link in links],
            "entities": [entity.to_dict() for entity in record.sorted_entities()],
        }

        if record.status:
            document["status"] = list(record.status)
        if record.nameservers:
            document["nameservers"] = [ns.to_dict() for ns in record.nameservers]
        if record.secure_dns is not None:
            document["secureDNS"] = record.secure_dns.to_dict()
        if remarks:
            document["remarks"] = [remark.to_dict() for remark in remarks]
        if unicode_name:
            document["unicodeName"] = unicode_name

        return document

    def _rdap_link(self, rdap_url: str) -> Link:
        return Link(
            title="RDAP service for this TLD",
            href=rdap_url,
            media_type=RDAP_MEDIA_TYPE,
        )

    def _decode_a_label(self, tld: str) -> Optional[str]:
        try:
            return idna.decode(tld)
        except (idna.IDNAError, UnicodeError) as e:
            if self._logger:
                self._logger.log(
                    LogLevel.WARN,
                    "RDAPAssembler",
                    f"Unable to decode A-label '{tld}': {e}",
                    {"tld": tld},
                )
            return None
