"""
Entity and jCard construction for whois contact blocks.

Whois responses list contacts as runs of ``name:``/``address:``/``phone:``
lines following a ``contact:`` line. The builders here collect those runs
into one entity per contact role, with vCard properties kept in the order
they were seen.
"""

from typing import Optional

from .models import Entity

# Number of structured components in an ADR value (RFC 6350 section 6.3.1)
ADR_COMPONENTS = 7

ADDRESS_SEPARATOR = "\n"


def empty_vcard() -> list[list]:
    """Return the property list of an empty version 4.0 vCard."""
    return [["version", {}, "text", "4.0"]]


class VCardBuilder:
    """Accumulates jCard properties for a single contact."""

    def __init__(self) -> None:
        self._properties: list[list] = empty_vcard()
        self._adr: Optional[list] = None

    def add(self, name: str, value: str, parameters: Optional[dict] = None) -> None:
        self._properties.append([name, dict(parameters or {}), "text", value])

    def add_address_line(self, line: str) -> None:
        """
        Add one line of a postal address.

        The first line creates the ADR property; later lines extend its
        label so an entity never carries more than one ADR.
        """
        if self._adr is None:
            self._adr = ["adr", {"label": line}, "text", [""] * ADR_COMPONENTS]
            self._properties.append(self._adr)
        else:
            self._adr[1]["label"] = ADDRESS_SEPARATOR.join((self._adr[1]["label"], line))

    def build(self) -> tuple[list, ...]:
        # Copy so later builder calls can't leak into an emitted entity
        return tuple(
            [name, dict(params), value_type, list(value) if isinstance(value, list) else value]
            for name, params, value_type, value in self._properties
        )


class EntityBuilder:
    """
    Keeps exactly one vCard per contact role for a TLD.

    The role that contact detail lines apply to is whichever was declared
    most recently; it starts out as ``registrant``.
    """

    DEFAULT_ROLE = "registrant"

    def __init__(self, tld: str) -> None:
        self._tld = tld
        self._cards: dict[str, VCardBuilder] = {}
        self._current = self.DEFAULT_ROLE
        self.start_contact(self.DEFAULT_ROLE)

    @property
    def current_role(self) -> str:
        return self._current

    def start_contact(self, role: str) -> None:
        """Switch to ``role``, starting a fresh vCard for it."""
        self._current = role
        self._cards[role] = VCardBuilder()

    def current(self) -> VCardBuilder:
        return self._cards[self._current]

    def add_name(self, value: str) -> None:
        self.current().add("fn", value)

    def add_organisation(self, value: str) -> None:
        self.current().add("org", value)

    def add_address(self, value: str) -> None:
        self.current().add_address_line(value)

    def add_phone(self, value: str) -> None:
        self.current().add("tel", value, {"type": "voice"})

    def add_fax(self, value: str) -> None:
        self.current().add("tel", value, {"type": "fax"})

    def add_email(self, value: str) -> None:
        self.current().add("email", value)

    def build(self) -> dict[str, Entity]:
        """Return the entities keyed by role, sorted by role key."""
        return {
            role: Entity(
                handle=f"{self._tld}-{role}",
                roles=(role,),
                vcard=self._cards[role].build(),
            )
            for role in sorted(self._cards)
        }
