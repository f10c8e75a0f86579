"""Family descriptors for the repeated entities stored in a deal's field map."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple, Type, Union

from loanfields.models import (
    BorrowerRecord,
    ChargeRecord,
    CoBorrowerRecord,
    EntityRecord,
    InsuranceRecord,
    LenderRecord,
    LienRecord,
    NoteRecord,
    PropertyRecord,
)

STRING = "string"
BOOLEAN = "boolean"


class UnknownFamilyError(KeyError):
    """Raised when a family name is not registered in ``FAMILIES``."""


class NoPrimaryAttributeError(ValueError):
    """Raised when a primary flag is requested for a family without one."""


class Attribute(NamedTuple):
    name: str
    path: str
    kind: str
    default: Union[str, bool]


@dataclass(frozen=True)
class Family:
    name: str
    record: Type[EntityRecord]
    label: str
    canonical: Optional[str] = None
    allows_bare: bool = False
    primary_attribute: Optional[str] = None
    title_attributes: Tuple[str, ...] = ()

    @property
    def canonical_prefix(self) -> str:
        return self.canonical or self.name

    @property
    def pattern(self) -> "re.Pattern[str]":
        return re.compile(rf"^({re.escape(self.name)}[0-9]+)\.")

    def attributes(self) -> Tuple[Attribute, ...]:
        """Return the attribute schema as ``(name, path, kind, default)`` tuples."""
        attrs = []
        for name, path in self.record.attribute_paths().items():
            if self.record.is_boolean(name):
                attrs.append(Attribute(name, path, BOOLEAN, False))
            else:
                attrs.append(Attribute(name, path, STRING, ""))
        return tuple(attrs)

    def field_for(self, path: str) -> str:
        for attr in self.attributes():
            if attr.path == path:
                return attr.name
        raise KeyError(path)

    def key(self, prefix: str, path: str) -> str:
        return f"{prefix}.{path}"


FAMILIES: Dict[str, Family] = {
    "borrower": Family(
        name="borrower",
        record=BorrowerRecord,
        label="Borrower",
        allows_bare=True,
        primary_attribute="is_primary",
        title_attributes=("full_name", "last_name"),
    ),
    "coborrower": Family(
        name="coborrower",
        record=CoBorrowerRecord,
        label="Co-Borrower",
        allows_bare=True,
        title_attributes=("full_name", "last_name"),
    ),
    "lender": Family(
        name="lender",
        record=LenderRecord,
        label="Lender",
        primary_attribute="is_primary",
        title_attributes=("full_name", "last_name"),
    ),
    "property": Family(
        name="property",
        record=PropertyRecord,
        label="Property",
        primary_attribute="primary_property",
        title_attributes=("description", "street"),
    ),
    "lien": Family(
        name="lien",
        record=LienRecord,
        label="Lien",
        title_attributes=("holder",),
    ),
    "charge": Family(
        name="charge",
        record=ChargeRecord,
        label="Charge",
        canonical="charges",
        title_attributes=("description",),
    ),
    "insurance": Family(
        name="insurance",
        record=InsuranceRecord,
        label="Insurance",
        title_attributes=("description", "company_name"),
    ),
    "notes_entry": Family(
        name="notes_entry",
        record=NoteRecord,
        label="Note",
        title_attributes=("name", "reference"),
    ),
}


def get_family(name: str) -> Family:
    try:
        return FAMILIES[name]
    except KeyError:
        raise UnknownFamilyError(name) from None


def resolve_family(family: Union[str, Family]) -> Family:
    """Accept either a registered family name or a ``Family`` descriptor."""
    if isinstance(family, Family):
        return family
    return get_family(family)
