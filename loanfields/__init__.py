"""Namespaced entity store for loan-servicing deal data.

Borrowers, co-borrowers, lenders, properties and the other repeated deal
entities live in one flat ``{key: text}`` field map under numbered prefixes
(``borrower2.email``, ``lender3.tax_id``).  This package discovers those
prefixes, turns them into typed records, allocates new ones, projects a
selected instance onto a canonical prefix for shared forms, and keeps the
primary flag unique within a family."""

from importlib import metadata

from loanfields.arena import EntityArena
from loanfields.audit import AuditLog
from loanfields.collection import EntityCollection
from loanfields.discovery import (
    discover_prefixes,
    next_index,
    next_prefix,
    ordered_prefixes,
)
from loanfields.families import (
    FAMILIES,
    Family,
    NoPrimaryAttributeError,
    UnknownFamilyError,
    get_family,
)
from loanfields.materialize import materialize, materialize_all
from loanfields.primary import set_primary
from loanfields.projection import CanonicalView, project_key, project_read
from loanfields.state import DictFieldStore, FieldStore, SessionFieldStore
from loanfields.tables import records_frame

try:
    __version__ = metadata.version("loanfields")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "AuditLog",
    "CanonicalView",
    "DictFieldStore",
    "EntityArena",
    "EntityCollection",
    "FAMILIES",
    "Family",
    "FieldStore",
    "NoPrimaryAttributeError",
    "SessionFieldStore",
    "UnknownFamilyError",
    "discover_prefixes",
    "get_family",
    "materialize",
    "materialize_all",
    "next_index",
    "next_prefix",
    "ordered_prefixes",
    "project_key",
    "project_read",
    "records_frame",
    "set_primary",
]
