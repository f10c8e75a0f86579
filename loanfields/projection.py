"""Canonical view projection.

Shared detail forms are written against a fixed prefix (``borrower.email``,
``charges.total_due``).  The read projection rewrites the selected instance's
keys onto that prefix and hides sibling instances; the write projection maps
a canonical key back onto the selected instance before it reaches the store.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

from loanfields.discovery import belongs_to_family
from loanfields.families import Family, resolve_family
from loanfields.primary import set_primary


def project_read(
    values: Mapping[str, str], prefix: str, family: Union[str, Family]
) -> Dict[str, str]:
    fam = resolve_family(family)
    selected = prefix + "."
    canonical = fam.canonical_prefix + "."
    out: Dict[str, str] = {}
    projected: Dict[str, str] = {}
    for key, value in values.items():
        if key.startswith(selected):
            projected[canonical + key[len(selected):]] = value
        elif belongs_to_family(key, fam) is None:
            out[key] = value
    # the selected instance shadows any stray key already using the canonical prefix
    out.update(projected)
    return out


def project_key(key: str, prefix: str, family: Union[str, Family]) -> str:
    fam = resolve_family(family)
    canonical = fam.canonical_prefix + "."
    if key.startswith(canonical):
        return prefix + "." + key[len(canonical):]
    return key


class CanonicalView:
    """Read/write adapter that lets one form edit any instance of a family."""

    def __init__(self, store, family: Union[str, Family], prefix: str) -> None:
        self.store = store
        self.family = resolve_family(family)
        self.prefix = prefix

    def values(self) -> Dict[str, str]:
        return project_read(self.store.snapshot(), self.prefix, self.family)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values().get(key, default)

    def set(self, key: str, value) -> str:
        """Write ``value`` under the real key and return that key."""
        actual = project_key(key, self.prefix, self.family)
        fam = self.family
        if (
            fam.primary_attribute is not None
            and actual == fam.key(self.prefix, fam.primary_attribute)
        ):
            set_primary(self.store, fam, self.prefix, _is_true(value))
        else:
            self.store.set(actual, value)
        return actual


def _is_true(value) -> bool:
    return value is True or value == "true"
