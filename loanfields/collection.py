"""Per-family operations over a field store.

``EntityCollection`` is what a section screen works with: list the instances
of one family, add or edit one through a modal, delete one, flip the primary
flag, or hand a canonical view of the selected instance to a detail form.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

import pandas as pd

from loanfields.discovery import discover_prefixes, next_prefix, ordered_prefixes
from loanfields.families import Family, resolve_family
from loanfields.materialize import empty_record, materialize, materialize_all
from loanfields.models import EntityRecord
from loanfields.primary import primary_prefixes, set_primary
from loanfields.projection import CanonicalView
from loanfields.state import FieldStore, to_text
from loanfields.tables import records_frame

logger = logging.getLogger("loanfields.collection")


class EntityCollection:
    def __init__(self, store: FieldStore, family: Union[str, Family]) -> None:
        self.store = store
        self.family = resolve_family(family)

    def prefixes(self) -> List[str]:
        return ordered_prefixes(self.store.keys(), self.family)

    def records(self) -> List[EntityRecord]:
        return materialize_all(self.store.snapshot(), self.family)

    def get(self, prefix: str) -> EntityRecord:
        """The record under ``prefix``, or defaults if nothing is stored there yet."""
        if prefix in discover_prefixes(self.store.keys(), self.family):
            return materialize(self.store.snapshot(), prefix, self.family)
        return empty_record(prefix, self.family)

    def next_prefix(self) -> str:
        return next_prefix(self.store.keys(), self.family)

    def create(self, record: Optional[EntityRecord] = None) -> str:
        """Allocate a new prefix and write a full set of attributes under it."""
        return self.save(record or self.family.record(), prefix=self.next_prefix())

    def save(self, record: EntityRecord, prefix: Optional[str] = None) -> str:
        """Write every attribute of ``record``.

        The target is ``prefix`` if given, else ``record.id``, else a freshly
        allocated prefix.  A record saved as primary demotes its siblings.
        """
        fam = self.family
        prefix = prefix or record.id or self.next_prefix()
        fields = record.to_fields()
        for path, text in fields.items():
            if path != fam.primary_attribute:
                self.store.set(fam.key(prefix, path), text)
        if fam.primary_attribute is not None:
            set_primary(self.store, fam, prefix, fields[fam.primary_attribute] == "true")
        logger.debug("saved %s (%d attributes)", prefix, len(fields))
        return prefix

    def update(self, prefix: str, path: str, value) -> None:
        fam = self.family
        if path == fam.primary_attribute:
            set_primary(self.store, fam, prefix, to_text(value) == "true")
        else:
            self.store.set(fam.key(prefix, path), value)

    def delete(self, prefix: str) -> List[str]:
        """Remove ``prefix``'s keys, or blank them when the store cannot remove keys."""
        keys = self.store.discard_prefix(prefix)
        logger.debug("deleted %s (%d keys)", prefix, len(keys))
        return keys

    def set_primary(self, prefix: str, flag: bool = True) -> None:
        set_primary(self.store, self.family, prefix, flag, instances=self.records())

    def primary(self) -> Optional[EntityRecord]:
        found = primary_prefixes(self.store.snapshot(), self.family)
        if not found:
            return None
        return materialize(self.store.snapshot(), found[0], self.family)

    def view(self, prefix: str) -> CanonicalView:
        return CanonicalView(self.store, self.family, prefix)

    def frame(
        self,
        columns: Optional[Sequence[str]] = None,
        numeric_columns: Sequence[str] = (),
    ) -> pd.DataFrame:
        return records_frame(self.records(), self.family, columns, numeric_columns)
