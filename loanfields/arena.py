"""Records of one family keyed by a stable synthetic id.

Prefixes like ``lender3`` are only how an instance is spelled in the flat
field map; they shift meaning when instances are deleted and re-added.  An
``EntityArena`` gives each record an id that lives for the whole editing
session and only assigns prefixes when the records are written back.
"""
from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Mapping, Optional, Union

from loanfields.discovery import discover_prefixes
from loanfields.families import Family, NoPrimaryAttributeError, resolve_family
from loanfields.materialize import materialize_all
from loanfields.models import EntityRecord

logger = logging.getLogger("loanfields.arena")


class EntityArena:
    def __init__(self, family: Union[str, Family]) -> None:
        self.family = resolve_family(family)
        self._records: Dict[str, EntityRecord] = {}

    @classmethod
    def from_fields(
        cls, values: Mapping[str, str], family: Union[str, Family]
    ) -> "EntityArena":
        arena = cls(family)
        for record in materialize_all(values, arena.family):
            arena._records[uuid.uuid4().hex] = record
        return arena

    def ids(self) -> List[str]:
        return list(self._records)

    def records(self) -> List[EntityRecord]:
        return list(self._records.values())

    def get(self, ident: str) -> EntityRecord:
        return self._records[ident]

    def add(self, record: Optional[EntityRecord] = None) -> str:
        """Add a record that has no prefix yet; returns its id."""
        record = record or self.family.record()
        ident = uuid.uuid4().hex
        self._records[ident] = record.model_copy(update={"id": ""})
        return ident

    def update(self, ident: str, **changes) -> EntityRecord:
        record = self._records[ident].model_copy(update=changes)
        self._records[ident] = record
        return record

    def remove(self, ident: str) -> EntityRecord:
        return self._records.pop(ident)

    def set_primary(self, ident: str, flag: bool = True) -> None:
        fam = self.family
        if fam.primary_attribute is None:
            raise NoPrimaryAttributeError(f"{fam.name} has no primary attribute")
        field = fam.field_for(fam.primary_attribute)
        if flag:
            for other in self._records:
                if other != ident:
                    self.update(other, **{field: False})
        self.update(ident, **{field: flag})

    def to_fields(self) -> Dict[str, str]:
        """Flatten to field map entries, assigning the smallest free prefix to new records."""
        fam = self.family
        taken = {r.id for r in self._records.values() if r.id}
        out: Dict[str, str] = {}
        n = 1
        for ident, record in list(self._records.items()):
            if not record.id:
                while f"{fam.name}{n}" in taken:
                    n += 1
                prefix = f"{fam.name}{n}"
                taken.add(prefix)
                record = self.update(ident, id=prefix)
                logger.debug("assigned %s to %s", prefix, ident)
            for path, text in record.to_fields().items():
                out[fam.key(record.id, path)] = text
        return out

    def sync(self, store) -> None:
        """Write the arena back to ``store`` and drop instances that were removed."""
        fields = self.to_fields()
        live = {r.id for r in self._records.values()}
        for prefix in discover_prefixes(store.keys(), self.family) - live:
            store.discard_prefix(prefix)
        for key, text in fields.items():
            store.set(key, text)
