"""Keep at most one instance per family flagged primary."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from loanfields.families import Family, NoPrimaryAttributeError, resolve_family
from loanfields.materialize import materialize_all
from loanfields.models import EntityRecord

logger = logging.getLogger("loanfields.primary")


def _primary_attribute(fam: Family) -> str:
    if fam.primary_attribute is None:
        raise NoPrimaryAttributeError(f"{fam.name} has no primary attribute")
    return fam.primary_attribute


def set_primary(
    store,
    family: Union[str, Family],
    prefix: str,
    flag: bool = True,
    instances: Optional[Iterable[EntityRecord]] = None,
) -> None:
    """Set ``prefix``'s primary flag through ``store``.

    Setting it true writes ``"false"`` on every other instance of the family,
    whether or not it was already false.  Setting it false touches only
    ``prefix``.
    """
    fam = resolve_family(family)
    attribute = _primary_attribute(fam)
    if flag:
        if instances is None:
            instances = materialize_all(store.snapshot(), fam)
        for record in instances:
            if record.id != prefix:
                store.set(fam.key(record.id, attribute), "false")
        logger.debug("%s is now the primary %s", prefix, fam.name)
    store.set(fam.key(prefix, attribute), "true" if flag else "false")


def primary_prefixes(values, family: Union[str, Family]) -> List[str]:
    """Prefixes currently flagged primary, in display order."""
    fam = resolve_family(family)
    attribute = _primary_attribute(fam)
    field = fam.field_for(attribute)
    return [
        record.id
        for record in materialize_all(values, fam)
        if getattr(record, field)
    ]
