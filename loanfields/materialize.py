"""Project instance prefixes of the field map into typed records."""
from __future__ import annotations

import re
from typing import List, Mapping, Union

from loanfields.discovery import ordered_prefixes, prefix_index
from loanfields.families import BOOLEAN, Family, resolve_family
from loanfields.models import EntityRecord


def materialize(
    values: Mapping[str, str], prefix: str, family: Union[str, Family]
) -> EntityRecord:
    """Build the record stored under ``prefix``.

    Never fails and never mutates ``values``: absent string attributes read
    as ``""`` and a boolean attribute is true only for the literal ``"true"``.
    """
    fam = resolve_family(family)
    data = {"id": prefix}
    for attr in fam.attributes():
        raw = values.get(fam.key(prefix, attr.path))
        if attr.kind == BOOLEAN:
            data[attr.name] = raw == "true"
        elif raw is not None:
            data[attr.name] = str(raw)
    return fam.record(**data)


def materialize_all(
    values: Mapping[str, str], family: Union[str, Family]
) -> List[EntityRecord]:
    fam = resolve_family(family)
    return [materialize(values, prefix, fam) for prefix in ordered_prefixes(values, fam)]


def empty_record(prefix: str, family: Union[str, Family], **overrides) -> EntityRecord:
    """Default record for a selection that has not been written yet."""
    fam = resolve_family(family)
    return fam.record(id=prefix, **overrides)


def display_name(record: EntityRecord, family: Union[str, Family]) -> str:
    """Header text for a record: its first non-empty title attribute, else ``Lender 3``."""
    fam = resolve_family(family)
    for name in fam.title_attributes:
        value = getattr(record, name, "")
        if value:
            return value
    index = prefix_index(record.id, fam)
    if index:
        return f"{fam.label} {index}"
    return fam.label


def as_number(text, default: float = 0.0) -> float:
    """Parse stored decimal text such as ``"$1,250.50"``.

    Values are entered through currency and percentage inputs, so everything
    except digits, the decimal point and a minus sign is dropped before
    parsing.  Blank or unparseable text falls back to ``default``.
    """
    if text is None:
        return default
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    cleaned = re.sub(r"[^0-9.\-]", "", str(text))
    try:
        return float(cleaned)
    except ValueError:
        return default
