"""Tabular list views of materialized records."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from loanfields.families import Family, resolve_family
from loanfields.materialize import as_number, display_name
from loanfields.models import EntityRecord


def records_frame(
    records: Iterable[EntityRecord],
    family: Union[str, Family],
    columns: Optional[Sequence[str]] = None,
    numeric_columns: Sequence[str] = (),
) -> pd.DataFrame:
    """One row per record, keeping the order the records arrive in.

    ``columns`` restricts and orders the attribute columns after the leading
    ``id`` and ``display_name`` columns.  ``numeric_columns`` are parsed from
    their stored text, with blanks as ``0.0``.
    """
    fam = resolve_family(family)
    known = [attr.name for attr in fam.attributes()]
    names: List[str] = list(columns) if columns is not None else known
    unknown = [n for n in names if n not in known]
    unknown += [n for n in numeric_columns if n not in names and n not in unknown]
    if unknown:
        raise ValueError(f"unknown {fam.name} columns: {', '.join(unknown)}")
    rows = [
        {
            "id": record.id,
            "display_name": display_name(record, fam),
            **{name: getattr(record, name) for name in names},
        }
        for record in records
    ]
    df = pd.DataFrame(rows, columns=["id", "display_name", *names])
    for col in numeric_columns:
        df[col] = df[col].map(as_number).astype(float)
    return df
