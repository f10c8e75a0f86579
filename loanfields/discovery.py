"""Prefix discovery and allocation over a flat field map."""
from __future__ import annotations

from typing import Iterable, List, Optional, Set, Union

from loanfields.families import Family, resolve_family


def discover_prefixes(values: Iterable[str], family: Union[str, Family]) -> Set[str]:
    """Return the distinct instance prefixes of ``family`` present in ``values``.

    ``values`` may be the field map itself or any iterable of its keys.  The
    bare prefix (``borrower``) is included only for families that allow an
    implicit base instance.
    """
    fam = resolve_family(family)
    pattern = fam.pattern
    bare = fam.name + "."
    found: Set[str] = set()
    has_bare = False
    for key in values:
        match = pattern.match(key)
        if match:
            found.add(match.group(1))
        elif fam.allows_bare and key.startswith(bare):
            has_bare = True
    if has_bare:
        found.add(fam.name)
    return found


def prefix_index(prefix: str, family: Union[str, Family]) -> int:
    """Numeric suffix of ``prefix``; ``0`` for the bare prefix or a garbled suffix."""
    fam = resolve_family(family)
    suffix = prefix[len(fam.name):]
    if not suffix:
        return 0
    try:
        return int(suffix)
    except ValueError:
        return 0


def sort_prefixes(prefixes: Iterable[str], family: Union[str, Family]) -> List[str]:
    fam = resolve_family(family)
    return sorted(
        prefixes,
        key=lambda p: (p != fam.name, prefix_index(p, fam), p),
    )


def ordered_prefixes(values: Iterable[str], family: Union[str, Family]) -> List[str]:
    """Discovered prefixes, bare first and then by increasing suffix."""
    fam = resolve_family(family)
    return sort_prefixes(discover_prefixes(values, fam), fam)


def next_index(values: Iterable[str], family: Union[str, Family]) -> int:
    """Smallest positive ``N`` such that ``family<N>`` is not in use.

    The bare instance never blocks ``1``.
    """
    fam = resolve_family(family)
    taken = discover_prefixes(values, fam)
    n = 1
    while f"{fam.name}{n}" in taken:
        n += 1
    return n


def next_prefix(values: Iterable[str], family: Union[str, Family]) -> str:
    fam = resolve_family(family)
    return f"{fam.name}{next_index(values, fam)}"


def belongs_to_family(key: str, family: Union[str, Family]) -> Optional[str]:
    """Return the instance prefix owning ``key``, or ``None`` for unrelated keys."""
    fam = resolve_family(family)
    match = fam.pattern.match(key)
    if match:
        return match.group(1)
    if fam.allows_bare and key.startswith(fam.name + "."):
        return fam.name
    return None
