"""Field map storage.

A deal's entity data is one flat ``{key: text}`` map.  ``FieldStore`` is the
read/write interface the rest of the package works through; concrete stores
keep the map in a plain dict or in ``st.session_state`` so it survives
Streamlit reruns.  The session-backed map can be persisted to ``SESSION_FILE``.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, MutableMapping, Optional

import streamlit as st

from loanfields.audit import AuditLog

SESSION_FILE = "session_data.json"
SESSION_KEY = "deal_fields"

logger = logging.getLogger("loanfields.state")


def to_text(value: Any) -> str:
    """Serialize a field value the way the field map stores it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FieldStore:
    """Base read/write interface over a field map.

    Subclasses provide ``_data``.  Writes are coerced to text and, when an
    ``AuditLog`` is attached, recorded against ``user``.
    """

    def __init__(
        self,
        audit: Optional[AuditLog] = None,
        user: str = "system",
        allow_removal: bool = True,
    ) -> None:
        self.audit = audit
        self.user = user
        self.supports_removal = allow_removal

    def _data(self) -> MutableMapping[str, str]:
        raise NotImplementedError

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data().get(key, default)

    def keys(self) -> List[str]:
        return list(self._data().keys())

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data())

    def set(self, key: str, value: Any) -> None:
        text = to_text(value)
        data = self._data()
        old = data.get(key)
        data[key] = text
        if self.audit is not None and old != text:
            self.audit.record(self.user, key, old, text)

    def remove_prefix(self, prefix: str) -> List[str]:
        """Remove every key under ``prefix.`` and return the removed keys."""
        if not self.supports_removal:
            raise NotImplementedError(f"{type(self).__name__} cannot remove keys")
        data = self._data()
        marker = prefix + "."
        removed = [k for k in data if k.startswith(marker)]
        for key in removed:
            old = data.pop(key)
            if self.audit is not None:
                self.audit.record(self.user, key, old, None)
        return removed

    def discard_prefix(self, prefix: str) -> List[str]:
        """Remove ``prefix``'s keys, or blank them when this store cannot remove keys."""
        if self.supports_removal:
            return self.remove_prefix(prefix)
        marker = prefix + "."
        blanked = [k for k in self._data() if k.startswith(marker)]
        for key in blanked:
            self.set(key, "")
        return blanked


class DictFieldStore(FieldStore):
    """In-memory store; the given dict is used by reference."""

    def __init__(self, values: Optional[Dict[str, str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.values = values if values is not None else {}

    def _data(self) -> MutableMapping[str, str]:
        return self.values


class SessionFieldStore(FieldStore):
    """Store backed by ``st.session_state[key]``."""

    def __init__(self, key: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.key = key or SESSION_KEY

    def _data(self) -> MutableMapping[str, str]:
        return st.session_state.setdefault(self.key, {})


def _serializable(key: Any, value: Any) -> bool:
    return isinstance(key, str) and isinstance(value, str)


def load_fields(path: Optional[str] = None) -> Dict[str, str]:
    """Read a field map from ``path`` (default ``SESSION_FILE``).

    A missing file loads as an empty map.  An unreadable file is logged and
    also loads as empty so a corrupt session never blocks data entry.
    """
    path = path or SESSION_FILE
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("could not read field map from %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring %s: expected an object, got %s", path, type(data).__name__)
        return {}
    fields = {k: v for k, v in data.items() if _serializable(k, v)}
    skipped = len(data) - len(fields)
    if skipped:
        logger.warning("skipped %d non-text entries in %s", skipped, path)
    return fields


def save_fields(values: Dict[str, str], path: Optional[str] = None) -> None:
    """Persist the text entries of ``values`` to ``path`` (default ``SESSION_FILE``)."""
    path = path or SESSION_FILE
    data = {k: v for k, v in values.items() if _serializable(k, v)}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, sort_keys=True)


def load_state() -> None:
    """Restore the session field map from ``SESSION_FILE`` without clobbering live values."""
    fields = st.session_state.setdefault(SESSION_KEY, {})
    for key, val in load_fields().items():
        fields.setdefault(key, val)


def save_state() -> None:
    """Persist the session field map to ``SESSION_FILE``."""
    save_fields(SessionFieldStore().snapshot())
