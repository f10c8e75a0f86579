"""Simple audit log of field map writes."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional


@dataclass
class AuditEntry:
    user: str
    key: str
    old_value: Optional[str]
    new_value: Optional[str]
    timestamp: datetime


class AuditLog:
    """In-memory audit log suitable for tests and small apps."""

    def __init__(self) -> None:
        self.entries: List[AuditEntry] = []

    def record(
        self, user: str, key: str, old_value: Optional[str], new_value: Optional[str]
    ) -> None:
        """Record a change to a field with user and timestamp.

        ``old_value`` is ``None`` for a newly created key and ``new_value`` is
        ``None`` for a removed one.
        """
        self.entries.append(
            AuditEntry(
                user=user,
                key=key,
                old_value=old_value,
                new_value=new_value,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def for_prefix(self, prefix: str) -> List[AuditEntry]:
        """Entries touching one instance, e.g. everything under ``lender2.``."""
        marker = prefix + "."
        return [e for e in self.entries if e.key.startswith(marker)]

    def as_dict(self) -> List[dict]:
        """Return log entries as dictionaries for persistence or inspection."""
        return [
            {
                "user": e.user,
                "key": e.key,
                "old": e.old_value,
                "new": e.new_value,
                "timestamp": e.timestamp.isoformat(),
            }
            for e in self.entries
        ]
