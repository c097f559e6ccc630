from __future__ import annotations

"""Wrong-answer ledger: cross-session miss counts keyed by question text.

Entries are created on the first miss and removed outright when a correct
retry answer would take the count from 1 to 0, so a stored count is always
at least 1.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional


@dataclass
class LedgerEntry:
    category: str
    miss_count: int = 1


class WrongAnswerLedger:
    def __init__(self) -> None:
        self._entries: Dict[str, LedgerEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, question: object) -> bool:
        return question in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, question: str) -> Optional[LedgerEntry]:
        return self._entries.get(question)

    def miss_count(self, question: str) -> int:
        entry = self._entries.get(question)
        return entry.miss_count if entry is not None else 0

    def increment(self, question: str, category: str) -> int:
        entry = self._entries.get(question)
        if entry is None:
            entry = LedgerEntry(category=category, miss_count=1)
            self._entries[question] = entry
        else:
            entry.miss_count += 1
        return entry.miss_count

    def decrement(self, question: str) -> int:
        """Lower the miss count; returns the remaining count (0 once removed)."""
        entry = self._entries.get(question)
        if entry is None:
            return 0
        if entry.miss_count > 1:
            entry.miss_count -= 1
            return entry.miss_count
        del self._entries[question]
        return 0

    def entries_for_category(self, category: str) -> List[tuple[str, LedgerEntry]]:
        """Entries for one category, most-missed first."""
        items = [(q, e) for q, e in self._entries.items() if e.category == category]
        return sorted(items, key=lambda kv: (-kv[1].miss_count, kv[0]))

    def to_rows(self) -> List[Dict[str, Any]]:
        return [
            {"question": q, "category": e.category, "miss_count": e.miss_count}
            for q, e in self._entries.items()
        ]

    @classmethod
    def from_rows(cls, rows: Iterable[Dict[str, Any]]) -> "WrongAnswerLedger":
        ledger = cls()
        for row in rows:
            count = int(row.get("miss_count", 0) or 0)
            if count < 1:
                continue
            ledger._entries[str(row["question"])] = LedgerEntry(
                category=str(row.get("category", "")),
                miss_count=count,
            )
        return ledger
