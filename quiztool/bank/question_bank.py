from __future__ import annotations

"""Question bank: read-only, category-tagged question/answer records.

Records keep the order they were loaded in. A CSV bank mirrors the classic
datastore layout: one header row, then `id, category, question, answer`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pandas as pd


BANK_COLUMNS = ["id", "category", "question", "answer"]


@dataclass(frozen=True)
class QuestionRecord:
    id: str
    category: str
    question_text: str
    answer_text: str


class QuestionBank:
    def __init__(self, records: Iterable[QuestionRecord]) -> None:
        self._records: List[QuestionRecord] = list(records)
        self._by_category: Dict[str, List[QuestionRecord]] = {}
        for rec in self._records:
            self._by_category.setdefault(rec.category, []).append(rec)

    def __len__(self) -> int:
        return len(self._records)

    def records_for_category(self, category: str) -> List[QuestionRecord]:
        return list(self._by_category.get(category, []))

    def categories(self) -> List[str]:
        """Distinct categories in order of first appearance."""
        return list(self._by_category.keys())

    def find_answer(self, category: str, question_text: str) -> Optional[str]:
        """Linear scan keyed on (category, question text)."""
        for rec in self._records:
            if rec.category == category and rec.question_text == question_text:
                return rec.answer_text
        return None

    @classmethod
    def from_rows(cls, rows: Iterable[Dict[str, object]]) -> "QuestionBank":
        records: List[QuestionRecord] = []
        for idx, row in enumerate(rows, start=1):
            category = str(row.get("category") or "").strip()
            question = str(row.get("question") or "").strip()
            if not category or not question:
                continue
            records.append(
                QuestionRecord(
                    id=str(row.get("id") or idx),
                    category=category,
                    question_text=question,
                    answer_text=str(row.get("answer") or ""),
                )
            )
        return cls(records)


def load_bank_csv(path: Path) -> QuestionBank:
    """Load a question bank from CSV.

    Missing columns are tolerated (filled with empty strings); rows without a
    category or question text are skipped.
    """
    df = pd.read_csv(Path(path), dtype="string", keep_default_na=False)
    df.columns = [str(c).strip().lower() for c in df.columns]
    for col in BANK_COLUMNS:
        if col not in df.columns:
            df[col] = ""
    return QuestionBank.from_rows(df[BANK_COLUMNS].to_dict(orient="records"))
