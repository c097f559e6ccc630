from __future__ import annotations

"""Schema constants and Pydantic models for persisted quiz state.

Session state round-trips through JSON; the wrong-answer ledger through
Parquet. Validators repair corrupted fields instead of rejecting the record.
"""

import json
from typing import Any, List, Literal

from pydantic import BaseModel, Field, field_validator

# --- Constants ---

StatusName = Literal["not_started", "active", "complete"]
ModeName = Literal["normal", "retry_wrong"]

STATUSES = {"not_started", "active", "complete"}
MODES = {"normal", "retry_wrong"}

LEDGER_DTYPES = {
    "question": "string",
    "category": "string",
    "miss_count": "UInt32",
}


def _coerce_text_list(v: Any) -> List[str]:
    """Accept a list or a JSON-array string; anything unparsable becomes []."""
    if isinstance(v, str):
        if not v.strip():
            return []
        try:
            v = json.loads(v)
        except ValueError:
            return []
    if not isinstance(v, (list, tuple, set)):
        return []
    seen: dict[str, None] = {}
    for item in v:
        if isinstance(item, str) and item:
            seen.setdefault(item, None)
    return list(seen)


def _coerce_count(v: Any) -> int:
    try:
        n = int(v)
    except (TypeError, ValueError, OverflowError):
        return 0
    return n if n >= 0 else 0


# --- Pydantic models ---

class SessionStateRow(BaseModel):
    category: str = ""
    status: StatusName = "not_started"
    mode: ModeName = "normal"
    questions_answered: int = Field(default=0, ge=0)
    used_questions: List[str] = Field(default_factory=list)
    wrong_questions: List[str] = Field(default_factory=list)
    right_count: int = Field(default=0, ge=0)
    wrong_count: int = Field(default=0, ge=0)
    current_question: str = ""
    current_answer: str = ""
    answer_visible: bool = False

    @field_validator("used_questions", "wrong_questions", mode="before")
    @classmethod
    def _text_lists(cls, v: Any) -> List[str]:
        return _coerce_text_list(v)

    @field_validator("questions_answered", "right_count", "wrong_count", mode="before")
    @classmethod
    def _counts(cls, v: Any) -> int:
        return _coerce_count(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> str:
        return v if isinstance(v, str) and v in STATUSES else "not_started"

    @field_validator("mode", mode="before")
    @classmethod
    def _mode(cls, v: Any) -> str:
        return v if isinstance(v, str) and v in MODES else "normal"

    @field_validator("answer_visible", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return v is True or v == 1

    @field_validator("category", "current_question", "current_answer", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)


class LedgerRow(BaseModel):
    question: str = Field(min_length=1)
    category: str
    miss_count: int = Field(ge=1)
