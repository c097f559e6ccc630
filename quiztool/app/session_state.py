from __future__ import annotations

"""Session state: the mutable record describing one quiz run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Set


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETE = "complete"


class QuizMode(str, Enum):
    NORMAL = "normal"
    RETRY_WRONG = "retry_wrong"


@dataclass
class SessionState:
    category: str = ""
    status: SessionStatus = SessionStatus.NOT_STARTED
    mode: QuizMode = QuizMode.NORMAL
    questions_answered: int = 0
    used_questions: Set[str] = field(default_factory=set)
    wrong_questions: Set[str] = field(default_factory=set)
    right_count: int = 0
    wrong_count: int = 0
    current_question: str = ""
    current_answer: str = ""
    answer_visible: bool = False

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    def clear_display(self) -> None:
        self.current_question = ""
        self.current_answer = ""

    def reset_progress(self) -> None:
        """Zero the per-run counters and forget which questions were shown."""
        self.used_questions.clear()
        self.questions_answered = 0
        self.right_count = 0
        self.wrong_count = 0

    def add_wrong(self, question: str) -> bool:
        """Track a missed question; returns False if it was already tracked."""
        if question in self.wrong_questions:
            return False
        self.wrong_questions.add(question)
        return True

    def wrong_in_category(self, texts: Set[str]) -> Set[str]:
        return self.wrong_questions & texts
