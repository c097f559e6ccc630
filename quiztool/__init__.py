"""QuizTool package initialization.

Exposes the quiz-session engine: load a question bank, drive a
`SessionController` with actions, and persist state plus the
wrong-answer ledger between invocations.
"""

from __future__ import annotations

from .app.events import Action, EventBus, dispatch
from .app.session_controller import SessionController
from .app.session_state import QuizMode, SessionState, SessionStatus
from .bank.question_bank import QuestionBank, QuestionRecord, load_bank_csv
from .policy.question_selector import NextQuestionResult, select_next
from .policy.wrong_answer_ledger import LedgerEntry, WrongAnswerLedger

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Action",
    "EventBus",
    "dispatch",
    "SessionController",
    "QuizMode",
    "SessionState",
    "SessionStatus",
    "QuestionBank",
    "QuestionRecord",
    "load_bank_csv",
    "NextQuestionResult",
    "select_next",
    "LedgerEntry",
    "WrongAnswerLedger",
]
