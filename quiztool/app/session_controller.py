from __future__ import annotations

"""Session Controller: orchestrates quiz actions, selection, and the ledger.

Every public method is one synchronous action. The controller is the only
writer of the `SessionState` and the `WrongAnswerLedger` it is handed; the
question bank is treated as read-only. Invalid actions (answering while no
quiz runs, toggling retry mid-session) degrade to no-ops or a forced stop.
"""

import random
from typing import Any, Dict, Optional

from ..bank.question_bank import QuestionBank
from ..policy.question_selector import DEFAULT_QUESTION_LIMIT, NextQuestionResult, select_next
from ..policy.wrong_answer_ledger import WrongAnswerLedger
from .events import EventBus
from .explain import trace as xtrace
from .session_state import QuizMode, SessionState, SessionStatus


NO_CATEGORY_MESSAGE = "Please select a category first."


class SessionController:
    def __init__(
        self,
        bank: QuestionBank,
        *,
        state: Optional[SessionState] = None,
        ledger: Optional[WrongAnswerLedger] = None,
        cfg: Optional[Dict[str, Any]] = None,
        bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.bank = bank
        self.state = state if state is not None else SessionState()
        self.ledger = ledger if ledger is not None else WrongAnswerLedger()
        self.cfg = cfg or {}
        self.bus = bus or EventBus()
        self.rng = rng
        self.last_result: Optional[NextQuestionResult] = None

    @property
    def question_limit(self) -> int:
        try:
            return int(self.cfg.get("quiz", {}).get("question_limit", DEFAULT_QUESTION_LIMIT))
        except (TypeError, ValueError):
            return DEFAULT_QUESTION_LIMIT

    # --- actions ---

    def select_category(self, category: str) -> None:
        st = self.state
        st.category = category
        st.status = SessionStatus.NOT_STARTED
        st.reset_progress()
        st.wrong_questions.clear()
        st.clear_display()
        st.answer_visible = False
        self.last_result = None
        xtrace("category_selected", {"category": category, "mode": st.mode.value})
        self.bus.emit("session_reset", {"category": category})

    def set_retry_mode(self, enabled: bool) -> None:
        st = self.state
        new_mode = QuizMode.RETRY_WRONG if enabled else QuizMode.NORMAL
        if new_mode is st.mode:
            return
        if st.is_active:
            # Retry mode can only be chosen before a run starts
            self.stop_quiz()
        st.mode = new_mode
        xtrace("mode_changed", {"mode": new_mode.value})

    def start_quiz(self) -> None:
        st = self.state
        if not st.category:
            st.status = SessionStatus.NOT_STARTED
            st.current_question = NO_CATEGORY_MESSAGE
            st.current_answer = ""
            xtrace("start_rejected", {"reason": "no_category"})
            return

        st.status = SessionStatus.NOT_STARTED
        st.reset_progress()
        if st.mode is QuizMode.NORMAL:
            st.wrong_questions.clear()
        xtrace(
            "session_started",
            {"category": st.category, "mode": st.mode.value, "wrong": len(st.wrong_questions)},
        )
        self._advance()

    def stop_quiz(self) -> None:
        """Stop the running quiz; missed questions are kept for a retry run."""
        st = self.state
        st.status = SessionStatus.NOT_STARTED
        st.reset_progress()
        st.clear_display()
        st.answer_visible = False
        xtrace("session_stopped", {"category": st.category})
        self.bus.emit("session_reset", {"category": st.category})

    def mark_answer(self, correct: bool) -> None:
        st = self.state
        if not st.is_active:
            return
        question = st.current_question
        if correct:
            st.right_count += 1
            if st.mode is QuizMode.RETRY_WRONG:
                st.wrong_questions.discard(question)
                self.ledger.decrement(question)
        else:
            st.wrong_count += 1
            st.add_wrong(question)
            self.ledger.increment(question, st.category)
        xtrace(
            "answer_marked",
            {
                "question": question,
                "correct": bool(correct),
                "right": st.right_count,
                "wrong": st.wrong_count,
                "misses": self.ledger.miss_count(question),
            },
        )
        self.bus.emit("answer_marked", {"question": question, "correct": bool(correct)})
        self._advance()

    def toggle_show_answer(self, show: bool) -> None:
        st = self.state
        if not st.is_active:
            return
        st.answer_visible = bool(show)
        self._apply_answer_visibility()

    # --- internals ---

    def _apply_answer_visibility(self) -> None:
        st = self.state
        if st.answer_visible and st.current_question:
            st.current_answer = self.bank.find_answer(st.category, st.current_question) or ""
        else:
            st.current_answer = ""

    def _advance(self) -> None:
        st = self.state
        result = select_next(self.bank, st, limit=self.question_limit, rng=self.rng)
        self.last_result = result

        if not result.is_terminal:
            st.status = SessionStatus.ACTIVE
            st.current_question = result.question
            self._apply_answer_visibility()
            xtrace("question_shown", {"question": result.question, "answered": st.questions_answered})
            self.bus.emit("question_shown", {"question": result.question})
            return

        # Ending a running session completes it; failing to start leaves it idle
        st.status = SessionStatus.COMPLETE if st.is_active else SessionStatus.NOT_STARTED
        st.used_questions.clear()
        st.current_question = result.message
        st.current_answer = ""
        xtrace("session_ended", {"outcome": result.outcome, "status": st.status.value})
        self.bus.emit(
            "session_ended",
            {"outcome": result.outcome, "message": result.message, "status": st.status.value},
        )
