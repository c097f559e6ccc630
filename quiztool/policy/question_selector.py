from __future__ import annotations

"""Question selection policy.

`select_next` filters the bank down to the eligible questions for the
session (category, not yet shown, and in retry mode previously missed),
picks one uniformly at random and marks it used. When nothing is eligible
it returns a terminal outcome instead of a question.
"""

import random
from dataclasses import dataclass
from typing import Dict, Literal, Optional

from ..app.session_state import QuizMode, SessionState
from ..bank.question_bank import QuestionBank, QuestionRecord


DEFAULT_QUESTION_LIMIT = 5

Outcome = Literal[
    "question",
    "no_questions",
    "no_more_questions",
    "quiz_complete",
    "no_wrong_questions",
    "retry_complete",
    "retry_round_complete",
]

MESSAGES: Dict[str, str] = {
    "no_questions": "No questions available for this category.",
    "no_more_questions": "Quiz Complete! No more unique questions available for this category.",
    "quiz_complete": "Quiz Complete! You have answered {limit} questions.",
    "no_wrong_questions": "No wrong questions to retry for this category.",
    "retry_complete": "All wrong questions answered correctly!",
    "retry_round_complete": "Retry round complete! {remaining} question(s) still need work.",
}


@dataclass(frozen=True)
class NextQuestionResult:
    outcome: Outcome
    record: Optional[QuestionRecord] = None
    message: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.outcome != "question"

    @property
    def question(self) -> str:
        return self.record.question_text if self.record is not None else ""

    @property
    def answer(self) -> str:
        return self.record.answer_text if self.record is not None else ""


def _terminal(outcome: Outcome, **fmt: object) -> NextQuestionResult:
    return NextQuestionResult(outcome=outcome, message=MESSAGES[outcome].format(**fmt))


def select_next(
    bank: QuestionBank,
    state: SessionState,
    *,
    limit: int = DEFAULT_QUESTION_LIMIT,
    rng: Optional[random.Random] = None,
) -> NextQuestionResult:
    """Pick the next question for `state` or report why the session ends.

    Mutates `state.used_questions` (and, in normal mode,
    `state.questions_answered`) when a question is picked.
    """
    retry = state.mode is QuizMode.RETRY_WRONG

    # Cap is checked before advancing to the (limit + 1)th pick
    if not retry and state.questions_answered >= limit:
        return _terminal("quiz_complete", limit=limit)

    in_category = bank.records_for_category(state.category)
    eligible = [r for r in in_category if r.question_text not in state.used_questions]
    if retry:
        eligible = [r for r in eligible if r.question_text in state.wrong_questions]

    if not eligible:
        if retry:
            remaining = state.wrong_in_category({r.question_text for r in in_category})
            if not state.used_questions:
                return _terminal("no_wrong_questions")
            if remaining:
                return _terminal("retry_round_complete", remaining=len(remaining))
            return _terminal("retry_complete")
        if not in_category:
            return _terminal("no_questions")
        return _terminal("no_more_questions")

    pick = (rng or random).choice(eligible)
    state.used_questions.add(pick.question_text)
    if not retry:
        state.questions_answered += 1
    return NextQuestionResult(outcome="question", record=pick)
