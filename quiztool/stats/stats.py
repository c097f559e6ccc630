from __future__ import annotations

"""Session score stats: progress, percentages, and summary text."""

from typing import Dict, List

from ..app.session_state import QuizMode, SessionState
from ..policy.wrong_answer_ledger import WrongAnswerLedger


def score_percent(right: int, total: int) -> int:
    """Whole-number percentage; 0 when nothing was answered."""
    if total <= 0:
        return 0
    return int(round(right * 100.0 / total))


def progress_label(state: SessionState, limit: int) -> str:
    """'3/5' in normal mode; retry runs have no fixed length."""
    if state.mode is QuizMode.RETRY_WRONG:
        return f"{len(state.used_questions)} retried"
    return f"{state.questions_answered}/{limit}"


def session_stats(state: SessionState) -> Dict:
    answered = state.right_count + state.wrong_count
    return {
        "answered": answered,
        "right": state.right_count,
        "wrong": state.wrong_count,
        "percent": score_percent(state.right_count, answered),
        "missed_this_session": len(state.wrong_questions),
    }


def format_summary(state: SessionState) -> str:
    """Return a human-readable summary of the session score."""
    s = session_stats(state)
    lines = [
        f"Your final score: {s['percent']}% ({s['right']} out of {s['answered']} correct)",
        f"Right: {s['right']}  Wrong: {s['wrong']}",
    ]
    if state.wrong_questions:
        lines.append(f"Missed this session: {len(state.wrong_questions)}")
    return "\n".join(lines)


def format_ledger(ledger: WrongAnswerLedger, category: str | None = None) -> str:
    if category:
        items = ledger.entries_for_category(category)
    else:
        items = sorted(
            ((q, ledger.get(q)) for q in ledger),
            key=lambda kv: (-kv[1].miss_count, kv[1].category, kv[0]),
        )
    if not items:
        return "No missed questions recorded."
    lines: List[str] = []
    for q, e in items:
        lines.append(f"[{e.category}] x{e.miss_count}  {q}")
    return "\n".join(lines)
