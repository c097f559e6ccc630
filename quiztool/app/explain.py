from __future__ import annotations

"""Explain Mode: one-line traces of what the quiz engine decided.

Turned on by `--explain` or `ui.explain: true`. Each line reads
`[EXPLAIN] <event> :: <json payload>`. Events currently emitted:

- controller: category_selected, mode_changed, start_rejected, session_started,
  answer_marked, session_stopped, question_shown, session_ended
- store: state_unreadable, state_invalid, ledger_unreadable, ledger_row_dropped
- bus: listener_failed
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def format_line(event: str, payload: Dict[str, Any] | None = None) -> str:
    try:
        body = json.dumps(payload or {}, separators=(",", ":"), default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return f"[EXPLAIN] {event}"
    return f"[EXPLAIN] {event} :: {body}"


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if _ENABLED:
        print(format_line(event, payload))
