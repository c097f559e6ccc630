from __future__ import annotations

"""Tagged action dispatch and a tiny pub/sub event bus.

Each front-end trigger (category dropdown, start box, right/wrong boxes,
show-answer box, retry toggle) is expressed as an `Action` and routed to
exactly one `SessionController` method.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Literal

from .explain import trace as xtrace

if TYPE_CHECKING:  # pragma: no cover
    from .session_controller import SessionController


ActionKind = Literal[
    "select_category",
    "set_retry_mode",
    "start_quiz",
    "mark_answer",
    "toggle_show_answer",
    "stop_quiz",
]


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    value: Any = None


def _select_category(c: "SessionController", v: Any) -> None:
    c.select_category(str(v or ""))


def _set_retry_mode(c: "SessionController", v: Any) -> None:
    c.set_retry_mode(bool(v))


def _start_quiz(c: "SessionController", v: Any) -> None:
    c.start_quiz()


def _mark_answer(c: "SessionController", v: Any) -> None:
    c.mark_answer(bool(v))


def _toggle_show_answer(c: "SessionController", v: Any) -> None:
    c.toggle_show_answer(bool(v))


def _stop_quiz(c: "SessionController", v: Any) -> None:
    c.stop_quiz()


HANDLERS: Dict[str, Callable[["SessionController", Any], None]] = {
    "select_category": _select_category,
    "set_retry_mode": _set_retry_mode,
    "start_quiz": _start_quiz,
    "mark_answer": _mark_answer,
    "toggle_show_answer": _toggle_show_answer,
    "stop_quiz": _stop_quiz,
}


def dispatch(controller: "SessionController", action: Action) -> None:
    try:
        handler = HANDLERS[action.kind]
    except KeyError:
        raise KeyError(f"Unknown action kind: {action.kind}") from None
    handler(controller, action.value)


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for h in self._subs.get(event, []):
            try:
                h(payload)
            except Exception as exc:
                # Best effort; a failing listener must not break the action
                xtrace("listener_failed", {"event": event, "error": repr(exc)})
