from __future__ import annotations

"""CLI for QuizTool using SessionController and the file-backed store."""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..bank.question_bank import QuestionBank, load_bank_csv
from ..config.config import load_config, validate_config
from ..stats.stats import format_ledger, format_summary, progress_label
from ..storage.store import (
    export_ndjson,
    init_store,
    ledger_frame,
    load_ledger,
    load_session_state,
    save_ledger,
    save_session_state,
)
from ..util.randomness import make_rng
from .events import HANDLERS, Action, dispatch
from .explain import enable as explain_enable
from .session_controller import SessionController


_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off", ""}


def _parse_flag(value: Optional[str]) -> bool:
    v = (value or "").strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got '{value}'")


def _prepare(args: argparse.Namespace) -> Dict[str, Any]:
    cfg = validate_config(load_config(args.config))
    if getattr(args, "bank", None):
        cfg["bank"]["path"] = args.bank
    if getattr(args, "data_dir", None):
        cfg["storage"]["data_dir"] = args.data_dir
    if getattr(args, "explain", False) or cfg["ui"]["explain"]:
        explain_enable(True)
    return cfg


def _load_bank(cfg: Dict[str, Any]) -> Optional[QuestionBank]:
    path = Path(cfg["bank"]["path"])
    if not path.exists():
        print(f"ERROR: Question bank not found: {path}", file=sys.stderr)
        return None
    return load_bank_csv(path)


def _show(ctrl: SessionController) -> None:
    st = ctrl.state
    print("")
    print(f"Question: {st.current_question}")
    if st.answer_visible:
        print(f"Answer:   {st.current_answer or 'No answer available.'}")
    print(
        f"Progress: {progress_label(st, ctrl.question_limit)}  "
        f"Right: {st.right_count}  Wrong: {st.wrong_count}"
    )


def _cmd_categories(cfg: Dict[str, Any]) -> int:
    bank = _load_bank(cfg)
    if bank is None:
        return 1
    for c in bank.categories():
        print(f"{c}: {len(bank.records_for_category(c))} question(s)")
    return 0


def _cmd_run(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    bank = _load_bank(cfg)
    if bank is None:
        return 1
    data_dir = Path(cfg["storage"]["data_dir"])
    init_store(data_dir)

    state = load_session_state(data_dir)
    ctrl = SessionController(bank, state=state, ledger=load_ledger(data_dir), cfg=cfg, rng=make_rng())
    retry = args.retry or cfg["quiz"]["mode"] == "retry_wrong"

    # Keep last session's misses when resuming the same category
    if state.category != args.category:
        ctrl.select_category(args.category)
    ctrl.set_retry_mode(retry)
    if cfg["ui"]["show_summary"]:
        def _summary(payload: Dict[str, Any]) -> None:
            if payload.get("status") == "complete":
                print("\n" + format_summary(ctrl.state))

        ctrl.bus.subscribe("session_ended", _summary)

    ctrl.start_quiz()
    _show(ctrl)
    try:
        while ctrl.state.is_active:
            cmd = input("[r]ight / [w]rong / [a]nswer / [s]top / [q]uit > ").strip().lower()
            if cmd == "r":
                ctrl.mark_answer(True)
            elif cmd == "w":
                ctrl.mark_answer(False)
            elif cmd == "a":
                ctrl.toggle_show_answer(not ctrl.state.answer_visible)
            elif cmd == "s":
                ctrl.stop_quiz()
                print("Quiz stopped.")
                break
            elif cmd == "q":
                break
            else:
                print("Unknown command.")
                continue
            _show(ctrl)
    except (EOFError, KeyboardInterrupt):
        print("")
    finally:
        save_session_state(ctrl.state, data_dir)
        save_ledger(ctrl.ledger, data_dir)
    return 0


def _cmd_action(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    bank = _load_bank(cfg)
    if bank is None:
        return 1
    data_dir = Path(cfg["storage"]["data_dir"])
    init_store(data_dir)

    value: Any = args.value
    if args.kind in ("set_retry_mode", "mark_answer", "toggle_show_answer"):
        try:
            value = _parse_flag(args.value)
        except argparse.ArgumentTypeError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2

    ctrl = SessionController(
        bank,
        state=load_session_state(data_dir),
        ledger=load_ledger(data_dir),
        cfg=cfg,
        rng=make_rng(),
    )
    dispatch(ctrl, Action(kind=args.kind, value=value))
    save_session_state(ctrl.state, data_dir)
    save_ledger(ctrl.ledger, data_dir)

    st = ctrl.state
    print(f"Status: {st.status.value}  Mode: {st.mode.value}  Category: {st.category or '-'}")
    _show(ctrl)
    return 0


def _cmd_ledger(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    data_dir = Path(cfg["storage"]["data_dir"])
    ledger = load_ledger(data_dir)
    if args.export:
        df = ledger_frame(ledger)
        if args.category:
            df = df[df["category"] == args.category]
        export_ndjson(df, Path(args.export))
        print(f"Exported {len(df)} row(s) to {args.export}")
        return 0
    print(format_ledger(ledger, args.category))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="quiztool")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--data-dir", dest="data_dir", default=None, help="Override storage.data_dir")
    p.add_argument("--explain", action="store_true", help="Trace every action")
    sub = p.add_subparsers(dest="cmd", required=True)

    cp = sub.add_parser("categories", help="List categories in the question bank")
    cp.add_argument("--bank", default=None)

    rp = sub.add_parser("run", help="Interactive quiz session")
    rp.add_argument("--bank", default=None)
    rp.add_argument("--category", required=True)
    rp.add_argument("--retry", action="store_true", help="Only questions missed last session")

    ap = sub.add_parser("action", help="Apply one action to the persisted session")
    ap.add_argument("kind", choices=sorted(HANDLERS.keys()))
    ap.add_argument("value", nargs="?", default=None)
    ap.add_argument("--bank", default=None)

    lp = sub.add_parser("ledger", help="Show or export the wrong-answer ledger")
    lp.add_argument("--category", default=None)
    lp.add_argument("--export", default=None, help="Write NDJSON to this path")

    args = p.parse_args(argv)
    cfg = _prepare(args)

    if args.cmd == "categories":
        return _cmd_categories(cfg)
    if args.cmd == "run":
        return _cmd_run(cfg, args)
    if args.cmd == "action":
        return _cmd_action(cfg, args)
    if args.cmd == "ledger":
        return _cmd_ledger(cfg, args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
