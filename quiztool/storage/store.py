from __future__ import annotations

"""File-backed store for quiz session state and the wrong-answer ledger.

- Session state: one JSON document, validated through `SessionStateRow`.
- Ledger: one Parquet table (pandas + pyarrow) of `{question, category, miss_count}`.

Loading never fails on bad data: an unreadable state file yields a fresh
state, an unreadable ledger file yields an empty ledger, and invalid ledger
rows are dropped.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import pyarrow as pa
from pydantic import ValidationError

from ..app.explain import trace as xtrace
from ..app.session_state import QuizMode, SessionState, SessionStatus
from ..policy.wrong_answer_ledger import WrongAnswerLedger
from .schema import LEDGER_DTYPES, LedgerRow, SessionStateRow


STATE_FILE = "session_state.json"
LEDGER_FILE = "wrong_answers.parquet"


def _empty_ledger_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in LEDGER_DTYPES.items()})


def init_store(data_dir: Path) -> None:
    """Ensure the data directory and an empty ledger table exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    ledger_path = data_dir / LEDGER_FILE
    if not ledger_path.exists():
        _empty_ledger_df().to_parquet(ledger_path, engine="pyarrow", compression="zstd", index=False)


# --- session state ---

def state_to_row(state: SessionState) -> SessionStateRow:
    return SessionStateRow(
        category=state.category,
        status=state.status.value,
        mode=state.mode.value,
        questions_answered=state.questions_answered,
        used_questions=sorted(state.used_questions),
        wrong_questions=sorted(state.wrong_questions),
        right_count=state.right_count,
        wrong_count=state.wrong_count,
        current_question=state.current_question,
        current_answer=state.current_answer,
        answer_visible=state.answer_visible,
    )


def row_to_state(row: SessionStateRow) -> SessionState:
    return SessionState(
        category=row.category,
        status=SessionStatus(row.status),
        mode=QuizMode(row.mode),
        questions_answered=row.questions_answered,
        used_questions=set(row.used_questions),
        wrong_questions=set(row.wrong_questions),
        right_count=row.right_count,
        wrong_count=row.wrong_count,
        current_question=row.current_question,
        current_answer=row.current_answer,
        answer_visible=row.answer_visible,
    )


def parse_session_state(data: Any) -> SessionState:
    """Build a SessionState from decoded JSON, repairing what can be repaired."""
    if not isinstance(data, dict):
        return SessionState()
    try:
        return row_to_state(SessionStateRow.model_validate(data))
    except ValidationError as exc:
        xtrace("state_invalid", {"errors": exc.error_count()})
        return SessionState()


def load_session_state(data_dir: Path) -> SessionState:
    p = Path(data_dir) / STATE_FILE
    if not p.exists():
        return SessionState()
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        xtrace("state_unreadable", {"path": str(p), "error": repr(exc)})
        return SessionState()
    return parse_session_state(data)


def save_session_state(state: SessionState, data_dir: Path) -> None:
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    p = data_dir / STATE_FILE
    with p.open("w", encoding="utf-8") as f:
        json.dump(state_to_row(state).model_dump(), f, indent=2, ensure_ascii=False)


# --- ledger ---

def validate_ledger_rows(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """Validate ledger rows and return a DataFrame with proper dtypes.

    Rows that fail validation are dropped; duplicate questions keep the last row.
    """
    if not isinstance(records, list):
        raise TypeError("records must be a list of ledger rows")
    rows: List[Dict[str, Any]] = []
    for r in records:
        try:
            rows.append(LedgerRow.model_validate(r).model_dump())
        except ValidationError:
            xtrace("ledger_row_dropped", {"row": r})
    if not rows:
        return _empty_ledger_df()
    df = pd.DataFrame(rows).drop_duplicates(subset="question", keep="last")
    return _fix_dtypes(df)


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in LEDGER_DTYPES.items():
        if col not in df.columns:
            df[col] = pd.NA
        df[col] = df[col].astype(dt)
    return df[list(LEDGER_DTYPES.keys())].reset_index(drop=True)


def ledger_frame(ledger: WrongAnswerLedger) -> pd.DataFrame:
    return validate_ledger_rows(ledger.to_rows())


def save_ledger(ledger: WrongAnswerLedger, data_dir: Path) -> None:
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    df = ledger_frame(ledger)
    df.to_parquet(data_dir / LEDGER_FILE, engine="pyarrow", compression="zstd", index=False)


def load_ledger(data_dir: Path) -> WrongAnswerLedger:
    f = Path(data_dir) / LEDGER_FILE
    if not f.exists():
        return WrongAnswerLedger()
    try:
        df = pd.read_parquet(f, engine="pyarrow")
    except (OSError, ValueError, pa.ArrowException) as exc:
        xtrace("ledger_unreadable", {"path": str(f), "error": repr(exc)})
        return WrongAnswerLedger()
    records = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    return WrongAnswerLedger.from_rows(validate_ledger_rows(records).to_dict(orient="records"))


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, force_ascii=False)
