from .schema import LEDGER_DTYPES, MODES, STATUSES, LedgerRow, SessionStateRow
from .store import (
    LEDGER_FILE,
    STATE_FILE,
    export_ndjson,
    init_store,
    ledger_frame,
    load_ledger,
    load_session_state,
    parse_session_state,
    save_ledger,
    save_session_state,
    validate_ledger_rows,
)

__all__ = [
    "LEDGER_DTYPES",
    "MODES",
    "STATUSES",
    "LedgerRow",
    "SessionStateRow",
    "LEDGER_FILE",
    "STATE_FILE",
    "export_ndjson",
    "init_store",
    "ledger_frame",
    "load_ledger",
    "load_session_state",
    "parse_session_state",
    "save_ledger",
    "save_session_state",
    "validate_ledger_rows",
]
