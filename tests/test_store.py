import json
import tempfile
import unittest
from pathlib import Path

from quiztool.app.session_state import QuizMode, SessionState, SessionStatus
from quiztool.policy.wrong_answer_ledger import WrongAnswerLedger
from quiztool.storage.store import (
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


class SessionStateStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_round_trip(self) -> None:
        st = SessionState(
            category="Capitals",
            status=SessionStatus.ACTIVE,
            mode=QuizMode.RETRY_WRONG,
            questions_answered=2,
            used_questions={"b", "a"},
            wrong_questions={"a"},
            right_count=1,
            wrong_count=1,
            current_question="b",
            current_answer="B",
            answer_visible=True,
        )
        save_session_state(st, self.data_dir)
        raw = json.loads((self.data_dir / STATE_FILE).read_text(encoding="utf-8"))
        self.assertEqual(raw["used_questions"], ["a", "b"])
        self.assertEqual(raw["status"], "active")
        self.assertEqual(raw["mode"], "retry_wrong")
        self.assertEqual(load_session_state(self.data_dir), st)

    def test_missing_file_gives_fresh_state(self) -> None:
        self.assertEqual(load_session_state(self.data_dir), SessionState())

    def test_unreadable_file_gives_fresh_state(self) -> None:
        (self.data_dir / STATE_FILE).write_text("{not json", encoding="utf-8")
        self.assertEqual(load_session_state(self.data_dir), SessionState())

    def test_corrupted_fields_are_repaired(self) -> None:
        st = parse_session_state(
            {
                "category": "Capitals",
                "status": "active",
                "used_questions": "[broken",
                "wrong_questions": '["q1", "q1", 5]',
                "right_count": -3,
                "wrong_count": "two",
                "mode": "sideways",
            }
        )
        self.assertEqual(st.category, "Capitals")
        self.assertEqual(st.status, SessionStatus.ACTIVE)
        self.assertEqual(st.used_questions, set())
        self.assertEqual(st.wrong_questions, {"q1"})
        self.assertEqual((st.right_count, st.wrong_count), (0, 0))
        self.assertEqual(st.mode, QuizMode.NORMAL)

    def test_wrongly_typed_fields_are_repaired(self) -> None:
        st = parse_session_state({"status": ["active"], "mode": {"x": 1}})
        self.assertEqual(st.status, SessionStatus.NOT_STARTED)
        self.assertEqual(st.mode, QuizMode.NORMAL)

    def test_infinite_counter_in_file(self) -> None:
        # json decodes 1e400 to float('inf')
        (self.data_dir / STATE_FILE).write_text(
            '{"category": "Capitals", "questions_answered": 1e400}', encoding="utf-8"
        )
        st = load_session_state(self.data_dir)
        self.assertEqual(st.category, "Capitals")
        self.assertEqual(st.questions_answered, 0)

    def test_non_object_payload(self) -> None:
        self.assertEqual(parse_session_state(["nope"]), SessionState())


class LedgerStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_round_trip_parquet(self) -> None:
        ledger = WrongAnswerLedger()
        ledger.increment("q1", "Capitals")
        ledger.increment("q1", "Capitals")
        ledger.increment("q2", "Rivers")
        save_ledger(ledger, self.data_dir)
        self.assertTrue((self.data_dir / LEDGER_FILE).exists())

        loaded = load_ledger(self.data_dir)
        self.assertEqual(loaded.miss_count("q1"), 2)
        self.assertEqual(loaded.get("q2").category, "Rivers")
        self.assertEqual(len(loaded), 2)

    def test_init_store_creates_empty_ledger(self) -> None:
        init_store(self.data_dir)
        self.assertEqual(len(load_ledger(self.data_dir)), 0)

    def test_missing_ledger_is_empty(self) -> None:
        self.assertEqual(len(load_ledger(self.data_dir / "nowhere")), 0)

    def test_corrupted_ledger_file_is_empty(self) -> None:
        (self.data_dir / LEDGER_FILE).write_bytes(b"PAR1garbage")
        self.assertEqual(len(load_ledger(self.data_dir)), 0)

    def test_invalid_rows_are_dropped(self) -> None:
        df = validate_ledger_rows(
            [
                {"question": "q1", "category": "Capitals", "miss_count": 1},
                {"question": "", "category": "Capitals", "miss_count": 1},
                {"question": "q2", "category": "Capitals", "miss_count": 0},
            ]
        )
        self.assertEqual(list(df["question"]), ["q1"])
        self.assertEqual(str(df["miss_count"].dtype), "UInt32")

    def test_validate_requires_list(self) -> None:
        with self.assertRaises(TypeError):
            validate_ledger_rows({"question": "q1"})  # type: ignore[arg-type]

    def test_export_ndjson(self) -> None:
        ledger = WrongAnswerLedger()
        ledger.increment("q1", "Capitals")
        out = self.data_dir / "export" / "ledger.ndjson"
        export_ndjson(ledger_frame(ledger), out)
        lines = out.read_text(encoding="utf-8").strip().splitlines()
        self.assertEqual(json.loads(lines[0]), {"question": "q1", "category": "Capitals", "miss_count": 1})


if __name__ == "__main__":
    unittest.main()
