import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from quiztool.config.config import load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_packaged_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["quiz"]["question_limit"], 5)
        self.assertEqual(cfg["quiz"]["mode"], "normal")
        self.assertEqual(cfg["storage"]["data_dir"], "./quiz_data")
        self.assertFalse(cfg["ui"]["explain"])

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["bank"]["path"], "./questions.csv")
        self.assertTrue(cfg["ui"]["show_summary"])

    def test_invalid_values_fall_back_with_warning(self) -> None:
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            cfg = validate_config({"quiz": {"question_limit": 0, "mode": "shuffle"}, "ui": None})
        self.assertEqual(cfg["quiz"]["question_limit"], 5)
        self.assertEqual(cfg["quiz"]["mode"], "normal")
        self.assertEqual(cfg["ui"]["explain"], False)
        self.assertIn("WARNING: Invalid question_limit", buf.getvalue())
        self.assertIn("WARNING: Unsupported quiz mode", buf.getvalue())

    def test_yaml_file_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "quiz.yml"
            p.write_text("quiz:\n  question_limit: 10\n  mode: retry_wrong\n", encoding="utf-8")
            cfg = validate_config(load_config(str(p)))
        self.assertEqual(cfg["quiz"]["question_limit"], 10)
        self.assertEqual(cfg["quiz"]["mode"], "retry_wrong")

    def test_missing_file_exits(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                load_config("/definitely/not/here.yml")
        self.assertEqual(cm.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
