from __future__ import annotations

"""Configuration loading and validation for QuizTool.

This module loads YAML configuration, applies defaults, and validates
that enumerations and limits are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml


ALLOWED_MODES = {"normal", "retry_wrong"}
DEFAULT_QUESTION_LIMIT = 5


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Config file is not valid YAML: {path} ({e})", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for section in ("quiz", "bank", "storage", "ui"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    quiz = cfg["quiz"]
    bank = cfg["bank"]
    storage = cfg["storage"]
    ui = cfg["ui"]

    quiz.setdefault("question_limit", DEFAULT_QUESTION_LIMIT)
    quiz.setdefault("mode", "normal")

    bank.setdefault("path", "./questions.csv")

    storage.setdefault("data_dir", "./quiz_data")

    ui.setdefault("explain", False)
    ui.setdefault("show_summary", True)

    limit = quiz.get("question_limit")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        print(f"WARNING: Invalid question_limit '{limit}', using {DEFAULT_QUESTION_LIMIT}.")
        quiz["question_limit"] = DEFAULT_QUESTION_LIMIT

    mode = quiz.get("mode")
    if mode not in ALLOWED_MODES:
        print(f"WARNING: Unsupported quiz mode '{mode}', using 'normal'.")
        quiz["mode"] = "normal"

    ui["explain"] = bool(ui.get("explain"))
    ui["show_summary"] = bool(ui.get("show_summary"))

    return cfg
