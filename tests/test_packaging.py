"""Tests for package metadata in setup.py."""

import ast
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]


def _setup_keywords() -> dict:
    tree = ast.parse((ROOT_DIR / "setup.py").read_text(encoding="utf-8"))
    call = next(
        node
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and getattr(node.func, "id", None) == "setup"
    )
    return {keyword.arg: keyword.value for keyword in call.keywords}


def test_python_requires_matches_datetime_utc_usage() -> None:
    keywords = _setup_keywords()
    assert ast.literal_eval(keywords["python_requires"]) == ">=3.11"


def test_bundled_pattern_table_is_package_data() -> None:
    package_data = ast.literal_eval(_setup_keywords()["package_data"])
    assert package_data["services.script_planner"] == ["config/*.yaml"]
