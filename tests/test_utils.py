import pytest
import yaml

from services.script_planner.patterns import load_patterns
from shared.enums import Language, SourceFormat, Tone
from shared.utils import clamp, config, format_minutes_seconds, generate_id, round_half_up, truncate


def test_config_env_loading() -> None:
    # Keys should resolve even when not explicitly configured
    assert config.get("database_url") in (None, "") or isinstance(config.get("database_url"), str)
    assert isinstance(config.get("allowed_origins"), list)
    assert config.get("project_store") in ("memory", "database")
    assert config.get("missing_key", 5) == 5


def test_pipeline_value_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    config.set_pipeline_config({"flags": {"dense_chars": 500}})
    assert config.get_pipeline_value("flags.dense_chars") == 500
    assert config.get_pipeline_value("flags.unknown", 7) == 7

    monkeypatch.setenv("PIPELINE_FLAG_FLAGS_DENSE_CHARS", "800")
    assert config.get_pipeline_value("flags.dense_chars") == 800


def test_round_half_up() -> None:
    assert round_half_up(72.5) == 73
    assert round_half_up(217.5) == 218
    assert round_half_up(2.4) == 2
    assert round_half_up(0.5) == 1


def test_clamp_and_truncate() -> None:
    assert clamp(5, 10, 120) == 10
    assert clamp(200, 10, 120) == 120
    assert clamp(60, 10, 120) == 60
    assert truncate("abcdef", 3) == "abc"
    assert truncate("ab", 3) == "ab"


def test_format_minutes_seconds() -> None:
    assert format_minutes_seconds(420) == (7, 0)
    assert format_minutes_seconds(95) == (1, 35)


def test_generate_id() -> None:
    assert generate_id() != generate_id()


def test_bundled_patterns() -> None:
    patterns = load_patterns()

    assert patterns.segmentation.default_title_for(3) == "Slide 3"
    assert patterns.segmentation.break_re(SourceFormat.PPTX).split("a</SLIDE>b") == ["a", "b"]
    assert patterns.phrases("en").intro_for(Tone.POLITE) == "Let me walk you through this slide..."
    assert set(patterns.languages) == {Language.JA, Language.EN}


def test_missing_language_falls_back_to_english() -> None:
    patterns = load_patterns()
    english_only = patterns.model_copy(update={"languages": {Language.EN: patterns.languages[Language.EN]}})
    assert english_only.phrases(Language.JA).goal_fallback == "About {title}"


def test_custom_pattern_file(tmp_path) -> None:
    source = load_patterns()
    custom = tmp_path / "patterns.yaml"
    data = source.model_dump(mode="json")
    data["extraction"]["bullet"] = r"^>\s*(.+)$"

    custom.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    patterns = load_patterns(str(custom))
    assert [m.group(1) for m in patterns.extraction.bullet_re.finditer("> one\n> two")] == ["one", "two"]


def test_missing_pattern_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_patterns(str(tmp_path / "missing.yaml"))
