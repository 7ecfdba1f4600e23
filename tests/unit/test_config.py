"""Unit tests for config.py"""

import pytest

from qmdrender.config import load_config


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    """Run each test in an empty directory with no QMDRENDER_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("OUTPUT_DIR", "MATH_OUTPUT", "BREAKS", "HIGHLIGHT", "PARSER_CONFIG", "LOG_LEVEL", "STANDALONE", "CONFIG"):
        monkeypatch.delenv(f"QMDRENDER_{name}", raising=False)


def test_load_config_defaults():
    """Settings defaults apply when no config.yaml, env var, or override exists."""
    settings = load_config()
    assert settings.parser_config == "gfm-like"
    assert settings.breaks is True
    assert settings.highlight is True
    assert settings.math_output == "mathml"
    assert settings.output_dir == "dist"
    assert settings.standalone is False


def test_load_config_reads_config_yaml(tmp_path):
    """config.yaml values override defaults."""
    (tmp_path / "config.yaml").write_text("output_dir: site\nbreaks: false\n")
    settings = load_config()
    assert settings.output_dir == "site"
    assert settings.breaks is False


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """QMDRENDER_OUTPUT_DIR takes precedence over config.yaml."""
    (tmp_path / "config.yaml").write_text("output_dir: site\n")
    monkeypatch.setenv("QMDRENDER_OUTPUT_DIR", "env-out")
    assert load_config().output_dir == "env-out"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("QMDRENDER_MATH_OUTPUT", "tex")
    assert load_config(overrides={"math_output": "mathml"}).math_output == "mathml"


def test_load_config_none_override_ignored(monkeypatch):
    """None overrides leave the lower layers in place."""
    monkeypatch.setenv("QMDRENDER_MATH_OUTPUT", "tex")
    assert load_config(overrides={"math_output": None}).math_output == "tex"


def test_load_config_env_bool_coerced(monkeypatch):
    """Boolean env vars are coerced by pydantic."""
    monkeypatch.setenv("QMDRENDER_HIGHLIGHT", "false")
    assert load_config().highlight is False


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    """A config.yaml that is not a mapping is rejected."""
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_unknown_math_output():
    """math_output must be mathml or tex."""
    with pytest.raises(ValueError):
        load_config(overrides={"math_output": "svg"})


def test_load_config_alternate_file(tmp_path, monkeypatch):
    """QMDRENDER_CONFIG points at a config file other than ./config.yaml."""
    (tmp_path / "config.yaml").write_text("output_dir: site\n")
    (tmp_path / "ci.yaml").write_text("output_dir: ci-out\nstandalone: true\n")
    monkeypatch.setenv("QMDRENDER_CONFIG", str(tmp_path / "ci.yaml"))
    settings = load_config()
    assert settings.output_dir == "ci-out"
    assert settings.standalone is True


def test_load_config_missing_alternate_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("QMDRENDER_CONFIG", str(tmp_path / "absent.yaml"))
    assert load_config().output_dir == "dist"


@pytest.mark.parametrize("env, field, expected", [
    ("QMDRENDER_LOG_LEVEL", "log_level", "INFO"),
    ("QMDRENDER_MATH_OUTPUT", "math_output", "tex"),
])
def test_load_config_case_insensitive_choices(monkeypatch, env, field, expected):
    """Level names and math output modes are accepted in any case."""
    monkeypatch.setenv(env, f" {expected.swapcase()} ")
    assert getattr(load_config(), field) == expected


def test_load_config_rejects_unknown_log_level():
    with pytest.raises(ValueError):
        load_config(overrides={"log_level": "chatty"})
