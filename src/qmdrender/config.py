"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "QMDRENDER_"
CONFIG_ENV = f"{ENV_PREFIX}CONFIG"


class Settings(BaseModel):
    app_name:      str  = "qmdrender"
    parser_config: str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    breaks:        bool = Field(default=True,       description="Render single newlines as <br>")
    highlight:     bool = Field(default=True,       description="Highlight fenced code with Pygments")
    math_output:   str  = Field(default="mathml", pattern="^(mathml|tex)$", description="mathml or tex (client-side)")
    output_dir:    str  = Field(default="dist",     description="Directory for rendered HTML + JSON files")
    standalone:    bool = Field(default=False,      description="Wrap each fragment in a full HTML page")
    log_level:     str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


_CASE_FOLDED = {"log_level": str.upper, "math_output": str.lower}


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
    return data


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then QMDRENDER_<FIELD> env vars, then non-None CLI overrides.

    QMDRENDER_CONFIG names a different config file. Level names and the math
    output mode are matched case-insensitively ("info", "TeX").
    """
    data = _read_config_file(Path(os.getenv(CONFIG_ENV) or CONFIG_FILE))
    data.update({name: val for name in Settings.model_fields if (val := os.getenv(f"{ENV_PREFIX}{name.upper()}"))})
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    for name, normalise in _CASE_FOLDED.items():
        if isinstance(data.get(name), str):
            data[name] = normalise(data[name].strip())
    return Settings(**data)
