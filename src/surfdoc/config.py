"""Application configuration: settings schema and surfdoc.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from surfdoc.core.diagnostics import DEFAULT_MAX_DEPTH


CONFIG_FILE = "surfdoc.yaml"


class Settings(BaseModel):
    app_name:    str = "surfdoc"
    max_depth:   int = Field(default=DEFAULT_MAX_DEPTH, ge=1, description="Nesting levels resolved inside page/section")
    json_indent: int = Field(default=2, ge=0, description="Indent for `surfdoc parse` JSON output")
    fail_on:     str = Field(default="error", pattern="^(error|warning|info)$", description="Lowest severity that fails `surfdoc check`")
    log_level:   str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", description="Root logger level for the CLI")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from surfdoc.yaml, then SURFDOC_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"SURFDOC_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
