"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:   str = "wpblocks"
    output_dir: str = Field(default="dist", description="Directory for exported JSON block trees")
    extensions: str = Field(default=".html,.htm,.txt", description="Comma-separated suffixes to discover")
    indent:     int = Field(default=2, ge=0, description="JSON indent for exported trees; 0 = compact")
    log_level:  str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @property
    def suffixes(self) -> set[str]:
        """Normalized set of discoverable suffixes, each with a leading dot."""
        parts = (s.strip().lower() for s in self.extensions.split(","))
        return {p if p.startswith(".") else f".{p}" for p in parts if p}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then WPBLOCKS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"WPBLOCKS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
