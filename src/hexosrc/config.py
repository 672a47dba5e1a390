"""Application configuration: settings schema and hexosrc.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "hexosrc.yaml"


class Settings(BaseModel):
    app_name:           str = "hexosrc"
    posts_dir:          str = Field(default="_posts",       description="Posts subtree under the source root")
    page_index:         str = Field(default="index.md",     description="Content file inside a page directory")
    headers_file:       str = Field(default="headers.json", description="Metadata index at the custom root")
    description_length: int = Field(default=350, ge=0,      description="Max body bytes used for an autofilled description")
    description_suffix: str = Field(default=" ......",      description="Marker appended to autofilled descriptions")
    git_binary:         str = Field(default="git",          description="Version-control executable for dates")
    date_format:        str = Field(default="%Y-%m-%d %H:%M:%S", description="strftime format for history dates")
    autofill:           bool = Field(default=True,          description="Fill missing header fields on convert")
    log_level:          str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from hexosrc.yaml, then HEXOSRC_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"HEXOSRC_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
