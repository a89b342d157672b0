"""Configuration: .env parsing and environment overrides."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

from .constants import DEFAULT_TEMP_PREFIX, DEFAULT_TEMP_TRIES

CONFIG_KEYS = ["LOCAL_FS_TMPDIR", "LOCAL_FS_TEMP_TRIES", "LOCAL_FS_TEMP_PREFIX"]


def read_env_file(keys: list[str], directory: Path | None = None) -> dict[str, str]:
    """Parse a .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = (directory or Path.cwd()) / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


class LocalFsConfig(BaseModel):
    """Settings read from the environment (or .env) when the library needs them."""

    tmpdir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    temp_tries: int = Field(default=DEFAULT_TEMP_TRIES, ge=1)
    temp_prefix: str = DEFAULT_TEMP_PREFIX


def load_config(directory: Path | None = None) -> LocalFsConfig:
    """Build the config; os.environ wins over the .env file."""
    env_config = read_env_file(CONFIG_KEYS, directory)

    def _get(key: str) -> str | None:
        return os.environ.get(key) or env_config.get(key)

    values: dict[str, object] = {}
    if tmpdir := _get("LOCAL_FS_TMPDIR"):
        values["tmpdir"] = tmpdir
    if tries := _get("LOCAL_FS_TEMP_TRIES"):
        values["temp_tries"] = tries
    if prefix := _get("LOCAL_FS_TEMP_PREFIX"):
        values["temp_prefix"] = prefix

    return LocalFsConfig(**values)
