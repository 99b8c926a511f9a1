"""Locating and reading annovate.yaml."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import AnnovateConfig

CONFIG_ENV_VAR = "ANNOVATE_CONFIG"
PROJECT_CONFIG_NAME = "annovate.yaml"


def user_config_path() -> Path:
    return Path.home() / ".annovate" / "config.yaml"


def config_candidates(cli_path: str | None = None) -> list[Path]:
    """Files to try, in order.

    An explicit file (``--config``, else ``$ANNOVATE_CONFIG``) must exist;
    the project-local and per-user files are optional.
    """
    explicit = cli_path or os.environ.get(CONFIG_ENV_VAR)
    candidates = []
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ValueError(f"Config file not found: {path}")
        candidates.append(path)
    candidates.append(Path(PROJECT_CONFIG_NAME))
    candidates.append(user_config_path())
    return candidates


def load_config(cli_path: str | None = None) -> AnnovateConfig:
    """First non-empty config file from config_candidates(), else defaults."""
    for path in config_candidates(cli_path):
        if not path.is_file():
            continue
        raw = _read_mapping(path)
        if raw is None:
            continue
        try:
            return AnnovateConfig(**raw)
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return AnnovateConfig()


def _read_mapping(path: Path) -> dict | None:
    """Top-level YAML mapping of *path*; None for an empty file."""
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(
            f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}"
        )
    return raw


# Written by `anno config init`; loads to the same values as AnnovateConfig().
DEFAULT_CONFIG_TEMPLATE = """\
# annovate.yaml

# Annotation file looked up in the working directory
meta_file: ".annovate"

# strftime format for timestamps in contexts and `creation time`
timestamp_format: "%d.%m.%Y %H:%M:%S"

# Default context for new entries: "<context_prefix>, <timestamp>"
context_prefix: "annovate program"
creation_reason: "new annovate file"

# Key shown by `anno list` when none is given
list_key: "description"
include_dotfiles: false

display:
  show_context: false
  show_duplicates: false

# Logging
log_level: "warn"              # debug | info | warn | error
"""
