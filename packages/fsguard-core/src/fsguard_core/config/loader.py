"""Resolve and load ``fsguard.yaml``.

Search order: an explicit ``--config`` path, ``./fsguard.yaml``, then
``~/.fsguard/config.yaml``. The first file with content wins; an empty file
is skipped. ``${VAR}`` references in string values are substituted from the
environment before validation.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import FsGuardConfig

logger = logging.getLogger(__name__)

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_path(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest precedence first."""
    candidates = [Path("fsguard.yaml"), Path.home() / ".fsguard" / "config.yaml"]
    if cli_path:
        candidates.insert(0, Path(cli_path))
    return candidates


def load_config(cli_path: str | None = None) -> FsGuardConfig:
    """Return the first non-empty config on the search path, or the defaults."""
    for path in config_search_path(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            logger.debug("Skipping empty config file %s", path)
            continue
        try:
            config = FsGuardConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config

    return FsGuardConfig()


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _expand_env_vars(obj: Any) -> Any:
    """Substitute ``${VAR}`` in every string of a parsed YAML document.

    Unset variables expand to the empty string.
    """
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


# Default YAML template for `fsguard config init`
DEFAULT_CONFIG_TEMPLATE = """\
# fsguard.yaml

# Hash engine
hashing:
  engine: "fast"               # fast | reference

# Data ingestion
scan:
  ignore_patterns: [".git", "node_modules", "__pycache__", ".venv", "build", "dist", ".tox"]
  follow_symlinks: false
  # chunk_size: 1048576        # split a single input file into fixed-size blocks
  max_file_size_mb: 512

# Benchmark
bench:
  sizes: [1024]
  iterations: 200

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
