"""Simple configuration loader for genealogie_py.

Behavior:
- Load defaults.
- If environment variable `GENEALOGIE_CONFIG` is set, load that JSON file and merge.
- Environment variables override file values (variables: GENEALOGIE_DATA_FILE,
  GENEALOGIE_SUGGEST_LIMIT, GENEALOGIE_LEGACY_PREFIX).
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os
import logging
from typing import Optional

from .fs import json_load


@dataclass
class Config:
    data_file: Path = Path("data") / "personnes.json"
    legacy_prefix: str = "p_"
    suggest_limit: int = 12
    host: str = "127.0.0.1"
    port: int = 8000


def _as_int(value, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logging.warning("Ignoring non-integer config value %r", value)
        return fallback


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from (1) defaults, (2) JSON file, (3) env vars.

    :param config_path: optional path to a JSON config file. If not provided
                        will use environment variable `GENEALOGIE_CONFIG` if set.
    """
    cfg = Config()

    # 1) config file
    cp = config_path or os.environ.get("GENEALOGIE_CONFIG")
    if cp:
        data = json_load(Path(cp))
        if isinstance(data, dict):
            if data.get("data_file"):
                cfg.data_file = Path(data["data_file"])
            if "legacy_prefix" in data and data["legacy_prefix"] is not None:
                cfg.legacy_prefix = str(data["legacy_prefix"])
            if "suggest_limit" in data:
                cfg.suggest_limit = _as_int(data["suggest_limit"], cfg.suggest_limit)
            if data.get("host"):
                cfg.host = str(data["host"])
            if "port" in data:
                cfg.port = _as_int(data["port"], cfg.port)

    # 2) environment variables override only when no explicit config_path was
    # passed; an explicit file is authoritative.
    if config_path is None:
        if os.environ.get("GENEALOGIE_DATA_FILE"):
            cfg.data_file = Path(os.environ["GENEALOGIE_DATA_FILE"])
        if os.environ.get("GENEALOGIE_SUGGEST_LIMIT"):
            cfg.suggest_limit = _as_int(os.environ["GENEALOGIE_SUGGEST_LIMIT"], cfg.suggest_limit)
        if "GENEALOGIE_LEGACY_PREFIX" in os.environ:
            cfg.legacy_prefix = os.environ["GENEALOGIE_LEGACY_PREFIX"]

    return cfg
