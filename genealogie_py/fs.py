"""Filesystem helpers used by the record store and the config loader.

Reading only: the dataset is never written back by this package.
"""
from __future__ import annotations
from pathlib import Path
import json
import logging
from typing import Any, Optional


def read_text(path: Path, default: Optional[str] = None, encoding: str = "utf-8-sig") -> Optional[str]:
    p = Path(path)
    if not p.exists():
        return default
    try:
        return p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError):
        logging.warning("Could not read %s", p)
        return default


def json_load(path: Path, default: Optional[Any] = None) -> Any:
    txt = read_text(path)
    if txt is None:
        return default
    try:
        return json.loads(txt)
    except ValueError:
        logging.warning("Invalid JSON in %s", path)
        return default
