"""Identifier resolution.

Maps a loosely formatted identifier to the canonical ``id`` of a record.
Resolution order (first match wins):

1. exact stored id;
2. legacy prefix compatibility: ``p_issa`` -> ``issa`` or ``issa`` -> ``p_issa``;
3. name fallback: the identifier (prefix stripped) is compared with the
   normalized ``nom`` of every record. Homonyms resolve to the smallest id.

Every other module resolves ids through here before touching the graph.
"""
from __future__ import annotations
from typing import Iterable, Optional
from unicodedata import normalize as _uni_norm, combining
import re

from .models import Person

LEGACY_PREFIX = "p_"

_WS = re.compile(r"\s+")


def normalize_text(s: Optional[str]) -> str:
    """Lower-case, strip accents and collapse whitespace."""
    if not s:
        return ""
    nf = _uni_norm("NFD", s.strip().lower())
    no_marks = "".join([c for c in nf if not combining(c)])
    return _WS.sub(" ", no_marks)


def pick_homonym(candidates: Iterable[Person]) -> Optional[Person]:
    """Choose among records sharing a normalized name.

    The smallest id wins. This is stable but carries no meaning; callers
    needing a specific homonym must pass its exact id.
    """
    return min(candidates, key=lambda p: p.id, default=None)


def resolve_person_id(store, input_id: Optional[str], prefix: Optional[str] = None) -> Optional[str]:
    raw = (input_id or "").strip()
    if not raw:
        return None
    if prefix is None:
        prefix = getattr(store, "legacy_prefix", LEGACY_PREFIX)

    # 1) exact
    if raw in store:
        return raw

    # 2) legacy prefix, both directions
    if prefix:
        if raw.startswith(prefix):
            without = raw[len(prefix):]
            if without in store:
                return without
        else:
            with_prefix = prefix + raw
            if with_prefix in store:
                return with_prefix

    # 3) by name
    slug = raw[len(prefix):] if prefix and raw.startswith(prefix) else raw
    slug_n = normalize_text(slug)
    if not slug_n:
        return None
    found = pick_homonym([store.get(pid) for pid in store.ids_by_normalized_name(slug_n)])
    return found.id if found else None


def get_person(store, input_id: Optional[str], prefix: Optional[str] = None) -> Optional[Person]:
    """Find a person by id, tolerating legacy formats."""
    rid = resolve_person_id(store, input_id, prefix=prefix)
    return store.get(rid) if rid else None
