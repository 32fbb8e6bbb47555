"""Read-only record store.

The store is built once from the flat list of person records (the
``personnes.json`` dataset) and never mutated afterwards. On construction it
builds the indexes the graph code needs so that neighbour lookups during a
search do not scan the whole record list:

- ``id -> Person``
- ``parent id -> ids of children`` (in store order)
- ``normalized nom -> ids`` (in store order), for name-based resolution

Parent and twin references that point to unknown ids are logged and treated
as unresolved; they are kept on the record but never indexed.
"""
from __future__ import annotations
from typing import Dict, Optional, List, Iterable, Iterator, Any, Tuple
from pathlib import Path
import logging

from .fs import json_load
from .models import Person
from .resolver import LEGACY_PREFIX, normalize_text


class RecordStore:
    def __init__(self, persons: Iterable[Person], legacy_prefix: str = LEGACY_PREFIX) -> None:
        # prefix tolerated by the resolver on ids coming from old links
        self.legacy_prefix = legacy_prefix
        self._persons: Tuple[Person, ...] = tuple(persons)
        self._by_id: Dict[str, Person] = {}
        for p in self._persons:
            if p.id in self._by_id:
                raise ValueError(f"duplicate person id: {p.id}")
            self._by_id[p.id] = p
        self._children: Dict[str, List[str]] = {}
        self._by_name: Dict[str, List[str]] = {}
        self._build_index()

    def _build_index(self) -> None:
        for p in self._persons:
            name = normalize_text(p.nom)
            if name:
                self._by_name.setdefault(name, []).append(p.id)
            for label, ref in (("pereId", p.pere_id), ("mereId", p.mere_id)):
                if not ref:
                    continue
                if ref not in self._by_id:
                    logging.warning("Person %s: %s %s does not match any record", p.id, label, ref)
                    continue
                kids = self._children.setdefault(ref, [])
                # a person recorded as both father and mother of the same child
                if p.id not in kids:
                    kids.append(p.id)
            if p.jumeau_id and p.jumeau_id not in self._by_id:
                logging.warning("Person %s: jumeauId %s does not match any record", p.id, p.jumeau_id)

    @classmethod
    def from_dicts(cls, records: Iterable[Dict[str, Any]], legacy_prefix: str = LEGACY_PREFIX) -> "RecordStore":
        persons: List[Person] = []
        for i, rec in enumerate(records):
            if not isinstance(rec, dict):
                logging.warning("Skipping record #%d: not an object", i)
                continue
            try:
                persons.append(Person.from_dict(rec))
            except ValueError as exc:
                logging.warning("Skipping record #%d: %s", i, exc)
        return cls(persons, legacy_prefix=legacy_prefix)

    @classmethod
    def from_file(cls, path: Path, legacy_prefix: str = LEGACY_PREFIX) -> "RecordStore":
        data = json_load(Path(path))
        if data is None:
            logging.warning("No dataset found at %s; starting with an empty store", path)
            data = []
        if not isinstance(data, list):
            logging.warning("Dataset %s is not a JSON array; starting with an empty store", path)
            data = []
        store = cls.from_dicts(data, legacy_prefix=legacy_prefix)
        logging.info("Loaded %d persons from %s", len(store), path)
        return store

    # --- read access ---
    @property
    def persons(self) -> Tuple[Person, ...]:
        return self._persons

    def get(self, pid: Optional[str]) -> Optional[Person]:
        if not pid:
            return None
        return self._by_id.get(pid)

    def children_ids(self, parent_id: str) -> List[str]:
        return list(self._children.get(parent_id, ()))

    def children(self, parent_id: str) -> List[Person]:
        return [self._by_id[cid] for cid in self._children.get(parent_id, ())]

    def ids_by_normalized_name(self, norm: str) -> List[str]:
        """Ids whose normalized `nom` equals norm, in store order."""
        return list(self._by_name.get(norm, ()))

    def __contains__(self, pid: object) -> bool:
        return pid in self._by_id

    def __len__(self) -> int:
        return len(self._persons)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._persons)


def load_store(config) -> RecordStore:
    """Build the store from the dataset file named in ``config.data_file``."""
    return RecordStore.from_file(config.data_file, legacy_prefix=config.legacy_prefix)
