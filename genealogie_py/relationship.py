"""Kinship path search.

Finds the shortest chain of parent/child links between two persons. From any
person three kinds of edges are followed, in this order:

    father ("pere"), mother ("mere"), each child ("enfant")

Edges are walked in both directions (up to a parent, down to a child), so a
plain FIFO BFS gives a chain with the fewest steps. Among equally short
chains the edge order above decides; no other preference is implied.

API:
    find_kin_path(storage, from_id, to_id) -> Optional[List[KinStep]]
    path_ids(from_id, path) -> List[str]
    kin_distance(storage, a_id, b_id) -> Optional[int]

``find_kin_path`` returns ``[]`` for the same person and ``None`` both when an
id cannot be resolved and when the two persons are not connected.
"""
from __future__ import annotations
from collections import deque
from typing import Dict, List, Optional, Tuple

from .models import KinStep, STEP_FATHER, STEP_MOTHER, STEP_CHILD
from .resolver import resolve_person_id


def _neighbors(storage, pid: str) -> List[KinStep]:
    """Return outgoing steps from pid: father, mother, then children."""
    out: List[KinStep] = []
    p = storage.get(pid)
    if p is None:
        return out
    if p.pere_id and p.pere_id in storage:
        out.append(KinStep(pid, p.pere_id, STEP_FATHER))
    if p.mere_id and p.mere_id in storage:
        out.append(KinStep(pid, p.mere_id, STEP_MOTHER))
    for cid in storage.children_ids(pid):
        out.append(KinStep(pid, cid, STEP_CHILD))
    return out


def find_kin_path(storage, from_id: str, to_id: str) -> Optional[List[KinStep]]:
    start = resolve_person_id(storage, from_id)
    goal = resolve_person_id(storage, to_id)
    if start is None or goal is None:
        return None
    if start == goal:
        return []

    # back pointers: node -> step that discovered it
    prev: Dict[str, KinStep] = {}
    visited = {start}
    q = deque([start])

    while q:
        cur = q.popleft()
        for step in _neighbors(storage, cur):
            nid = step.to_id
            if nid in visited:
                continue
            visited.add(nid)
            prev[nid] = step
            if nid == goal:
                return _reconstruct(prev, start, goal)
            q.append(nid)

    return None


def _reconstruct(prev: Dict[str, KinStep], start: str, goal: str) -> List[KinStep]:
    steps: List[KinStep] = []
    node = goal
    while node != start:
        step = prev[node]
        steps.append(step)
        node = step.from_id
    steps.reverse()
    return steps


def path_ids(from_id: str, path: List[KinStep]) -> List[str]:
    """Full node sequence: from_id followed by each step's target."""
    return [from_id] + [s.to_id for s in path]


def kin_distance(storage, a_id: str, b_id: str) -> Optional[int]:
    path = find_kin_path(storage, a_id, b_id)
    return None if path is None else len(path)


def path_summary(storage, path: List[KinStep]) -> List[Tuple[str, str, str]]:
    """(from name, relation, to name) triples for display."""
    labels = {STEP_FATHER: "father", STEP_MOTHER: "mother", STEP_CHILD: "child"}
    rows = []
    for s in path:
        a = storage.get(s.from_id)
        b = storage.get(s.to_id)
        rows.append((a.full_name() if a else s.from_id, labels[s.type], b.full_name() if b else s.to_id))
    return rows
