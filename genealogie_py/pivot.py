"""Turn a kinship path into a "common ancestor + two descending branches" shape.

A path is a flat chain ``A -> ... -> B``. A relation diagram draws it as the
pivot (the nearest common ancestor) and its partner on top, with one descending
branch ending at A and one ending at B.

The pivot is the first interior node where the chain stops climbing and starts
descending: the step into it goes to a father/mother, and the step out of it
goes to one of its children.

Chains that never turn (direct ancestor/descendant, or a chain going down then
up through a partner) have no such node. For those the middle node of the
chain is used, with its two neighbours as anchors. That node is not claimed to
be a common ancestor; ``Pivot.is_branching`` is False in that case.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

from .models import KinStep, Pivot, RelationSchema, PARENT_STEPS, STEP_CHILD
from .relationship import find_kin_path, path_ids
from .relatives import unions_of
from .resolver import get_person, resolve_person_id


def _climbs_into(step: KinStep, prev_id: str, cur_id: str) -> bool:
    return step.type in PARENT_STEPS and step.from_id == prev_id and step.to_id == cur_id


def _descends_from(step: KinStep, cur_id: str, next_id: str) -> bool:
    if step.type == STEP_CHILD:
        return step.from_id == cur_id and step.to_id == next_id
    return step.type in PARENT_STEPS and step.from_id == next_id and step.to_id == cur_id


def midpoint_pivot(ids: List[str]) -> Pivot:
    """Fallback policy: middle node of the chain, neighbours as anchors."""
    mid = (len(ids) - 1) // 2
    return Pivot(
        pivot_id=ids[mid],
        child_toward_from=ids[max(0, mid - 1)],
        child_toward_to=ids[min(len(ids) - 1, mid + 1)],
        pivot_index=mid,
        ids=ids,
        is_branching=False,
    )


def union_partner_for_children(storage, pivot_id: str, child_ids: Sequence[str]) -> Optional[str]:
    """Partner of the pivot in the first union holding one of child_ids."""
    for u in unions_of(storage, pivot_id):
        kids = u.child_ids()
        if any(cid in kids for cid in child_ids):
            return u.partner_id
    return None


def resolve_pivot(storage, path: List[KinStep], from_id: str) -> Pivot:
    start = resolve_person_id(storage, from_id) or from_id
    ids = path_ids(start, path)

    found: Optional[Pivot] = None
    for i in range(1, len(ids) - 1):
        if _climbs_into(path[i - 1], ids[i - 1], ids[i]) and _descends_from(path[i], ids[i], ids[i + 1]):
            found = Pivot(
                pivot_id=ids[i],
                child_toward_from=ids[i - 1],
                child_toward_to=ids[i + 1],
                pivot_index=i,
                ids=ids,
                is_branching=True,
            )
            break
    if found is None:
        found = midpoint_pivot(ids)

    found.partner_id = union_partner_for_children(
        storage, found.pivot_id, [found.child_toward_from, found.child_toward_to]
    )
    return found


def relation_schema(storage, a_id: str, b_id: str) -> Optional[RelationSchema]:
    """Everything a relation diagram needs, or None if a or b is unknown or unlinked."""
    a = get_person(storage, a_id)
    b = get_person(storage, b_id)
    if a is None or b is None:
        return None
    path = find_kin_path(storage, a.id, b.id)
    if path is None:
        return None

    pivot = resolve_pivot(storage, path, a.id)
    ids = pivot.ids
    pivot_person = storage.get(pivot.pivot_id)

    # pivot -> anchor -> ... -> A and pivot -> anchor -> ... -> B, minus
    # the pivot and anchor which are drawn on their own
    chain_from = list(reversed(ids[: pivot.pivot_index + 1]))[2:]
    chain_to = ids[pivot.pivot_index:][2:]

    return RelationSchema(
        a=a,
        b=b,
        path=path,
        pivot=pivot,
        pivot_person=pivot_person,
        pivot_father=storage.get(pivot_person.pere_id) if pivot_person else None,
        pivot_mother=storage.get(pivot_person.mere_id) if pivot_person else None,
        partner=storage.get(pivot.partner_id),
        anchor_from=storage.get(pivot.child_toward_from),
        anchor_to=storage.get(pivot.child_toward_to),
        chain_from=chain_from,
        chain_to=chain_to,
    )
