"""Direct relatives of a person, derived from the flat records.

Nothing here raises for unknown ids: an unresolvable id gives ``None`` or an
empty list.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from .models import Person, Relatives, Union
from .resolver import get_person, normalize_text, resolve_person_id


def _name_key(p: Person) -> Tuple[str, str]:
    full = p.full_name()
    return normalize_text(full), full


def father(storage, pid: str) -> Optional[Person]:
    p = get_person(storage, pid)
    return storage.get(p.pere_id) if p else None


def mother(storage, pid: str) -> Optional[Person]:
    p = get_person(storage, pid)
    return storage.get(p.mere_id) if p else None


def parents(storage, pid: str) -> Tuple[Optional[Person], Optional[Person]]:
    return father(storage, pid), mother(storage, pid)


def twin(storage, pid: str) -> Optional[Person]:
    p = get_person(storage, pid)
    return storage.get(p.jumeau_id) if p else None


def children_of(storage, pid: str) -> List[Person]:
    """All children of a person, as father or mother, sorted by full name."""
    rid = resolve_person_id(storage, pid)
    if rid is None:
        return []
    return sorted(storage.children(rid), key=_name_key)


def _partner_of(me: Person, child: Person) -> Optional[str]:
    # sex says which slot we expect to be in; if the record puts us in the
    # other one, the remaining pointer is still the partner
    if me.is_male:
        return child.mere_id if child.pere_id == me.id else child.pere_id
    return child.pere_id if child.mere_id == me.id else child.mere_id


def unions_of(storage, pid: str) -> List[Union]:
    """Group a person's children by the other parent.

    Children without a recorded other parent land in a single bucket with
    ``partner_id=None``, sorted after every named partner.
    """
    me = get_person(storage, pid)
    if me is None:
        return []

    groups: Dict[Optional[str], List[Person]] = {}
    for kid in children_of(storage, me.id):
        groups.setdefault(_partner_of(me, kid), []).append(kid)

    unions = [
        Union(partner_id=partner_id, partner=storage.get(partner_id), children=kids)
        for partner_id, kids in groups.items()
    ]

    def order(u: Union):
        if u.partner is None:
            # unknown partner last; unresolved partner ids just before it
            return (1, u.partner_id is None, "", u.partner_id or "")
        return (0, False) + _name_key(u.partner)

    unions.sort(key=order)
    return unions


def relatives(storage, pid: str) -> Optional[Relatives]:
    """Everything a family diagram needs for one person."""
    p = get_person(storage, pid)
    if p is None:
        return None
    return Relatives(
        person=p,
        father=storage.get(p.pere_id),
        mother=storage.get(p.mere_id),
        twin=storage.get(p.jumeau_id),
        children=children_of(storage, p.id),
        unions=unions_of(storage, p.id),
    )
