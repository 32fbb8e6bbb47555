from __future__ import annotations
from typing import List, Optional, Tuple

from .models import Person, PersonMatch, PersonQuery
from .resolver import normalize_text

# (exact, prefix, substring) points per query field
NOM_WEIGHTS = (60, 45, 30)
PERE_WEIGHTS = (25, 15, 8)
GRAND_PERE_WEIGHTS = (15, 10, 5)
CLAN_BONUS = 1


def _field_score(query: str, value: str, weights: Tuple[int, int, int]) -> int:
    exact, prefix, contains = weights
    if value == query:
        return exact
    if value.startswith(query):
        return prefix
    if query in value:
        return contains
    return 0


def _score(p: Person, q_nom: str, q_pere: str, q_gp: str) -> Optional[int]:
    """Return the score of p, or None when a provided field does not match."""
    score = 0
    for q, value, weights in (
        (q_nom, p.nom, NOM_WEIGHTS),
        (q_pere, p.nom_pere, PERE_WEIGHTS),
        (q_gp, p.nom_grand_pere, GRAND_PERE_WEIGHTS),
    ):
        if not q:
            continue
        s = _field_score(q, normalize_text(value), weights)
        if not s:
            return None
        score += s
    if p.clan:
        score += CLAN_BONUS
    return score


def suggest_persons(all_persons, query: PersonQuery, limit: int = 12) -> List[PersonMatch]:
    """Rank persons against a partial (nom, nomPere, nomGrandPere) query.

    Nothing typed means nothing suggested. Ties keep store order.
    """
    q_nom = normalize_text(query.nom)
    q_pere = normalize_text(query.nom_pere)
    q_gp = normalize_text(query.nom_grand_pere)
    if not (q_nom or q_pere or q_gp) or limit <= 0:
        return []

    scored: List[PersonMatch] = []
    for p in all_persons:
        s = _score(p, q_nom, q_pere, q_gp)
        if s is not None:
            scored.append(PersonMatch(person=p, score=s))

    scored.sort(key=lambda m: m.score, reverse=True)
    return scored[:limit]


def search_persons(all_persons, q: str) -> List[Person]:
    """Plain substring search on the full name "NOM PERE GRANDPERE"."""
    qnorm = normalize_text(q)
    if not qnorm:
        return []
    found = []
    for p in all_persons:
        full = normalize_text(p.full_name())
        if qnorm in full:
            found.append((full, p))
    found.sort(key=lambda x: x[0])
    return [p for _, p in found]
