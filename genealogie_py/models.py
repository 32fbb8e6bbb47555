from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


STEP_FATHER = "pere"
STEP_MOTHER = "mere"
STEP_CHILD = "enfant"
PARENT_STEPS = (STEP_FATHER, STEP_MOTHER)


def _opt_str(v: Any) -> Optional[str]:
    # empty strings in the JSON records mean "not recorded"
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _norm_sex(v: Any) -> str:
    s = (str(v or "").strip().lower())[:1]
    return s if s in ("m", "f") else ""


@dataclass(frozen=True)
class Person:
    id: str
    nom: str = ""
    nom_pere: Optional[str] = None
    nom_grand_pere: Optional[str] = None
    # sex stored as 'm', 'f' or '' when unknown
    sexe: str = ""
    clan: Optional[str] = None
    pere_id: Optional[str] = None
    mere_id: Optional[str] = None
    jumeau_id: Optional[str] = None

    @property
    def is_male(self) -> bool:
        return self.sexe == "m"

    def full_name(self) -> str:
        """Return "NOM PERE GRANDPERE", skipping missing parts."""
        parts = [(s or "").strip() for s in (self.nom, self.nom_pere, self.nom_grand_pere)]
        return " ".join([p for p in parts if p])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "nom": self.nom,
            "nomPere": self.nom_pere,
            "nomGrandPere": self.nom_grand_pere,
            "sexe": self.sexe or None,
            "clan": self.clan,
            "pereId": self.pere_id,
            "mereId": self.mere_id,
            "jumeauId": self.jumeau_id,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Person":
        pid = _opt_str(d.get("id"))
        if pid is None:
            raise ValueError("person record without id")
        return Person(
            id=pid,
            nom=_opt_str(d.get("nom")) or "",
            nom_pere=_opt_str(d.get("nomPere")),
            nom_grand_pere=_opt_str(d.get("nomGrandPere")),
            sexe=_norm_sex(d.get("sexe")),
            clan=_opt_str(d.get("clan")),
            pere_id=_opt_str(d.get("pereId")),
            mere_id=_opt_str(d.get("mereId")),
            jumeau_id=_opt_str(d.get("jumeauId")),
        )


def _person_dict(p: Optional[Person]) -> Optional[Dict[str, Any]]:
    return p.to_dict() if p else None


@dataclass(frozen=True)
class KinStep:
    from_id: str
    to_id: str
    type: str  # 'pere' | 'mere' | 'enfant'

    def to_dict(self) -> Dict[str, Any]:
        return {"fromId": self.from_id, "toId": self.to_id, "type": self.type}


@dataclass
class Union:
    partner_id: Optional[str] = None
    partner: Optional[Person] = None
    children: List[Person] = field(default_factory=list)

    def child_ids(self) -> List[str]:
        return [c.id for c in self.children]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partnerId": self.partner_id,
            "partner": _person_dict(self.partner),
            "enfants": [c.to_dict() for c in self.children],
        }


@dataclass
class PersonQuery:
    nom: Optional[str] = None
    nom_pere: Optional[str] = None
    nom_grand_pere: Optional[str] = None

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PersonQuery":
        return PersonQuery(nom=d.get("nom"), nom_pere=d.get("nomPere"), nom_grand_pere=d.get("nomGrandPere"))


@dataclass
class PersonMatch:
    person: Person
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"person": self.person.to_dict(), "score": self.score, "label": self.person.full_name()}


@dataclass
class Relatives:
    person: Person
    father: Optional[Person] = None
    mother: Optional[Person] = None
    twin: Optional[Person] = None
    children: List[Person] = field(default_factory=list)
    unions: List[Union] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "person": self.person.to_dict(),
            "father": _person_dict(self.father),
            "mother": _person_dict(self.mother),
            "twin": _person_dict(self.twin),
            "children": [c.to_dict() for c in self.children],
            "unions": [u.to_dict() for u in self.unions],
        }


@dataclass
class Pivot:
    pivot_id: str
    child_toward_from: str
    child_toward_to: str
    pivot_index: int
    ids: List[str] = field(default_factory=list)
    partner_id: Optional[str] = None
    # False when the midpoint fallback was used
    is_branching: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pivotId": self.pivot_id,
            "childTowardFrom": self.child_toward_from,
            "childTowardTo": self.child_toward_to,
            "pivotIndex": self.pivot_index,
            "ids": list(self.ids),
            "partnerId": self.partner_id,
            "isBranching": self.is_branching,
        }


@dataclass
class RelationSchema:
    a: Person
    b: Person
    path: List[KinStep]
    pivot: Pivot
    pivot_person: Optional[Person] = None
    pivot_father: Optional[Person] = None
    pivot_mother: Optional[Person] = None
    partner: Optional[Person] = None
    anchor_from: Optional[Person] = None
    anchor_to: Optional[Person] = None
    chain_from: List[str] = field(default_factory=list)
    chain_to: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "a": self.a.to_dict(),
            "b": self.b.to_dict(),
            "path": [s.to_dict() for s in self.path],
            "pivot": self.pivot.to_dict(),
            "pivotPerson": _person_dict(self.pivot_person),
            "pivotFather": _person_dict(self.pivot_father),
            "pivotMother": _person_dict(self.pivot_mother),
            "partner": _person_dict(self.partner),
            "anchorFrom": _person_dict(self.anchor_from),
            "anchorTo": _person_dict(self.anchor_to),
            "chainFrom": list(self.chain_from),
            "chainTo": list(self.chain_to),
        }
