"""Small example script that demonstrates the relationship utilities.

Builds a tiny dataset in memory and prints:
 - the unions of the family head
 - suggestions for a partial name
 - the shortest path between two cousins and its pivot

Run:
    python scripts/example_relationships.py
"""
from pathlib import Path
from pprint import pprint
import sys

# Ensure repo root is on sys.path when running this script directly
repo_root = Path(__file__).resolve().parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from genealogie_py.storage import RecordStore
from genealogie_py.models import PersonQuery
from genealogie_py.relatives import unions_of
from genealogie_py.search import suggest_persons
from genealogie_py.relationship import find_kin_path
from genealogie_py.pivot import relation_schema


def build_demo() -> RecordStore:
    #        Issa + Aicha          Issa + ?
    #        /        \               |
    #     Moussa     Mariama        Ali
    #       |           |
    #     Oumar       Fanta
    return RecordStore.from_dicts([
        {"id": "issa_000001", "nom": "ISSA", "nomPere": "MAMIA", "sexe": "m", "clan": "Kel"},
        {"id": "aicha_000002", "nom": "AÏCHA", "sexe": "f"},
        {"id": "moussa_000003", "nom": "MOUSSA", "nomPere": "ISSA", "sexe": "m", "pereId": "issa_000001", "mereId": "aicha_000002"},
        {"id": "mariama_000004", "nom": "MARIAMA", "nomPere": "ISSA", "sexe": "f", "pereId": "issa_000001", "mereId": "aicha_000002"},
        {"id": "ali_000005", "nom": "ALI", "nomPere": "ISSA", "sexe": "m", "pereId": "issa_000001"},
        {"id": "oumar_000006", "nom": "OUMAR", "nomPere": "MOUSSA", "nomGrandPere": "ISSA", "sexe": "m", "pereId": "moussa_000003"},
        {"id": "fanta_000007", "nom": "FANTA", "nomPere": "BOUBACAR", "sexe": "f", "mereId": "mariama_000004"},
    ])


def main():
    store = build_demo()

    print("Unions of ISSA:")
    for u in unions_of(store, "p_issa"):
        partner = u.partner.full_name() if u.partner else "(unknown)"
        print(f"  {partner}: {[c.nom for c in u.children]}")

    print("\nSuggestions for 'ma':")
    for m in suggest_persons(store, PersonQuery(nom="ma")):
        print(f"  {m.score:>3} {m.person.full_name()}")

    print("\nPath OUMAR -> FANTA:")
    for step in find_kin_path(store, "oumar", "fanta") or []:
        print(f"  {step.from_id} --{step.type}--> {step.to_id}")

    print("\nRelation schema:")
    pprint(relation_schema(store, "oumar", "fanta").to_dict())


if __name__ == "__main__":
    main()
