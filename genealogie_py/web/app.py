from fastapi import FastAPI, HTTPException, Query
from typing import Optional
import logging

from ..config import load_config
from ..models import PersonQuery
from ..pivot import relation_schema, resolve_pivot
from ..relationship import find_kin_path
from ..relatives import relatives
from ..resolver import resolve_person_id
from ..search import search_persons, suggest_persons
from ..storage import RecordStore, load_store

app = FastAPI(title="genealogie-py")

# Ensure basic logging is configured so integration-test server logs at INFO are visible
logging.basicConfig(level=logging.INFO)

cfg = load_config()

# The store is built at startup, not at import time, so importing this module
# (tests, tooling) never touches the dataset. It is read-only afterwards and
# shared by every request.
store: Optional[RecordStore] = None


@app.on_event("startup")
def _load_store_on_startup():
    global store
    store = load_store(cfg)
    logging.info("Record store ready: %d persons from %s", len(store), str(cfg.data_file))


def get_store() -> RecordStore:
    global store
    if store is None:
        store = load_store(cfg)
    return store


def _resolve_or_404(st: RecordStore, pid: str) -> str:
    rid = resolve_person_id(st, pid)
    if rid is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return rid


def _pair(a_id: Optional[str], b_id: Optional[str], a: Optional[str], b: Optional[str]):
    # accept the old a/b parameters as well as aId/bId
    first = (a_id or a or "").strip()
    second = (b_id or b or "").strip()
    if not first or not second:
        raise HTTPException(status_code=400, detail="Two persons are required (aId/bId or a/b)")
    return first, second


@app.get("/api/person/{pid}")
def api_person(pid: str):
    """Person with parents, twin, children and unions."""
    st = get_store()
    rel = relatives(st, _resolve_or_404(st, pid))
    if rel is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return rel.to_dict()


@app.get("/api/suggest")
def api_suggest(
    nom: Optional[str] = None,
    nom_pere: Optional[str] = Query(None, alias="nomPere"),
    nom_grand_pere: Optional[str] = Query(None, alias="nomGrandPere"),
    limit: Optional[int] = None,
):
    st = get_store()
    query = PersonQuery(nom=nom, nom_pere=nom_pere, nom_grand_pere=nom_grand_pere)
    matches = suggest_persons(st, query, limit=cfg.suggest_limit if limit is None else limit)
    return [m.to_dict() for m in matches]


@app.get("/api/search")
def api_search(q: str = ""):
    return [p.to_dict() for p in search_persons(get_store(), q)]


@app.get("/api/relation")
def api_relation(
    a_id: Optional[str] = Query(None, alias="aId"),
    b_id: Optional[str] = Query(None, alias="bId"),
    a: Optional[str] = None,
    b: Optional[str] = None,
):
    """Shortest kinship path between two persons and its pivot.

    Unknown persons give a 404; two known but unrelated persons give
    ``path: null``.
    """
    st = get_store()
    first, second = _pair(a_id, b_id, a, b)
    ra = _resolve_or_404(st, first)
    rb = _resolve_or_404(st, second)
    path = find_kin_path(st, ra, rb)
    if path is None:
        logging.info("No kinship path between %s and %s", ra, rb)
        return {"aId": ra, "bId": rb, "path": None, "pivot": None}
    return {
        "aId": ra,
        "bId": rb,
        "path": [s.to_dict() for s in path],
        "pivot": resolve_pivot(st, path, ra).to_dict(),
    }


@app.get("/api/relation/schema")
def api_relation_schema(
    a_id: Optional[str] = Query(None, alias="aId"),
    b_id: Optional[str] = Query(None, alias="bId"),
    a: Optional[str] = None,
    b: Optional[str] = None,
):
    st = get_store()
    first, second = _pair(a_id, b_id, a, b)
    schema = relation_schema(st, first, second)
    if schema is None:
        raise HTTPException(status_code=404, detail="No link found between these persons")
    return schema.to_dict()
