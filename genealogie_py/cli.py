import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .models import PersonQuery
from .pivot import resolve_pivot
from .relationship import find_kin_path, path_summary
from .relatives import relatives
from .resolver import resolve_person_id
from .search import suggest_persons
from .storage import RecordStore, load_store


def _open_store(args: argparse.Namespace) -> RecordStore:
    cfg = load_config(args.config)
    if args.data_file:
        cfg.data_file = Path(args.data_file)
    return load_store(cfg)


def _label(p) -> str:
    return f"{p.full_name()} [{p.id}]" if p else "-"


def _run_person(args: argparse.Namespace) -> int:
    store = _open_store(args)
    rel = relatives(store, args.id)
    if rel is None:
        print(f"Person not found: {args.id}", file=sys.stderr)
        return 1
    print(_label(rel.person))
    print(f"  father: {_label(rel.father)}")
    print(f"  mother: {_label(rel.mother)}")
    if rel.twin:
        print(f"  twin:   {_label(rel.twin)}")
    for u in rel.unions:
        partner = _label(u.partner) if u.partner else (u.partner_id or "unknown partner")
        print(f"  with {partner}:")
        for c in u.children:
            print(f"    - {_label(c)}")
    return 0


def _run_suggest(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    store = _open_store(args)
    limit = cfg.suggest_limit if args.limit is None else args.limit
    query = PersonQuery(nom=args.nom, nom_pere=args.pere, nom_grand_pere=args.grand_pere)
    matches = suggest_persons(store, query, limit=limit)
    for m in matches:
        print(f"{m.score:>4}  {_label(m.person)}")
    return 0 if matches else 1


def _run_relation(args: argparse.Namespace) -> int:
    store = _open_store(args)
    a = resolve_person_id(store, args.a)
    b = resolve_person_id(store, args.b)
    for raw, rid in ((args.a, a), (args.b, b)):
        if rid is None:
            print(f"Person not found: {raw}", file=sys.stderr)
            return 1
    path = find_kin_path(store, a, b)
    if path is None:
        print("No link found between these persons.", file=sys.stderr)
        return 1
    print(f"distance={len(path)}")
    for frm, rel, to in path_summary(store, path):
        print(f"  {frm} -> {rel}: {to}")
    if path:
        pivot = resolve_pivot(store, path, a)
        kind = "common ancestor" if pivot.is_branching else "middle of chain"
        print(f"pivot ({kind}): {_label(store.get(pivot.pivot_id))}")
        if pivot.partner_id:
            print(f"  with {_label(store.get(pivot.partner_id))}")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import os
    import uvicorn

    # the app loads its own config at import; hand the overrides over via env
    if args.config:
        os.environ["GENEALOGIE_CONFIG"] = args.config
    if args.data_file:
        os.environ["GENEALOGIE_DATA_FILE"] = args.data_file
    cfg = load_config()
    uvicorn.run("genealogie_py.web.app:app", host=args.host or cfg.host, port=args.port or cfg.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genealogie-py",
        description="Query relatives and kinship paths in a genealogy dataset",
    )
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument("--data-file", default=None, help="Path to the persons JSON file")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    person = subparsers.add_parser("person", help="Show parents, twin and unions of a person")
    person.add_argument("id", help="Person id (legacy ids and names accepted)")
    person.set_defaults(func=_run_person)

    suggest = subparsers.add_parser("suggest", help="Suggest persons from a partial name")
    suggest.add_argument("--nom", default=None)
    suggest.add_argument("--pere", default=None, help="Father's name")
    suggest.add_argument("--grand-pere", default=None, help="Grandfather's name")
    suggest.add_argument("--limit", type=int, default=None, help="Defaults to the configured suggest_limit")
    suggest.set_defaults(func=_run_suggest)

    relation = subparsers.add_parser("relation", help="Shortest kinship path between two persons")
    relation.add_argument("a")
    relation.add_argument("b")
    relation.set_defaults(func=_run_relation)

    serve = subparsers.add_parser("serve", help="Start the JSON HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=_run_serve)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 2
    if args.verbose:
        logging.basicConfig(level=logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
