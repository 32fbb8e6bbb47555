from genealogie_py.storage import RecordStore
from genealogie_py.relationship import find_kin_path, path_ids, kin_distance, path_summary
from genealogie_py.models import KinStep


def _store():
    #        A + M
    #       /     \
    #      B       C      (B has no recorded mother)
    #      |       |
    #      D       E
    #                     Z (isolated)
    return RecordStore.from_dicts([
        {"id": "A", "nom": "ADAMA", "sexe": "m"},
        {"id": "M", "nom": "MARIAM", "sexe": "f"},
        {"id": "B", "nom": "BOUBA", "sexe": "m", "pereId": "A"},
        {"id": "C", "nom": "CODOU", "sexe": "f", "pereId": "A", "mereId": "M"},
        {"id": "D", "nom": "DEMBA", "sexe": "m", "pereId": "B"},
        {"id": "E", "nom": "EMMA", "sexe": "f", "mereId": "C"},
        {"id": "Z", "nom": "ZEINAB", "sexe": "f"},
    ])


def test_siblings_through_father():
    st = _store()
    path = find_kin_path(st, "B", "C")
    assert path == [KinStep("B", "A", "pere"), KinStep("A", "C", "enfant")]
    assert path_ids("B", path) == ["B", "A", "C"]


def test_parent_child_one_step():
    st = _store()
    assert find_kin_path(st, "C", "M") == [KinStep("C", "M", "mere")]
    assert find_kin_path(st, "M", "C") == [KinStep("M", "C", "enfant")]


def test_same_person_is_empty_path():
    st = _store()
    for p in st:
        assert find_kin_path(st, p.id, p.id) == []
    # also when the two ids only resolve to the same person
    assert find_kin_path(st, "A", "p_adama") == []


def test_unrelated_or_unknown_is_none():
    st = _store()
    assert find_kin_path(st, "Z", "B") is None
    assert find_kin_path(st, "nobody", "B") is None
    assert find_kin_path(st, "B", "") is None
    assert kin_distance(st, "Z", "B") is None


def test_shortest_path_between_cousins():
    st = _store()
    path = find_kin_path(st, "D", "E")
    assert [s.type for s in path] == ["pere", "pere", "enfant", "enfant"]
    assert path_ids("D", path) == ["D", "B", "A", "C", "E"]


def test_path_length_is_symmetric():
    st = _store()
    ids = [p.id for p in st]
    for a in ids:
        for b in ids:
            ab = kin_distance(st, a, b)
            ba = kin_distance(st, b, a)
            assert ab == ba


def test_steps_chain_together():
    st = _store()
    path = find_kin_path(st, "E", "D")
    assert path[0].from_id == "E" and path[-1].to_id == "D"
    for prev, nxt in zip(path, path[1:]):
        assert prev.to_id == nxt.from_id


def test_tie_break_prefers_father_edge():
    # two equally short routes from the child to its sibling: via father or mother
    st = RecordStore.from_dicts([
        {"id": "f", "nom": "F", "sexe": "m"},
        {"id": "m", "nom": "M", "sexe": "f"},
        {"id": "s1", "nom": "S1", "pereId": "f", "mereId": "m"},
        {"id": "s2", "nom": "S2", "pereId": "f", "mereId": "m"},
    ])
    path = find_kin_path(st, "s1", "s2")
    assert path_ids("s1", path) == ["s1", "f", "s2"]


def test_dangling_parent_is_not_traversed():
    st = RecordStore.from_dicts([
        {"id": "a", "nom": "A", "pereId": "ghost"},
        {"id": "b", "nom": "B", "pereId": "ghost"},
    ])
    assert find_kin_path(st, "a", "b") is None


def test_path_summary_labels():
    st = _store()
    rows = path_summary(st, find_kin_path(st, "B", "C"))
    assert rows == [("BOUBA", "father", "ADAMA"), ("ADAMA", "child", "CODOU")]


def test_twin_pointer_is_not_an_edge():
    st = RecordStore.from_dicts([
        {"id": "t1", "nom": "ASSANE", "jumeauId": "t2"},
        {"id": "t2", "nom": "OUSSEYNOU", "jumeauId": "t1"},
    ])
    assert find_kin_path(st, "t1", "t2") is None
    assert find_kin_path(st, "t1", "t1") == []
