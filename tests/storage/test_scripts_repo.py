"""Tests for scripts and the include graph."""

from uuid import uuid4

from wayfarer.models import Script


def add(storage, name, content="", adventure_id=1):
    return storage.scripts.add(Script(adventure_id=adventure_id, name=name, content=content))


def test_get_by_name_and_list(storage):
    a = add(storage, "a")
    add(storage, "b", adventure_id=2)
    assert storage.scripts.get_by_name(1, "a") is a
    assert storage.scripts.get_by_name(1, "b") is None
    assert storage.scripts.list_for_adventure(1) == [a]


def test_includes_sorted_by_order(storage):
    main, first, second = add(storage, "main"), add(storage, "first"), add(storage, "second")
    storage.scripts.add_include(main.id, second.id, order=2)
    storage.scripts.add_include(main.id, first.id, order=1)
    assert [s.name for s in storage.scripts.get_includes(main.id)] == ["first", "second"]
    assert storage.scripts.get_include(main.id, first.id).order == 1
    assert storage.scripts.get_include(first.id, main.id) is None


def test_included_in(storage):
    lib, a, b = add(storage, "lib"), add(storage, "a"), add(storage, "b")
    storage.scripts.add_include(a.id, lib.id)
    storage.scripts.add_include(b.id, lib.id)
    assert storage.scripts.get_included_in(lib.id) == [a, b]


def test_remove_script_drops_edges_both_ways(storage):
    lib, mid, top = add(storage, "lib"), add(storage, "mid"), add(storage, "top")
    storage.scripts.add_include(mid.id, lib.id)
    storage.scripts.add_include(top.id, mid.id)
    storage.scripts.remove(mid)
    assert storage.scripts.includes.all() == []
    assert storage.scripts.get_includes(top.id) == []


def test_remove_all_for_adventure(storage):
    add(storage, "a")
    add(storage, "b")
    other = add(storage, "c", adventure_id=2)
    assert storage.scripts.remove_all_for_adventure(1) == 2
    assert storage.scripts.all() == [other]


def test_with_source_reference_matches_literal_key(storage):
    key = uuid4()
    uses = add(storage, "uses", f'local k = "{str(key).upper()}"')
    add(storage, "other", "return 1")
    assert storage.scripts.with_source_reference(1, key) == [uses]
