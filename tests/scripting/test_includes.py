"""Tests for the include closure walk."""

import pytest

from wayfarer.errors import NotFoundError
from wayfarer.models import Script
from wayfarer.scripting import collect_include_closure


@pytest.fixture
def scripts(storage):
    def make(*names):
        return [storage.scripts.add(Script(adventure_id=1, name=n)) for n in names]
    return make


def names(closure):
    return [s.name for s in closure]


def test_no_includes_is_empty(storage, scripts):
    [a] = scripts("a")
    assert collect_include_closure(storage, a.id) == []


def test_unknown_script_raises(storage):
    with pytest.raises(NotFoundError):
        collect_include_closure(storage, 404)


def test_dependencies_come_first(storage, scripts):
    a, b, c = scripts("a", "b", "c")
    storage.scripts.add_include(a.id, b.id)
    storage.scripts.add_include(b.id, c.id)
    assert names(collect_include_closure(storage, a.id)) == ["c", "b"]


def test_diamond_lists_each_script_once(storage, scripts):
    a, b, c, d = scripts("a", "b", "c", "d")
    storage.scripts.add_include(a.id, b.id, order=0)
    storage.scripts.add_include(a.id, c.id, order=1)
    storage.scripts.add_include(b.id, d.id)
    storage.scripts.add_include(c.id, d.id)
    assert names(collect_include_closure(storage, a.id)) == ["d", "b", "c"]


def test_order_controls_sibling_sequence(storage, scripts):
    a, b, c = scripts("a", "b", "c")
    storage.scripts.add_include(a.id, b.id, order=5)
    storage.scripts.add_include(a.id, c.id, order=1)
    assert names(collect_include_closure(storage, a.id)) == ["c", "b"]


def test_cycle_terminates(storage, scripts):
    a, b, c = scripts("a", "b", "c")
    storage.scripts.add_include(a.id, b.id)
    storage.scripts.add_include(b.id, c.id)
    storage.scripts.add_include(c.id, a.id)
    assert names(collect_include_closure(storage, a.id)) == ["c", "b"]


def test_self_include_terminates(storage, scripts):
    [a] = scripts("a")
    storage.scripts.add_include(a.id, a.id)
    assert collect_include_closure(storage, a.id) == []


def test_closure_is_read_only(storage, scripts):
    a, b = scripts("a", "b")
    storage.scripts.add_include(a.id, b.id)
    before = [s.model_copy() for s in storage.scripts.all()]
    collect_include_closure(storage, a.id)
    assert storage.scripts.all() == before
