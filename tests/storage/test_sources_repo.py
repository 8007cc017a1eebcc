"""Tests for the source repository."""

from uuid import uuid4

import pytest

from wayfarer.errors import PreconditionError
from wayfarer.models import Source
from wayfarer.storage import NIL_KEY


def add(storage, key, text, language="en", adventure_id=42):
    return storage.sources.add(
        Source(key=key, adventure_id=adventure_id, name=text, text=text, language=language)
    )


def test_add_defaults_language(storage):
    source = storage.sources.add(Source(key=uuid4(), adventure_id=1, text="hi"))
    assert source.language == "en"


def test_add_with_explicit_language(storage):
    source = storage.sources.add(Source(key=uuid4(), adventure_id=1, text="hola"), "es")
    assert source.language == "es"


def test_add_unknown_language_raises(storage):
    with pytest.raises(PreconditionError):
        storage.sources.add(Source(key=uuid4(), adventure_id=1, text="x", language="xx"))


def test_get_text_for_key_per_language(storage):
    key = uuid4()
    add(storage, key, "hello")
    add(storage, key, "hola", "es")
    assert storage.sources.get_text_for_key(key) == "hello"
    assert storage.sources.get_text_for_key(key, "es") == "hola"
    assert storage.sources.get_text_for_key(uuid4()) is None


# ── Lookup by key ─────────────────────────────────────────


def test_get_for_key_wrong_adventure_returns_none(storage):
    key = uuid4()
    add(storage, key, "x", "es")
    assert storage.sources.get_for_key(key, 43, "es") is None


def test_get_for_key_none_language_uses_default(storage):
    key = uuid4()
    add(storage, key, "spanish", "es")
    english = add(storage, key, "english", "en")
    assert storage.sources.get_for_key(key, 42, None).id == english.id


def test_get_for_key_unknown_key_returns_none(storage):
    add(storage, uuid4(), "x")
    assert storage.sources.get_for_key(uuid4(), 42, "en") is None


def test_nil_key_matches_any_adventure(storage):
    source = add(storage, NIL_KEY, "global", "es", adventure_id=None)
    assert storage.sources.get_for_key(NIL_KEY, 48, "es").id == source.id


def test_none_adventure_matches_any(storage):
    key = uuid4()
    source = add(storage, key, "x")
    assert storage.sources.get_for_key(key, None, "en").id == source.id


def test_get_for_key_unknown_language_raises(storage):
    with pytest.raises(PreconditionError):
        storage.sources.get_for_key(uuid4(), 42, "klingon")


# ── Listing and removal ───────────────────────────────────


def test_list_for_adventure_single_and_all_languages(storage):
    key = uuid4()
    add(storage, key, "en text")
    add(storage, key, "es text", "es")
    add(storage, uuid4(), "other adventure", adventure_id=7)
    assert [s.text for s in storage.sources.list_for_adventure(42, "es")] == ["es text"]
    assert len(storage.sources.list_all_languages_for_adventure(42)) == 2


def test_remove_source_respects_language(storage):
    source = add(storage, uuid4(), "x")
    assert storage.sources.remove_source(source.id, "es") is None
    assert storage.sources.remove_source(source.id, "en") is source
    assert storage.sources.get(source.id) is None


def test_remove_all_for_adventure(storage):
    add(storage, uuid4(), "a")
    add(storage, uuid4(), "b")
    kept = add(storage, uuid4(), "c", adventure_id=7)
    assert storage.sources.remove_all_for_adventure(42) == 2
    assert storage.sources.all() == [kept]


def test_find_by_script_and_uses_source(storage):
    key = uuid4()
    source = add(storage, key, "x")
    source.script_id = 9
    assert storage.sources.find_by_script(9) == [source]
    assert storage.sources.uses_source(42, key)
    assert not storage.sources.uses_source(7, key)
