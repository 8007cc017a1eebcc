"""Find source text nothing in an adventure refers to.

A source key counts as referenced when it is the adventure's initial or
description key, a location's text, either text of a route, the key of any
content in the adventure's games, or appears literally in one of the
adventure's scripts. The check is one pass over direct references: keys
reached only through script includes or object markers are reported.
"""

from __future__ import annotations

from uuid import UUID

from wayfarer.errors import NotFoundError
from wayfarer.models import Source
from wayfarer.storage import Storage


def referenced_keys(storage: Storage, adventure_id: int) -> set[UUID]:
    adventure = storage.adventures.get(adventure_id)
    if adventure is None:
        raise NotFoundError(f"Adventure {adventure_id} not found")

    keys = {adventure.initial_source_key, adventure.description_source_key}
    keys.update(loc.source_key for loc in storage.locations.list_for_adventure(adventure_id))
    for route in storage.routes.list_for_adventure(adventure_id):
        keys.update((route.source_key, route.route_taken_source_key))
    keys.update(c.source_key for c in storage.contents.list_for_adventure(adventure_id))
    keys.discard(None)
    return keys  # type: ignore[return-value]


def find_unreferenced_sources(storage: Storage, adventure_id: int) -> list[Source]:
    """Sources of the adventure, in every language, whose key is unreferenced."""
    keys = referenced_keys(storage, adventure_id)
    script_text = "\n".join(
        s.content.lower() for s in storage.scripts.list_for_adventure(adventure_id)
    )
    return [
        source
        for source in storage.sources.list_all_languages_for_adventure(adventure_id)
        if source.key not in keys and str(source.key).lower() not in script_text
    ]
