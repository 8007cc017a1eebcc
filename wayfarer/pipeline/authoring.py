"""Authoring operations: sources, scripts and adventures.

Every operation runs in one transaction. Source text is recompiled on each
write so a source has a linked script exactly while its text holds script
fragments.
"""

from __future__ import annotations

import logging
import uuid

from wayfarer.errors import NotFoundError, PreconditionError
from wayfarer.models import Adventure, Script, Source
from wayfarer.scripting import compile_source
from wayfarer.storage import NIL_KEY, Storage

logger = logging.getLogger(__name__)


# ── Sources ───────────────────────────────────────────────

def create_source(
    storage: Storage, source: Source, languages: list[str] | None = None
) -> Source:
    """Store a new source, generating its key when it has none.

    With `languages`, one record is stored per language and only the record
    in the source's own language keeps the text. Returns that record.
    """
    with storage.transaction():
        if source.key == NIL_KEY:
            source.key = uuid.uuid4()
        own_language = storage.settings.resolve_language(source.language or None)
        if not languages:
            source.language = own_language
            return _add_compiled(storage, source)

        created = source
        for language in dict.fromkeys(languages):
            language = storage.settings.resolve_language(language)
            record = source.model_copy(update={
                "id": 0,
                "language": language,
                "script_id": None,
                "text": source.text if language == own_language else "",
            })
            record = _add_compiled(storage, record)
            if language == own_language:
                created = record
        return created


def _add_compiled(storage: Storage, source: Source) -> Source:
    stored = storage.sources.add(source)
    compile_source(storage, stored)
    return stored


def update_source(storage: Storage, source: Source) -> Source:
    """Replace the text of the stored (key, language) record and recompile it."""
    with storage.transaction():
        stored = storage.sources.get_for_key(source.key, source.adventure_id, source.language)
        if stored is None:
            raise NotFoundError(f"Source {source.key} ({source.language}) not found")
        stored.text = source.text
        if source.name:
            stored.name = source.name
        compile_source(storage, stored)
        return stored


def remove_source(storage: Storage, source_id: int, language: str | None = None) -> None:
    """Remove one source record and the script compiled from it."""
    with storage.transaction():
        source = storage.sources.remove_source(source_id, language)
        if source is None:
            raise NotFoundError(f"Source {source_id} not found")
        if source.script_id is not None:
            script = storage.scripts.get(source.script_id)
            if script is not None:
                storage.scripts.remove(script)
    logger.info("Source %d removed", source_id)


# ── Scripts ───────────────────────────────────────────────

def update_script(
    storage: Storage, script: Script, include_ids: list[int] | None = None
) -> Script:
    """Create (id 0) or update a script and rewrite its include edges in order."""
    with storage.transaction():
        if script.id == 0:
            stored = storage.scripts.add(script)
        else:
            stored = storage.scripts.get(script.id)
            if stored is None:
                raise NotFoundError(f"Script {script.id} not found")
            stored.name = script.name
            stored.type = script.type
            stored.content = script.content

        if include_ids is not None:
            storage.scripts.remove_includes(stored.id)
            for order, include_id in enumerate(dict.fromkeys(include_ids)):
                if include_id == stored.id:
                    raise PreconditionError(f"Script {stored.id} cannot include itself")
                if storage.scripts.get(include_id) is None:
                    raise NotFoundError(f"Included script {include_id} not found")
                storage.scripts.add_include(stored.id, include_id, order)
        return stored


def remove_script(storage: Storage, script_id: int) -> None:
    """Remove a script and clear every reference to it."""
    with storage.transaction():
        script = storage.scripts.get(script_id)
        if script is None:
            raise NotFoundError(f"Script {script_id} not found")

        for adventure in storage.adventures.find_by_script(script_id):
            if adventure.initialization_script_id == script_id:
                adventure.initialization_script_id = None
            if adventure.termination_script_id == script_id:
                adventure.termination_script_id = None
        for location in storage.locations.find_by_script(script_id):
            if location.enter_script_id == script_id:
                location.enter_script_id = None
            if location.exit_script_id == script_id:
                location.exit_script_id = None
        for route in storage.routes.find_by_script(script_id):
            route.route_taken_script_id = None
        for source in storage.sources.find_by_script(script_id):
            source.script_id = None

        storage.scripts.remove(script)
    logger.info("Script %d removed", script_id)


# ── Adventures ────────────────────────────────────────────

def create_adventure(
    storage: Storage,
    name: str,
    description: str = "",
    language: str | None = None,
) -> Adventure:
    """Create an adventure with its description stored in every configured language.

    The description text is kept only in `language`; other languages get an
    empty record to translate later. No description means no records.
    """
    if not name or not name.strip():
        raise PreconditionError("Adventure name must not be empty")
    with storage.transaction():
        adventure = storage.adventures.add(Adventure(name=name.strip()))
        if description:
            source = create_source(
                storage,
                Source(
                    key=NIL_KEY,
                    adventure_id=adventure.id,
                    name=f"{adventure.name}_description",
                    text=description,
                    language=storage.settings.resolve_language(language),
                ),
                languages=list(storage.settings.languages),
            )
            adventure.description_source_key = source.key
    logger.info("Adventure %d %r created", adventure.id, adventure.name)
    return adventure


def remove_adventure(storage: Storage, adventure_id: int) -> None:
    """Remove an adventure and everything it owns."""
    with storage.transaction():
        adventure = storage.adventures.get(adventure_id)
        if adventure is None:
            raise NotFoundError(f"Adventure {adventure_id} not found")

        for game in storage.games.list_for_adventure(adventure_id):
            storage.contents.remove_all_for_game(game.id)
            storage.games.remove(game)
        storage.objects.remove_all_for_adventure(adventure_id)
        storage.routes.remove_many(storage.routes.list_for_adventure(adventure_id))
        storage.locations.remove_many(storage.locations.list_for_adventure(adventure_id))
        storage.sources.remove_all_for_adventure(adventure_id)
        storage.scripts.remove_all_for_adventure(adventure_id)
        storage.adventures.remove(adventure)
    logger.info("Adventure %d removed", adventure_id)
