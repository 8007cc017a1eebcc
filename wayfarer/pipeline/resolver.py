"""Text resolution: turn stored source text into what a player reads.

  1. Script fragments: the source's compiled script runs against the game,
     its `;`-joined result is split and substituted for the fragments in
     left-to-right order.
  2. Object markers: each ``{object:<id>}`` becomes an inline reference:
     ``<object>{"tooltip":"<description>","text":"<name>"}<object>``.
     Object names and descriptions only go through step 1.

Scripts run against a copy of the game, so resolving text never changes
the stored game state.
"""

from __future__ import annotations

import json
import logging
from uuid import UUID

from wayfarer.errors import NotFoundError, ResolutionError, ScriptResultError
from wayfarer.models import Game, Source
from wayfarer.scripting import OBJECT_PATTERN, SCRIPT_PATTERN, compile_source, execute_script
from wayfarer.scripting.compiler import RESULT_SEPARATOR
from wayfarer.storage import Storage

logger = logging.getLogger(__name__)

OBJECT_DELIMITER = "<object>"


def resolve_text(
    storage: Storage,
    source: Source,
    game: Game | None,
    language: str | None = None,
    processed: bool = True,
) -> str:
    """Resolve `source.text` for `game` in `language`.

    With `processed` False the raw text is returned unchanged.
    """
    if not processed:
        return source.text
    language = storage.settings.resolve_language(
        language or (game.language if game else None)
    )
    text = _replace_scripts(storage, source, game)
    return _replace_objects(storage, text, game, language)


def get_source_for_key(
    storage: Storage,
    key: UUID,
    adventure_id: int | None,
    language: str | None,
    processed: bool = True,
    game: Game | None = None,
) -> Source | None:
    """The source for `key`, as a copy whose text has been resolved."""
    source = storage.sources.get_for_key(key, adventure_id, language)
    if source is None:
        return None
    text = resolve_text(storage, source, game, language or source.language, processed)
    return source.model_copy(update={"text": text})


# ── Script fragments ──────────────────────────────────────

def _replace_scripts(storage: Storage, source: Source, game: Game | None) -> str:
    matches = SCRIPT_PATTERN.findall(source.text)
    if not matches:
        return source.text

    if source.script_id is None:
        script = compile_source(storage, source)
    else:
        script = storage.scripts.get(source.script_id)
        if script is None:
            raise NotFoundError(
                f"Source {source.key} links missing script {source.script_id}"
            )

    sandbox = _scratch_game(source, game)
    result = execute_script(storage, script.id, sandbox)
    values = result.split(RESULT_SEPARATOR) if len(matches) > 1 else [result]
    if len(values) < len(matches):
        raise ScriptResultError(
            f"Script {script.id} returned {len(values)} values for {len(matches)} fragments"
        )

    logger.debug("Resolved %d fragment(s) of source %s", len(matches), source.key)
    pending = iter(values)
    return SCRIPT_PATTERN.sub(lambda _m: next(pending), source.text)


def _scratch_game(source: Source, game: Game | None) -> Game:
    if game is None:
        return Game(adventure_id=source.adventure_id or 0)
    return game.model_copy(deep=True)


# ── Object markers ────────────────────────────────────────

def _replace_objects(
    storage: Storage, text: str, game: Game | None, language: str
) -> str:
    ids = [int(m) for m in OBJECT_PATTERN.findall(text)]
    if not ids:
        return text

    found = {o.adventure_object.id: o for o in storage.objects.get_with_sources(ids, language)}
    missing = sorted(set(ids) - found.keys())
    if missing:
        raise ResolutionError(f"Unknown adventure object(s) {missing}")

    rendered: dict[int, str] = {}
    for object_id, entry in found.items():
        name = _object_text(storage, entry.name_source, game)
        description = _object_text(storage, entry.description_source, game)
        payload = json.dumps(
            {"tooltip": description, "text": name},
            separators=(",", ":"),
            ensure_ascii=False,
        )
        rendered[object_id] = f"{OBJECT_DELIMITER}{payload}{OBJECT_DELIMITER}"

    return OBJECT_PATTERN.sub(lambda m: rendered[int(m.group(1))], text)


def _object_text(storage: Storage, source: Source | None, game: Game | None) -> str:
    if source is None:
        return ""
    return _replace_scripts(storage, source, game)
