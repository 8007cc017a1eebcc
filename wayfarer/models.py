"""Core domain models.

Storage, scripting and the pipeline all operate on these types.
Pydantic is used for validation and serialisation at every data boundary.
A row with `id == 0` has not been stored yet; storage assigns ids on add.
"""

from __future__ import annotations

import json
from typing import Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, field_validator

ScriptType = Literal["lua"]

GameStateValue = Union[bool, int, float, str]

TransitionStage = Literal[
    "at_origin",
    "exit_run",
    "route_run",
    "location_updated",
    "enter_run",
    "termination_run",
    "done",
]


class Adventure(BaseModel):
    """Top-level authored work; a graph of locations."""

    id: int = 0
    name: str
    initial_source_key: UUID | None = None
    description_source_key: UUID | None = None
    initialization_script_id: int | None = None
    termination_script_id: int | None = None


class Location(BaseModel):
    """A node in the adventure graph."""

    id: int = 0
    adventure_id: int
    name: str = ""
    initial: bool = False
    final: bool = False
    source_key: UUID | None = None
    enter_script_id: int | None = None
    exit_script_id: int | None = None


class Route(BaseModel):
    """A directed edge from `location_id` to `destination_location_id`."""

    id: int = 0
    location_id: int
    destination_location_id: int
    name: str = ""
    source_key: UUID | None = None  # describes the choice
    route_taken_source_key: UUID | None = None  # narrated once taken
    route_taken_script_id: int | None = None


class Script(BaseModel):
    """A unit of Lua code belonging to an adventure."""

    id: int = 0
    adventure_id: int
    name: str = ""
    type: ScriptType = "lua"
    content: str = ""


class ScriptInclude(BaseModel):
    """Ordered edge: script `included_in_id` depends on script `includes_id`."""

    id: int = 0
    included_in_id: int
    includes_id: int
    order: int = 0


class Source(BaseModel):
    """Keyed, language-specific narrative text.

    `script_id` is set only while `text` holds at least one embedded
    script fragment.
    """

    id: int = 0
    key: UUID
    adventure_id: int | None = None
    name: str = ""
    text: str = ""
    language: str = ""
    script_id: int | None = None


class AdventureObject(BaseModel):
    """An in-world item with name/description text, placeable in locations."""

    id: int = 0
    adventure_id: int
    name: str = ""
    name_source_key: UUID | None = None
    description_source_key: UUID | None = None
    location_ids: list[int] = Field(default_factory=list)


class Game(BaseModel):
    """One playthrough of an adventure.

    `game_state` is an open map of scalar properties written by scripts.
    It is stored as a compact JSON blob, e.g. ``{"Visited":true,"Gold":42}``.
    """

    id: int = 0
    adventure_id: int
    location_id: int | None = None
    language: str | None = None
    game_state: dict[str, GameStateValue] = Field(default_factory=dict)
    location_update_timestamp: int = 0  # ms since epoch
    next_content_position: int = 0

    @field_validator("game_state", mode="before")
    @classmethod
    def _parse_state_blob(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value.strip() else {}
        return value

    @field_serializer("game_state")
    def _dump_state_blob(self, value: dict[str, GameStateValue]) -> str:
        return game_state_blob(value)


class Content(BaseModel):
    """Append-only narrative log entry for a game. Never updated."""

    id: int = 0
    game_id: int
    position: int
    source_key: UUID


class ContentFilter(BaseModel):
    """Paging request for a game's content log.

    direction: "f" (ascending positions, the default) or "b" (descending).
    start:     number of entries to skip in that order.
    count:     maximum number of entries to return.
    """

    direction: str | None = None
    start: int | None = None
    count: int | None = None


class ObjectWithSources(BaseModel):
    """An adventure object with its name/description text in one language."""

    adventure_object: AdventureObject
    name_source: Source | None = None
    description_source: Source | None = None


class TransitionResult(BaseModel):
    """Outcome of taking a route: the updated game and the content it produced."""

    game: Game
    contents: list[Content]
    stages: list[TransitionStage]


def game_state_blob(state: dict[str, GameStateValue]) -> str:
    """Serialize a game state map compactly, preserving key order."""
    return json.dumps(state, separators=(",", ":"))
