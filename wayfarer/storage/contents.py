"""Content repository: the append-only narrative log of each game."""

from __future__ import annotations

from uuid import UUID

from wayfarer.errors import PreconditionError
from wayfarer.models import Content, ContentFilter, Game

from .core import JsonStore, Table
from .games import GamesRepository

FORWARD = "f"
BACKWARD = "b"


class ContentsRepository(Table[Content]):
    name = "contents"
    model = Content

    def __init__(self, store: JsonStore, games: GamesRepository) -> None:
        super().__init__(store)
        self._games = games

    def get_all(self, game_id: int) -> list[Content]:
        """A game's content in ascending position order."""
        return sorted(self._where(lambda c: c.game_id == game_id), key=lambda c: c.position)

    def get_all_reverse(
        self, game_id: int, offset: int | None = None, count: int | None = None
    ) -> list[Content]:
        return _page(list(reversed(self.get_all(game_id))), offset, count)

    def get_at_position(self, game_id: int, position: int) -> Content | None:
        for content in self._where(lambda c: c.game_id == game_id):
            if content.position == position:
                return content
        return None

    def get_after_position(self, game_id: int, position: int) -> list[Content]:
        return [c for c in self.get_all(game_id) if c.position > position]

    def get_latest(self, game_id: int) -> Content | None:
        contents = self.get_all(game_id)
        return contents[-1] if contents else None

    def get_partial(self, game_id: int, content_filter: ContentFilter) -> list[Content]:
        """Page through a game's content.

        direction "f" (or unset) walks ascending positions, "b" descending;
        `start` entries are skipped and at most `count` are returned.
        """
        direction = (content_filter.direction or FORWARD).lower()
        if direction == FORWARD:
            ordered = self.get_all(game_id)
        elif direction == BACKWARD:
            ordered = list(reversed(self.get_all(game_id)))
        else:
            raise PreconditionError(f"Invalid content direction {content_filter.direction!r}")
        return _page(ordered, content_filter.start, content_filter.count)

    def add_for_game(self, game: Game, source_key: UUID) -> Content:
        """Append content at the game's next position and advance its high-water mark."""
        content = Content(game_id=game.id, position=game.next_content_position, source_key=source_key)
        game.next_content_position += 1
        return self.add(content)

    def remove_all_for_game(self, game_id: int) -> int:
        contents = self._where(lambda c: c.game_id == game_id)
        self.remove_many(contents)
        return len(contents)

    def find_by_source_key(self, key: UUID) -> list[Content]:
        return self._where(lambda c: c.source_key == key)

    def uses_source(self, adventure_id: int, key: UUID) -> bool:
        game_ids = {g.id for g in self._games.list_for_adventure(adventure_id)}
        return any(c.game_id in game_ids and c.source_key == key for c in self.all())

    def list_for_adventure(self, adventure_id: int) -> list[Content]:
        game_ids = {g.id for g in self._games.list_for_adventure(adventure_id)}
        return sorted(
            self._where(lambda c: c.game_id in game_ids),
            key=lambda c: (c.game_id, c.position),
        )


def _page(contents: list[Content], start: int | None, count: int | None) -> list[Content]:
    start = max(start or 0, 0)
    if count is None:
        return contents[start:]
    return contents[start:start + max(count, 0)]
