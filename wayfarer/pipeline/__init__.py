"""Runtime and authoring pipeline over storage.

  resolver     Resolve source text for a game: run embedded script fragments,
               then expand {object:<id>} markers into inline references.
  transition   Take a route: exit -> route-taken -> enter -> termination
               scripts, one content row for the route-taken text and one for
               the destination's text, all committed together.
  games        Start a game (initialization script + opening content),
               remove games, read a game's content text.
  authoring    Create/update/remove sources (recompiled on every write),
               scripts with ordered includes, and adventures.
  garbage      List an adventure's sources nothing refers to.

Every operation that writes runs in `storage.transaction()` and raises one
of the `wayfarer.errors` exceptions on failure, leaving storage unchanged.
"""

from .authoring import (  # noqa: F401
    create_adventure,
    create_source,
    remove_adventure,
    remove_script,
    remove_source,
    update_script,
    update_source,
)
from .games import (  # noqa: F401
    get_content_text_for_key,
    remove_game,
    remove_games,
    start_game,
)
from .garbage import find_unreferenced_sources  # noqa: F401
from .resolver import get_source_for_key, resolve_text  # noqa: F401
from .transition import change_location_via_route  # noqa: F401
