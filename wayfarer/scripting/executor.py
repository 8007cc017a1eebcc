"""Run Lua scripts against a game's state in a fresh sandbox.

Scripts see one host object, ``game``, with typed accessors:

    game:GetGameStatePropertyBoolean(key)      game:SetGameStatePropertyBoolean(key, value)
    game:GetGameStatePropertyNumber(key)       game:SetGameStatePropertyNumber(key, value)
    game:GetGameStatePropertyString(key)       game:SetGameStatePropertyString(key, value)

Missing keys, and keys holding another type, read as false / 0 / "".
The entry point is ``run()``, which leaves its output in the global ``result``.
Writes go to a copy of the state that replaces `game.game_state` only when
the script finishes without error.
"""

from __future__ import annotations

import logging
from typing import Any

from lupa import LuaError, LuaRuntime

from wayfarer.errors import NotFoundError, ScriptExecutionError
from wayfarer.models import Game, GameStateValue, Script
from wayfarer.storage import Storage

from .includes import collect_include_closure

logger = logging.getLogger(__name__)

ENTRY_FUNCTION = "run"
RESULT_GLOBAL = "result"

# Globals that would reach the host process.
_BLOCKED_GLOBALS = (
    "os", "io", "debug", "package", "require", "dofile", "loadfile",
    "load", "loadstring", "collectgarbage", "python",
)


def _deny_attribute_access(obj: Any, attr_name: Any, is_setting: bool) -> Any:
    raise AttributeError("access to host attributes is not allowed")


def _normalize_number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class _GameStateApi:
    """The host side of the ``game`` table: typed access to one state map."""

    def __init__(self, state: dict[str, GameStateValue]) -> None:
        self.state = state

    def get_boolean(self, _self: Any, key: str) -> bool:
        value = self.state.get(str(key))
        return value if isinstance(value, bool) else False

    def get_number(self, _self: Any, key: str) -> int | float:
        value = self.state.get(str(key))
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return value

    def get_string(self, _self: Any, key: str) -> str:
        value = self.state.get(str(key))
        return value if isinstance(value, str) else ""

    def set_boolean(self, _self: Any, key: str, value: Any) -> None:
        self.state[str(key)] = bool(value)

    def set_number(self, _self: Any, key: str, value: Any) -> None:
        self.state[str(key)] = _normalize_number(value)

    def set_string(self, _self: Any, key: str, value: Any) -> None:
        self.state[str(key)] = "" if value is None else str(value)


def _new_runtime(api: _GameStateApi) -> LuaRuntime:
    lua = LuaRuntime(
        register_eval=False,
        register_builtins=False,
        attribute_filter=_deny_attribute_access,
    )
    g = lua.globals()
    for name in _BLOCKED_GLOBALS:
        g[name] = None
    g.game = lua.table_from({
        "GetGameStatePropertyBoolean": api.get_boolean,
        "GetGameStatePropertyNumber": api.get_number,
        "GetGameStatePropertyString": api.get_string,
        "SetGameStatePropertyBoolean": api.set_boolean,
        "SetGameStatePropertyNumber": api.set_number,
        "SetGameStatePropertyString": api.set_string,
    })
    return lua


def build_script_source(script: Script, includes: list[Script]) -> str:
    """Included code in closure order, then the script's own code."""
    return "\n".join([s.content for s in includes] + [script.content])


def run_script(script: Script, includes: list[Script], game: Game) -> str:
    """Run `script` (after `includes`) against `game` and return its result.

    Raises ScriptExecutionError when `run` is missing or the Lua code fails;
    `game.game_state` is left untouched in that case.
    """
    api = _GameStateApi(dict(game.game_state))
    lua = _new_runtime(api)
    try:
        lua.execute(build_script_source(script, includes))
        g = lua.globals()
        entry = g[ENTRY_FUNCTION]
        if entry is None:
            raise ScriptExecutionError(
                f"Script {script.id} ({script.name!r}) has no {ENTRY_FUNCTION}() function"
            )
        entry()
        result = g[RESULT_GLOBAL]
        text = "" if result is None else str(g.tostring(result))
    except (LuaError, TypeError, AttributeError) as exc:
        raise ScriptExecutionError(
            f"Script {script.id} ({script.name!r}) failed: {exc}"
        ) from exc

    game.game_state = api.state
    logger.debug("Script %d ran for game %d: %r", script.id, game.id, text)
    return text


def execute_script(storage: Storage, script_id: int, game: Game) -> str:
    """Load a script and its include closure, then run it against `game`."""
    script = storage.scripts.get(script_id)
    if script is None:
        raise NotFoundError(f"Script {script_id} not found")
    return run_script(script, collect_include_closure(storage, script_id), game)
