"""Compile the script fragments embedded in source text into one Lua script.

Source text marks Lua with ``{script: <statements> }``; each fragment must
``return`` the text that replaces it. A text with fragments gets one
generated script:

    function func0()
    <fragment 0>
    end
    function func1()
    <fragment 1>
    end
    function run()
        result0 = func0()
        result1 = func1()
        result = tostring(result0) .. ';' .. tostring(result1)
    end

A single fragment is passed through as ``result = result0``.
"""

from __future__ import annotations

import logging
import re

from wayfarer.errors import NotFoundError
from wayfarer.models import Script, Source
from wayfarer.storage import Storage

logger = logging.getLogger(__name__)

# One level of nested braces is allowed so fragments can build Lua tables.
SCRIPT_PATTERN = re.compile(r"\{script:((?:[^{}]|\{[^{}]*\})*)\}", re.DOTALL)
OBJECT_PATTERN = re.compile(r"\{object:(\d+)\}")

RESULT_SEPARATOR = ";"


def script_name_for(source: Source) -> str:
    return f"{source.name}_script"


def generate_source_script(text: str) -> str | None:
    """Lua code for the fragments in `text`, or None when there are none."""
    chunks = [m.group(1).strip() for m in SCRIPT_PATTERN.finditer(text)]
    if not chunks:
        return None

    lines: list[str] = []
    for i, chunk in enumerate(chunks):
        lines += [f"function func{i}()", chunk, "end"]
    lines.append("function run()")
    lines += [f"\tresult{i} = func{i}()" for i in range(len(chunks))]
    if len(chunks) == 1:
        lines.append("\tresult = result0")
    else:
        joined = f" .. '{RESULT_SEPARATOR}' .. ".join(
            f"tostring(result{i})" for i in range(len(chunks))
        )
        lines.append(f"\tresult = {joined}")
    lines.append("end")
    return "\n" + "\n".join(lines)


def compile_source(storage: Storage, source: Source) -> Script | None:
    """Keep `source`'s linked script in step with the fragments in its text.

    No fragments: the linked script (if any) is deleted and the link cleared.
    Fragments: the linked script is rewritten in place, or a new script named
    ``<source name>_script`` is created and linked. Returns the linked script.
    """
    code = generate_source_script(source.text)
    current = None
    if source.script_id is not None:
        current = storage.scripts.get(source.script_id)
        if current is None:
            raise NotFoundError(f"Source {source.key} links missing script {source.script_id}")

    if code is None:
        if current is not None:
            storage.scripts.remove(current)
            logger.info("Removed script %d from source %s", current.id, source.key)
        source.script_id = None
        return None

    if current is not None:
        current.content = code
        return current

    script = storage.scripts.add(Script(
        adventure_id=source.adventure_id or 0,
        name=script_name_for(source),
        content=code,
    ))
    source.script_id = script.id
    logger.info("Compiled source %s into script %d", source.key, script.id)
    return script
