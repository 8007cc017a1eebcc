"""Include closure: every script a script needs loaded before it runs."""

from __future__ import annotations

from collections.abc import Iterator

from wayfarer.errors import NotFoundError
from wayfarer.models import Script
from wayfarer.storage import Storage


def collect_include_closure(storage: Storage, script_id: int) -> list[Script]:
    """Return the scripts `script_id` transitively includes, dependencies first.

    Includes are walked depth-first in `order`. A script is appended once its
    own includes are in the list, and only the first time it is reached, so a
    diamond A -> (B, C) -> D yields [D, B, C]. Visited ids are tracked on an
    explicit stack, which makes include cycles terminate. The starting script
    is never part of its own closure.
    """
    root = storage.scripts.get(script_id)
    if root is None:
        raise NotFoundError(f"Script {script_id} not found")

    closure: list[Script] = []
    visited = {root.id}
    stack: list[tuple[Script, Iterator[Script]]] = [
        (root, iter(storage.scripts.get_includes(root.id)))
    ]
    while stack:
        script, pending = stack[-1]
        child = next(pending, None)
        if child is None:
            stack.pop()
            if script is not root:
                closure.append(script)
            continue
        if child.id in visited:
            continue
        visited.add(child.id)
        stack.append((child, iter(storage.scripts.get_includes(child.id))))
    return closure
