"""Script repository and the include graph.

Include edges live in their own table (`script_includes`). An edge
`included_in_id -> includes_id` means the first script needs the second
loaded before it runs; `order` fixes the load order among siblings.
"""

from __future__ import annotations

from uuid import UUID

from wayfarer.models import Script, ScriptInclude

from .core import JsonStore, Table


class ScriptIncludesTable(Table[ScriptInclude]):
    name = "script_includes"
    model = ScriptInclude


class ScriptsRepository(Table[Script]):
    name = "scripts"
    model = Script

    def __init__(self, store: JsonStore) -> None:
        super().__init__(store)
        self.includes = ScriptIncludesTable(store)

    def get_by_name(self, adventure_id: int, name: str) -> Script | None:
        for script in self.list_for_adventure(adventure_id):
            if script.name == name:
                return script
        return None

    def list_for_adventure(self, adventure_id: int) -> list[Script]:
        return sorted(
            self._where(lambda s: s.adventure_id == adventure_id), key=lambda s: s.id
        )

    def remove(self, row: Script) -> None:
        """Remove a script together with every include edge touching it."""
        self.remove_includes(row.id)
        self.remove_included_in(row.id)
        super().remove(row)

    def remove_all_for_adventure(self, adventure_id: int) -> int:
        scripts = self.list_for_adventure(adventure_id)
        self.remove_many(scripts)
        return len(scripts)

    def with_source_reference(self, adventure_id: int, key: UUID) -> list[Script]:
        """Scripts whose code mentions `key` as a literal string."""
        needle = str(key).lower()
        return [
            s for s in self.list_for_adventure(adventure_id)
            if needle in s.content.lower()
        ]

    # ── Include graph ─────────────────────────────────────

    def add_include(self, script_id: int, includes_id: int, order: int = 0) -> ScriptInclude:
        return self.includes.add(
            ScriptInclude(included_in_id=script_id, includes_id=includes_id, order=order)
        )

    def get_include(self, script_id: int, includes_id: int) -> ScriptInclude | None:
        for edge in self.includes.all():
            if edge.included_in_id == script_id and edge.includes_id == includes_id:
                return edge
        return None

    def get_include_edges(self, script_id: int) -> list[ScriptInclude]:
        """Outgoing include edges of a script, sorted by order then id."""
        edges = [e for e in self.includes.all() if e.included_in_id == script_id]
        return sorted(edges, key=lambda e: (e.order, e.id))

    def get_includes(self, script_id: int) -> list[Script]:
        """Scripts directly included by `script_id`, in include order."""
        scripts = (self.get(e.includes_id) for e in self.get_include_edges(script_id))
        return [s for s in scripts if s is not None]

    def get_included_in(self, script_id: int) -> list[Script]:
        """Scripts that directly include `script_id`."""
        edges = [e for e in self.includes.all() if e.includes_id == script_id]
        scripts = (self.get(e.included_in_id) for e in sorted(edges, key=lambda e: e.id))
        return [s for s in scripts if s is not None]

    def remove_includes(self, script_id: int) -> None:
        """Drop every outgoing include edge of a script."""
        self.includes.remove_many(
            [e for e in self.includes.all() if e.included_in_id == script_id]
        )

    def remove_included_in(self, script_id: int) -> None:
        """Drop every edge pointing at a script."""
        self.includes.remove_many(
            [e for e in self.includes.all() if e.includes_id == script_id]
        )
