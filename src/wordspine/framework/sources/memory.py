"""Dict-backed lexical source.

Keys enumerate in insertion order, which makes runs over this source fully
deterministic at ``concurrency=1``. Used by tests and by callers that
already hold their lexicon in memory.

Usage:
    source = InMemorySource({
        "run": [
            {"words": ["run"], "gloss": "move fast", "pos": "verb"},
            {"words": ["run", "operate"], "gloss": "function", "pos": "verb"},
        ],
    })
    source.lookup("run")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from wordspine.core.errors import KeyNotFoundError
from wordspine.core.models import Definition


def as_definition(value: Definition | Mapping[str, Any]) -> Definition:
    if isinstance(value, Definition):
        return value
    return Definition.from_dict(dict(value))


class InMemorySource:
    """Lexical source over a ``{key: [definition, ...]}`` mapping."""

    def __init__(
        self,
        entries: Mapping[str, Sequence[Definition | Mapping[str, Any]]],
        *,
        name: str = "memory",
    ):
        self.name = name
        self._entries = {key: tuple(as_definition(d) for d in defs) for key, defs in entries.items()}

    def list(self) -> list[str]:
        return list(self._entries)

    def lookup(self, key: str) -> tuple[Definition, ...]:
        definitions = self._entries.get(key)
        if not definitions:
            raise KeyNotFoundError(key).with_context(source_name=self.name)
        return definitions

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"InMemorySource(name={self.name!r}, keys={len(self._entries)})"
