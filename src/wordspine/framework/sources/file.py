"""
JSON lexicon file source.

Reads a lexicon exported as a single JSON object mapping each key to its
list of definitions::

    {
      "run": [
        {"words": ["run"], "gloss": "move fast", "pos": "verb"},
        {"words": ["run", "operate"], "gloss": "function", "pos": "verb"}
      ],
      "jog": [{"words": ["jog"], "gloss": "run slowly", "pos": "verb"}]
    }

The file is parsed once, on first use, under a lock so concurrent workers
never parse it twice.

Usage:
    from wordspine.framework.sources.file import JsonLexiconSource

    source = JsonLexiconSource("lexicon.json")
    keys = source.list()
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

from wordspine.core.errors import SourceUnavailableError
from wordspine.core.models import Definition
from wordspine.framework.sources.memory import InMemorySource


class JsonLexiconSource:
    """Lexical source backed by a JSON file."""

    def __init__(self, path: str | Path, *, name: str | None = None, encoding: str = "utf-8"):
        self._path = Path(path)
        self._encoding = encoding
        self.name = name or self._path.stem
        self._lock = threading.Lock()
        self._loaded: InMemorySource | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> InMemorySource:
        with self._lock:
            if self._loaded is not None:
                return self._loaded

            if not self._path.is_file():
                raise SourceUnavailableError(f"Lexicon file not found: {self._path}").with_context(
                    source_name=self.name
                )
            try:
                data = json.loads(self._path.read_text(encoding=self._encoding))
            except (OSError, ValueError) as e:
                raise SourceUnavailableError(
                    f"Cannot read lexicon file {self._path}: {e}", cause=e
                ).with_context(source_name=self.name) from e

            if not isinstance(data, dict):
                raise SourceUnavailableError(
                    f"Lexicon file must contain a JSON object, got {type(data).__name__}"
                ).with_context(source_name=self.name)

            entries = {
                str(key): [d for d in defs if isinstance(d, dict)]
                for key, defs in data.items()
                if isinstance(defs, list)
            }
            self._loaded = InMemorySource(entries, name=self.name)
            return self._loaded

    def list(self) -> list[str]:
        return self._load().list()

    def lookup(self, key: str) -> tuple[Definition, ...]:
        return self._load().lookup(key)

    def __repr__(self) -> str:
        return f"JsonLexiconSource(path={str(self._path)!r})"
