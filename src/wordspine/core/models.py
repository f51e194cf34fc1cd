"""Data model for lexical ingestion.

A lexical source resolves a key to one or more :class:`Definition` values
(one per word sense). Each definition flattens into a single
:class:`Record`, the unit persisted to the store.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

# Alternate word-forms are stored joined by this delimiter.
ALTERNATIVES_DELIMITER = "|"


@dataclass(frozen=True)
class Definition:
    """
    One word-sense definition returned by a lexical lookup.

    Attributes:
        words: Member word-forms in source order (primary first)
        gloss: Free-text definition
        synset_type: Part-of-speech tag (e.g. "noun", "verb")
    """

    words: tuple[str, ...] = ()
    gloss: str = ""
    synset_type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Definition:
        """Build from a plain mapping (``words``, ``gloss``, ``pos``/``synset_type``)."""
        words = data.get("words")
        return cls(
            words=tuple(words) if isinstance(words, list | tuple) else (),
            gloss=data.get("gloss") or data.get("glossary") or "",
            synset_type=data.get("synset_type") or data.get("pos") or "",
        )


@dataclass(frozen=True)
class Record:
    """
    Normalized row persisted to the store.

    ``alternatives`` holds the non-primary word-forms joined by
    :data:`ALTERNATIVES_DELIMITER`; it is empty when there are none.
    """

    word: str
    part_of_speech: str = ""
    alternatives: str = ""
    gloss: str = ""

    def to_params(self) -> dict[str, str]:
        """Named bind parameters for the insert statement."""
        return asdict(self)

    @property
    def alternative_list(self) -> list[str]:
        if not self.alternatives:
            return []
        return self.alternatives.split(ALTERNATIVES_DELIMITER)


@dataclass
class Summary:
    """Outcome of a successful pipeline run."""

    keys_total: int = 0
    keys_processed: int = 0
    records_inserted: int = 0
    keys_failed: int = 0
    duration_seconds: float | None = None
    metrics: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {
            "keys_total": self.keys_total,
            "keys_processed": self.keys_processed,
            "records_inserted": self.records_inserted,
            "keys_failed": self.keys_failed,
        }
        if self.duration_seconds is not None:
            result["duration_seconds"] = round(self.duration_seconds, 3)
        result.update(self.metrics)
        return result
