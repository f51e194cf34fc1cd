"""Flatten lexical definitions into store records.

Pure functions, no I/O. A malformed member-word list never raises: it
degrades to an empty ``alternatives`` string.

    >>> flatten(Definition(words=("run", "operate"), gloss="function", synset_type="verb"))
    Record(word='run', part_of_speech='verb', alternatives='operate', gloss='function')
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from wordspine.core.models import ALTERNATIVES_DELIMITER, Definition, Record


def _member_words(words: Any) -> list[str]:
    if not isinstance(words, list | tuple):
        return []
    return [w for w in words if isinstance(w, str) and w.strip()]


def flatten(definition: Definition) -> Record:
    """
    Map one definition to one record.

    The first member word-form becomes ``word``; the rest, in their given
    order and excluding repeats of the primary, are joined with ``|``.
    """
    words = _member_words(definition.words)
    word = words[0] if words else ""
    alternatives = ALTERNATIVES_DELIMITER.join(w for w in words[1:] if w != word)
    return Record(
        word=word,
        part_of_speech=definition.synset_type or "",
        alternatives=alternatives,
        gloss=definition.gloss or "",
    )


def flatten_all(
    definitions: Iterable[Definition],
    on_skip: Callable[[Definition], None] | None = None,
) -> list[Record]:
    """
    Flatten definitions in order.

    A definition without a primary word yields no record; it is passed to
    ``on_skip`` instead so the caller can report it.
    """
    records = []
    for definition in definitions:
        record = flatten(definition)
        if record.word:
            records.append(record)
        elif on_skip is not None:
            on_skip(definition)
    return records


__all__ = ["flatten", "flatten_all"]
