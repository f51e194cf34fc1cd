"""
WordNet lexical source backed by NLTK.

Keys are WordNet lemma names (``all_lemma_names()``, de-duplicated across
parts of speech, multi-word lemmas keep their underscores). A lookup
returns one :class:`Definition` per synset the lemma belongs to, with the
synset's lemma names as member words in WordNet order.

The corpus must be installed once per machine::

    python -m nltk.downloader wordnet

Usage:
    from wordspine.framework.sources.wordnet import WordNetSource

    source = WordNetSource()
    for definition in source.lookup("run"):
        print(definition.words, definition.synset_type)
"""

from __future__ import annotations

import threading
from typing import Any

from wordspine.core.errors import KeyNotFoundError, LookupFailedError, SourceUnavailableError
from wordspine.core.models import Definition

# WordNet synset type codes
SYNSET_TYPES = {
    "n": "noun",
    "v": "verb",
    "a": "adjective",
    "s": "adjective satellite",
    "r": "adverb",
}

_MISSING_CORPUS_HINT = "install it with: python -m nltk.downloader wordnet"


class WordNetSource:
    """
    Lexical source over an NLTK WordNet corpus reader.

    Args:
        corpus: A WordNet corpus reader. Defaults to ``nltk.corpus.wordnet``.
        include_examples: Append usage examples to the gloss the way the
            WordNet data files store it (``definition; "example"``).
    """

    name = "wordnet"

    def __init__(self, corpus: Any = None, *, include_examples: bool = True):
        if corpus is None:
            from nltk.corpus import wordnet as corpus
        self._corpus = corpus
        self._include_examples = include_examples
        self._lock = threading.Lock()
        # nltk reads synsets through one shared file handle per part of
        # speech (seek, readline, seek back), so lookups must not interleave.
        self._lookup_lock = threading.Lock()
        self._loaded = False

    def _reader(self) -> Any:
        # nltk's LazyCorpusLoader swaps itself for the real reader on first
        # attribute access, which is not safe to race from several workers.
        with self._lock:
            if not self._loaded:
                try:
                    self._corpus.synsets  # noqa: B018
                except LookupError as e:
                    raise SourceUnavailableError(
                        f"WordNet corpus is not available; {_MISSING_CORPUS_HINT}", cause=e
                    ).with_context(source_name=self.name) from e
                self._loaded = True
        return self._corpus

    def list(self) -> list[str]:
        reader = self._reader()
        try:
            with self._lookup_lock:
                return list(dict.fromkeys(reader.all_lemma_names()))
        except LookupError as e:
            raise SourceUnavailableError(
                f"Cannot enumerate WordNet lemmas: {e}", cause=e
            ).with_context(source_name=self.name) from e

    def lookup(self, key: str) -> list[Definition]:
        reader = self._reader()
        with self._lookup_lock:
            try:
                synsets = reader.synsets(key)
            except LookupError as e:
                raise LookupFailedError(key, f"WordNet lookup failed for {key!r}: {e}", cause=e).with_context(
                    source_name=self.name
                ) from e

            if not synsets:
                raise KeyNotFoundError(key).with_context(source_name=self.name)
            return [self.to_definition(synset) for synset in synsets]

    def to_definition(self, synset: Any) -> Definition:
        """Map one NLTK synset to a definition."""
        gloss = synset.definition() or ""
        if self._include_examples:
            examples = synset.examples()
            if examples:
                gloss = "; ".join([gloss] + [f'"{example}"' for example in examples])
        pos = synset.pos()
        return Definition(
            words=tuple(lemma.name() for lemma in synset.lemmas()),
            gloss=gloss,
            synset_type=SYNSET_TYPES.get(pos, pos or ""),
        )

    def __repr__(self) -> str:
        return f"WordNetSource(include_examples={self._include_examples})"
