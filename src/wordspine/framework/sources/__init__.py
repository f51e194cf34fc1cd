"""
Lexical source adapters.

All adapters satisfy :class:`wordspine.core.protocols.LexicalSource`.
"""

from pathlib import Path

from wordspine.core.errors import MissingConfigError
from wordspine.core.protocols import LexicalSource
from wordspine.core.settings import IngestSettings, SourceKind
from wordspine.framework.sources.file import JsonLexiconSource
from wordspine.framework.sources.memory import InMemorySource
from wordspine.framework.sources.wordnet import WordNetSource


def create_source(settings: IngestSettings) -> LexicalSource:
    """Build the lexical source selected by ``settings.source``."""
    if settings.source is SourceKind.JSON:
        if settings.lexicon_path is None:
            raise MissingConfigError("lexicon_path", "lexicon_path is required when source=json")
        return JsonLexiconSource(Path(settings.lexicon_path))
    return WordNetSource()


__all__ = [
    "InMemorySource",
    "JsonLexiconSource",
    "WordNetSource",
    "create_source",
]
