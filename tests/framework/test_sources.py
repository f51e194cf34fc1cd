"""Tests for wordspine.framework.sources - lexical source adapters."""

from __future__ import annotations

import json
import threading
import time

import pytest

from wordspine.core.errors import (
    KeyNotFoundError,
    LookupFailedError,
    MissingConfigError,
    SourceUnavailableError,
)
from wordspine.core.models import Definition
from wordspine.core.protocols import LexicalSource
from wordspine.core.settings import IngestSettings
from wordspine.framework.sources import InMemorySource, JsonLexiconSource, WordNetSource, create_source
from wordspine.framework.sources.wordnet import SYNSET_TYPES


# =============================================================================
# In-memory source
# =============================================================================


class TestInMemorySource:
    def test_satisfies_protocol(self, run_jog_source):
        assert isinstance(run_jog_source, LexicalSource)

    def test_list_in_insertion_order(self, run_jog_source):
        assert run_jog_source.list() == ["run", "jog"]
        assert len(run_jog_source) == 2

    def test_lookup_builds_definitions(self, run_jog_source):
        definitions = run_jog_source.lookup("run")
        assert definitions[1] == Definition(words=("run", "operate"), gloss="function", synset_type="verb")

    def test_accepts_definition_values(self):
        source = InMemorySource({"jog": [Definition(words=("jog",))]}, name="custom")
        assert source.lookup("jog")[0].words == ("jog",)
        assert source.name == "custom"

    def test_missing_key(self, run_jog_source):
        with pytest.raises(KeyNotFoundError) as exc_info:
            run_jog_source.lookup("zzqx")
        assert exc_info.value.key == "zzqx"
        assert exc_info.value.context.source_name == "memory"

    def test_key_without_definitions(self):
        with pytest.raises(KeyNotFoundError):
            InMemorySource({"zzqx": []}).lookup("zzqx")


# =============================================================================
# JSON lexicon source
# =============================================================================


class TestJsonLexiconSource:
    def _write(self, tmp_path, payload, name="lexicon.json"):
        path = tmp_path / name
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
        return path

    def test_reads_file(self, tmp_path):
        path = self._write(
            tmp_path,
            {"run": [{"words": ["run", "operate"], "gloss": "function", "pos": "verb"}], "jog": []},
        )
        source = JsonLexiconSource(path)
        assert source.name == "lexicon"
        assert source.path == path
        assert source.list() == ["run", "jog"]
        assert source.lookup("run")[0].words == ("run", "operate")

    def test_missing_file(self, tmp_path):
        source = JsonLexiconSource(tmp_path / "absent.json")
        with pytest.raises(SourceUnavailableError) as exc_info:
            source.list()
        assert exc_info.value.context.source_name == "absent"

    def test_invalid_json(self, tmp_path):
        source = JsonLexiconSource(self._write(tmp_path, "{not json"))
        with pytest.raises(SourceUnavailableError) as exc_info:
            source.list()
        assert isinstance(exc_info.value.cause, ValueError)

    def test_top_level_must_be_object(self, tmp_path):
        source = JsonLexiconSource(self._write(tmp_path, ["run", "jog"]))
        with pytest.raises(SourceUnavailableError):
            source.list()

    def test_malformed_entries_skipped(self, tmp_path):
        source = JsonLexiconSource(self._write(tmp_path, {"run": "not a list", "jog": [1, {"words": ["jog"]}]}))
        assert source.list() == ["jog"]
        assert len(source.lookup("jog")) == 1

    def test_missing_key(self, tmp_path):
        source = JsonLexiconSource(self._write(tmp_path, {"run": [{"words": ["run"]}]}))
        with pytest.raises(KeyNotFoundError):
            source.lookup("zzqx")

    def test_parsed_once_under_concurrency(self, tmp_path, monkeypatch):
        path = self._write(tmp_path, {"run": [{"words": ["run"]}]})
        source = JsonLexiconSource(path)
        calls = []
        original = json.loads

        def counting_loads(text):
            calls.append(1)
            return original(text)

        monkeypatch.setattr("wordspine.framework.sources.file.json.loads", counting_loads)
        threads = [threading.Thread(target=source.lookup, args=("run",)) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(calls) == 1


# =============================================================================
# WordNet source (stub corpus reader)
# =============================================================================


class FakeLemma:
    def __init__(self, name):
        self._name = name

    def name(self):
        return self._name


class FakeSynset:
    def __init__(self, pos, lemmas, definition, examples=()):
        self._pos = pos
        self._lemmas = [FakeLemma(n) for n in lemmas]
        self._definition = definition
        self._examples = list(examples)

    def pos(self):
        return self._pos

    def lemmas(self):
        return self._lemmas

    def definition(self):
        return self._definition

    def examples(self):
        return self._examples


class FakeWordNet:
    """Stands in for nltk's WordNetCorpusReader."""

    def __init__(self, synsets):
        self._synsets = synsets

    def all_lemma_names(self):
        # nltk yields each lemma once per part of speech
        for synsets in self._synsets.values():
            for synset in synsets:
                for lemma in synset.lemmas():
                    yield lemma.name()

    def synsets(self, key):
        return list(self._synsets.get(key, []))


class MissingCorpus:
    """Mimics nltk's LazyCorpusLoader when the data is not installed."""

    def __getattr__(self, name):
        raise LookupError("Resource wordnet not found.")


@pytest.fixture
def wordnet():
    return FakeWordNet(
        {
            "run": [
                FakeSynset("v", ["run", "operate"], "function", ["the car runs on gas"]),
                FakeSynset("n", ["run"], "a score in baseball"),
            ],
            "a_cappella": [FakeSynset("r", ["a_cappella"], "without musical accompaniment")],
            "quick": [FakeSynset("s", ["quick", "speedy"], "accomplished rapidly")],
        }
    )


class TestWordNetSource:
    def test_list_deduplicates(self, wordnet):
        source = WordNetSource(wordnet)
        keys = source.list()
        assert keys == ["run", "operate", "a_cappella", "quick", "speedy"]
        assert len(keys) == len(set(keys))

    def test_lookup_maps_synsets(self, wordnet):
        definitions = WordNetSource(wordnet).lookup("run")
        assert definitions[0] == Definition(
            words=("run", "operate"),
            gloss='function; "the car runs on gas"',
            synset_type="verb",
        )
        assert definitions[1].synset_type == "noun"
        assert definitions[1].gloss == "a score in baseball"

    def test_examples_optional(self, wordnet):
        definitions = WordNetSource(wordnet, include_examples=False).lookup("run")
        assert definitions[0].gloss == "function"

    @pytest.mark.parametrize("code", sorted(SYNSET_TYPES))
    def test_synset_types(self, code):
        source = WordNetSource(FakeWordNet({}))
        assert source.to_definition(FakeSynset(code, ["x"], "d")).synset_type == SYNSET_TYPES[code]

    def test_underscores_kept(self, wordnet):
        assert WordNetSource(wordnet).lookup("a_cappella")[0].words == ("a_cappella",)

    def test_unknown_key(self, wordnet):
        with pytest.raises(KeyNotFoundError) as exc_info:
            WordNetSource(wordnet).lookup("zzqx")
        assert exc_info.value.context.source_name == "wordnet"

    def test_lookup_error_wrapped(self, wordnet):
        class FlakyWordNet(FakeWordNet):
            def synsets(self, key):
                raise LookupError("index.verb missing")

        with pytest.raises(LookupFailedError) as exc_info:
            WordNetSource(FlakyWordNet({})).lookup("run")
        assert not isinstance(exc_info.value, KeyNotFoundError)
        assert exc_info.value.key == "run"

    def test_missing_corpus(self):
        source = WordNetSource(MissingCorpus())
        with pytest.raises(SourceUnavailableError) as exc_info:
            source.list()
        assert "nltk.downloader" in exc_info.value.message

    def test_satisfies_protocol(self, wordnet):
        assert isinstance(WordNetSource(wordnet), LexicalSource)

    def test_lookups_do_not_interleave(self, wordnet):
        reader = SharedHandleWordNet(wordnet._synsets)
        source = WordNetSource(reader)
        results = []

        def worker():
            results.append(source.lookup("run"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert reader.overlaps == []
        assert len(results) == 8
        assert all(definitions == results[0] for definitions in results)
        assert results[0][0].words == ("run", "operate")


class SharedHandleWordNet(FakeWordNet):
    """Corpus reader with one shared read position, like nltk's data files.

    ``synsets()`` claims the handle for the calling thread; reading a synset
    from any other thread while the claim is held counts as an overlap.
    """

    def __init__(self, synsets):
        super().__init__(synsets)
        self.owner = None
        self.overlaps = []

    def check(self):
        if self.owner != threading.get_ident():
            self.overlaps.append(threading.get_ident())

    def synsets(self, key):
        self.owner = threading.get_ident()
        time.sleep(0.005)
        self.check()
        return [SharedHandleSynset(self, synset) for synset in super().synsets(key)]


class SharedHandleSynset:
    def __init__(self, reader, synset):
        self._reader = reader
        self._synset = synset

    def definition(self):
        time.sleep(0.001)
        self._reader.check()
        return self._synset.definition()

    def __getattr__(self, name):
        return getattr(self._synset, name)


# =============================================================================
# Factory
# =============================================================================


class TestCreateSource:
    def test_json(self, tmp_path):
        settings = IngestSettings(source="json", lexicon_path=tmp_path / "lexicon.json")
        source = create_source(settings)
        assert isinstance(source, JsonLexiconSource)

    def test_json_requires_path(self):
        with pytest.raises(MissingConfigError):
            create_source(IngestSettings(source="json"))

    def test_wordnet_default(self, monkeypatch):
        sentinel = FakeWordNet({})
        monkeypatch.setattr("nltk.corpus.wordnet", sentinel)
        source = create_source(IngestSettings())
        assert isinstance(source, WordNetSource)
