"""Tests for wordspine.cli — command smoke tests via CliRunner.

Runs the real pipeline against a JSON lexicon and a temporary SQLite file,
so no WordNet corpus is needed.
"""

from __future__ import annotations

import json
import sqlite3

import pytest
from typer.testing import CliRunner

from wordspine.cli.app import app

runner = CliRunner()

LEXICON = {
    "run": [
        {"words": ["run"], "gloss": "move fast", "pos": "verb"},
        {"words": ["run", "operate"], "gloss": "function", "pos": "verb"},
    ],
    "jog": [{"words": ["jog"], "gloss": "run slowly", "pos": "verb"}],
}


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from reconfiguring process-wide logging during tests."""
    monkeypatch.setattr("wordspine.cli.app.configure_logging", lambda **kwargs: None)
    for name in ("DATABASE_PATH", "CONCURRENCY", "SOURCE", "LEXICON_PATH", "SCHEMA_PATH", "INSERT_PATH"):
        monkeypatch.delenv(f"WORDSPINE_{name}", raising=False)


@pytest.fixture
def lexicon(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps(LEXICON))
    return path


def _rows(db):
    with sqlite3.connect(db) as conn:
        return conn.execute("SELECT word, alternatives FROM words ORDER BY id").fetchall()


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("wordspine ")


class TestIngestCommand:
    def test_success_prints_count(self, tmp_path, lexicon):
        db = tmp_path / "db.sqlite"
        result = runner.invoke(app, ["ingest", "--db", str(db), "--source", "json", "--lexicon", str(lexicon)])

        assert result.exit_code == 0, result.output
        assert "Inserted 3 records" in result.output
        assert _rows(db) == [("run", ""), ("run", "operate"), ("jog", "")]

    def test_concurrency_flag(self, tmp_path, lexicon):
        db = tmp_path / "db.sqlite"
        result = runner.invoke(
            app,
            ["ingest", "--db", str(db), "-s", "json", "--lexicon", str(lexicon), "--concurrency", "4"],
        )
        assert result.exit_code == 0, result.output
        assert len(_rows(db)) == 3

    def test_env_settings(self, tmp_path, lexicon, monkeypatch):
        db = tmp_path / "env.sqlite"
        monkeypatch.setenv("WORDSPINE_DATABASE_PATH", str(db))
        monkeypatch.setenv("WORDSPINE_SOURCE", "json")
        monkeypatch.setenv("WORDSPINE_LEXICON_PATH", str(lexicon))
        result = runner.invoke(app, ["ingest"])
        assert result.exit_code == 0, result.output
        assert len(_rows(db)) == 3

    def test_missing_key_exits_1(self, tmp_path):
        path = tmp_path / "lexicon.json"
        path.write_text(json.dumps({"run": LEXICON["run"], "zzqx": []}))
        db = tmp_path / "db.sqlite"

        result = runner.invoke(app, ["ingest", "--db", str(db), "--source", "json", "--lexicon", str(path)])

        assert result.exit_code == 1
        assert "KeyNotFoundError" in result.output
        assert "zzqx" in result.output
        assert [word for word, _ in _rows(db)] == ["run", "run"]

    def test_missing_lexicon_exits_1(self, tmp_path):
        result = runner.invoke(
            app,
            ["ingest", "--db", str(tmp_path / "db.sqlite"), "--source", "json", "--lexicon", str(tmp_path / "nope.json")],
        )
        assert result.exit_code == 1
        assert "SourceUnavailableError" in result.output

    def test_invalid_concurrency_exits_1(self, tmp_path, lexicon):
        result = runner.invoke(
            app,
            ["ingest", "--db", str(tmp_path / "db.sqlite"), "-s", "json", "--lexicon", str(lexicon), "-c", "0"],
        )
        assert result.exit_code == 1
        assert "InvalidConfigError" in result.output


class TestInitDbCommand:
    def test_creates_schema(self, tmp_path):
        db = tmp_path / "db.sqlite"
        result = runner.invoke(app, ["init-db", "--db", str(db)])
        assert result.exit_code == 0, result.output
        assert "words" in result.output
        assert "sqlite_sequence" not in result.output
        assert _rows(db) == []

    def test_idempotent(self, tmp_path):
        db = tmp_path / "db.sqlite"
        runner.invoke(app, ["init-db", "--db", str(db)])
        result = runner.invoke(app, ["init-db", "--db", str(db)])
        assert result.exit_code == 0

    def test_broken_schema_exits_1(self, tmp_path):
        schema = tmp_path / "create.sql"
        schema.write_text("CREATE TABLE words (;\n")
        result = runner.invoke(app, ["init-db", "--db", str(tmp_path / "db.sqlite"), "--schema", str(schema)])
        assert result.exit_code == 1
        assert "StoreInitError" in result.output
