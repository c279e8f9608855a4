"""
Tests for the command-line interface.

Run with: pytest tests/test_cli.py -v
"""

import pytest
from typer.testing import CliRunner

from litconnect import __version__
from litconnect.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    """Keep local storage inside the test's temp dir."""
    path = tmp_path / "storage.json"
    monkeypatch.setattr("litconnect.storage.STORAGE_FILE", path)
    return path


def invoke(*args):
    return runner.invoke(app, list(args), env={"COLUMNS": "200"})


class TestCatalogCommands:
    """Tests for the catalog commands."""

    def test_version(self):
        """--version prints the version."""
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_books_by_genre(self):
        """books filters by genre."""
        result = invoke("books", "--genre", "poetry")
        assert result.exit_code == 0
        assert "Emplumada" in result.output
        assert "The Poet X" in result.output
        assert "Dreaming in Cuban" not in result.output

    def test_books_no_match(self):
        """An empty filter result prints a notice."""
        result = invoke("books", "--search", "zzzz")
        assert result.exit_code == 0
        assert "No books match" in result.output

    def test_books_bad_year_range(self):
        """A malformed year range exits with an error."""
        result = invoke("books", "--years", "recent")
        assert result.exit_code == 1
        assert "Invalid year range" in result.output

    def test_missing_catalog(self, tmp_path):
        """A missing catalog file exits with an error."""
        result = invoke("books", "--catalog", str(tmp_path / "none.json"))
        assert result.exit_code == 1
        assert "Cannot read catalog" in result.output

    def test_books_facets(self):
        """--facets lists the genres and theories."""
        result = invoke("books", "--facets")
        assert result.exit_code == 0
        assert "Genres:" in result.output
        assert "autobiography" in result.output
        assert "Theories:" in result.output

    def test_timeline(self):
        """timeline groups books into periods."""
        result = invoke("timeline")
        assert result.exit_code == 0
        assert "1600-1900: Early Period" in result.output
        assert "14 books" in result.output

    def test_languages(self):
        """languages lists the language table."""
        result = invoke("languages")
        assert result.exit_code == 0
        assert "Spanish" in result.output


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_analyze(self, home):
        """analyze prints connections and saves history."""
        result = invoke("analyze", "--text", "Living in the borderlands of language", "--book", "8")

        assert result.exit_code == 0
        assert "Thematic connections" in result.output
        assert "Borderlands Theory" in result.output
        assert home.exists()

    def test_analyze_no_save(self, home):
        """--no-save leaves storage untouched."""
        result = invoke("analyze", "--text", "borderlands", "--book", "8", "--no-save")
        assert result.exit_code == 0
        assert not home.exists()

    def test_analyze_json(self):
        """--json prints the result as JSON."""
        result = invoke("analyze", "--text", "borderlands", "--book", "8", "--json", "--no-save")
        assert result.exit_code == 0
        assert '"connections"' in result.output

    def test_analyze_search_selects_books(self):
        """--search selects every matching book."""
        result = invoke(
            "analyze", "--text", "memory", "--search", "julia alvarez", "--json", "--no-save",
        )
        assert result.exit_code == 0
        assert "In the Time of the Butterflies" in result.output
        assert "Lost Their Accents" in result.output

    def test_analyze_search_no_match(self):
        """A search with no match exits with an error."""
        result = invoke("analyze", "--text", "memory", "--search", "zzzz")
        assert result.exit_code == 1
        assert "No books match" in result.output

    def test_analyze_requires_book(self):
        """At least one book is required."""
        result = invoke("analyze", "--text", "some text")
        assert result.exit_code == 1
        assert "Please select at least one book" in result.output

    def test_analyze_requires_text(self):
        """Text or an input file is required."""
        result = invoke("analyze", "--book", "8")
        assert result.exit_code == 1
        assert "Provide either --text or --input" in result.output

    def test_analyze_input_file(self, tmp_path):
        """Text can be read from a file."""
        path = tmp_path / "essay.txt"
        path.write_text("Exile and memory shape my family.", encoding="utf-8")
        result = invoke("analyze", "--input", str(path), "--book", "10", "--no-save")

        assert result.exit_code == 0
        assert "exile" in result.output

    def test_analyze_draft(self):
        """--draft analyzes the saved draft."""
        invoke("draft", "save", "--text", "memory and exile")
        result = invoke("analyze", "--draft", "--book", "10", "--no-save")
        assert result.exit_code == 0
        assert "memory and exile" in result.output


class TestHistoryCommands:
    """Tests for the history sub-commands."""

    def test_list_empty(self):
        """An empty history prints a notice."""
        result = invoke("history", "list")
        assert result.exit_code == 0
        assert "No saved analyses" in result.output

    def test_list_show_delete(self):
        """Entries can be listed, shown and deleted."""
        invoke("analyze", "--text", "borderlands", "--book", "8")
        from litconnect.history import AnalysisHistory
        from litconnect.storage import LocalStorage

        entry = AnalysisHistory(LocalStorage()).entries[0]

        listed = invoke("history", "list")
        assert listed.exit_code == 0
        assert str(entry.id) in listed.output

        shown = invoke("history", "show", str(entry.id))
        assert shown.exit_code == 0
        assert "borderlands" in shown.output

        deleted = invoke("history", "delete", str(entry.id))
        assert deleted.exit_code == 0
        assert invoke("history", "delete", str(entry.id)).exit_code == 1

    def test_show_entry_without_analysis(self):
        """An entry without a stored result exits with an error."""
        from litconnect.config import HISTORY_KEY
        from litconnect.storage import LocalStorage

        LocalStorage().set(HISTORY_KEY, [{
            "id": 1, "timestamp": "2024-01-01T00:00:00", "user_text": "old",
            "full_text": "old", "books": [], "analysis": None,
        }])
        result = invoke("history", "show", "1")

        assert result.exit_code == 1
        assert "has no stored analysis" in result.output

    def test_clear(self):
        """clear --yes empties the history."""
        invoke("analyze", "--text", "borderlands", "--book", "8")
        result = invoke("history", "clear", "--yes")
        assert result.exit_code == 0
        assert "No saved analyses" in invoke("history", "list").output

    def test_export(self, tmp_path):
        """export writes one JSON file."""
        invoke("analyze", "--text", "borderlands", "--book", "8")
        result = invoke("history", "export", "--dir", str(tmp_path / "out"))

        assert result.exit_code == 0
        assert len(list((tmp_path / "out").glob("litconnect-history-*.json"))) == 1

    def test_export_empty(self, tmp_path):
        """Exporting an empty history exits with an error."""
        result = invoke("history", "export", "--dir", str(tmp_path))
        assert result.exit_code == 1
        assert "No history to export." in result.output


class TestDraftCommands:
    """Tests for the draft sub-commands."""

    def test_save_show_clear(self):
        """A draft can be saved, shown and cleared."""
        assert invoke("draft", "save", "--text", "my draft").exit_code == 0
        assert "my draft" in invoke("draft", "show").output
        assert invoke("draft", "clear").exit_code == 0
        assert "No saved draft" in invoke("draft", "show").output

    def test_blank_draft(self):
        """A blank draft is rejected."""
        result = invoke("draft", "save", "--text", "   ")
        assert result.exit_code == 1
        assert "No text to save." in result.output


class FakeClient:
    """Always answers with the same translation."""

    def fetch(self, text, langpair):
        return {"responseStatus": 200, "responseData": {"translatedText": "Hello world."}}

    def close(self):
        pass


class TestTranslateCommand:
    """Tests for the translate command."""

    def test_translate(self, monkeypatch, tmp_path):
        """translate prints, reviews and saves the translation."""
        monkeypatch.setattr("litconnect.translate.service.MyMemoryClient", FakeClient)
        out = tmp_path / "out.txt"
        result = invoke("translate", "--text", "Hola mundo.", "--source", "es", "--output", str(out))

        assert result.exit_code == 0
        assert "Hello world." in result.output
        assert "Quality" in result.output
        assert out.read_text(encoding="utf-8") == "Hello world."

    def test_translate_failure(self, monkeypatch):
        """A remote failure exits with its message."""
        class RateLimited(FakeClient):
            def fetch(self, text, langpair):
                return {"responseStatus": 403}

        monkeypatch.setattr("litconnect.translate.service.MyMemoryClient", RateLimited)
        result = invoke("translate", "--text", "Hola", "--source", "es")

        assert result.exit_code == 1
        assert "Rate limit reached" in result.output

    def test_translate_unknown_language(self, monkeypatch):
        """An unknown language code is rejected."""
        monkeypatch.setattr("litconnect.translate.service.MyMemoryClient", FakeClient)
        result = invoke("translate", "--text", "Hola", "--source", "es", "--target", "xx")

        assert result.exit_code == 1
        assert "Unsupported language code: xx" in result.output

    def test_translate_auto_target_rejected(self):
        """The target language cannot be auto-detected."""
        result = invoke("translate", "--text", "Hola", "--target", "auto")
        assert result.exit_code == 1
        assert "cannot be 'auto'" in result.output
