from __future__ import annotations

from click.testing import CliRunner

import word_lookup
from conftest import FakeResponse
from lookup_apis.models import LookupResult
from word_lookup import main

ENV = {"MERRIAM_WEBSTER_API_KEY": "test-key", "MERRIAM_WEBSTER_DICTIONARY_KEY": ""}


def test_hybrid_lookup_end_to_end(fake_http, happy_entry) -> None:
    fake_http(
        ("/thesaurus/json/", FakeResponse(payload=happy_entry)),
        ("/collegiate/json/", FakeResponse(payload=happy_entry)),
    )

    result = CliRunner().invoke(main, [], input="happy\n", env=ENV)

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "Pronunciation: /ˈha-pē/" in lines
    assert "Synonyms:      joyful, glad" in lines
    assert "Origin:        from Old English" in lines
    assert "  1. feeling joy" in lines
    assert "=" * 50 in lines
    assert lines[-1] == "Goodbye!"


def test_unknown_word_lists_suggestions(fake_http) -> None:
    body = ["happi", "happing"]
    fake_http(
        ("/thesaurus/json/", FakeResponse(payload=body)),
        ("/collegiate/json/", FakeResponse(payload=body)),
    )

    result = CliRunner().invoke(main, [], input="hapy\n", env=ENV)

    assert result.exit_code == 0
    assert 'The word "hapy" doesn\'t exist. Did you mean: happi, happing?' in result.output
    assert "Definitions:\n  None available" in result.output
    assert "Synonyms:      None available" in result.output


def test_stdin_loop_stops_at_empty_line(monkeypatch) -> None:
    looked_up = []

    def fake_lookup(word, config):
        looked_up.append(word)
        return LookupResult.empty(word), []

    monkeypatch.setattr(word_lookup, "lookup_word", fake_lookup)

    result = CliRunner().invoke(main, [], input="  happy \nsad\n\nignored\n", env=ENV)

    assert result.exit_code == 0
    assert looked_up == ["happy", "sad"]


def test_words_as_arguments_with_source(monkeypatch) -> None:
    seen = []

    def fake_lookup(word, config):
        seen.append((word, config.source, config.timeout))
        return LookupResult.empty(word), []

    monkeypatch.setattr(word_lookup, "lookup_word", fake_lookup)

    result = CliRunner().invoke(
        main, ["--source", "merriam-webster", "--timeout", "3", "happy", "sad"], env=ENV
    )

    assert result.exit_code == 0
    assert seen == [("happy", "merriam-webster", 3.0), ("sad", "merriam-webster", 3.0)]


def test_interactive_mode_stops_on_exit(monkeypatch) -> None:
    looked_up = []

    def fake_lookup(word, config):
        looked_up.append(word)
        return LookupResult.empty(word), []

    monkeypatch.setattr(word_lookup, "lookup_word", fake_lookup)

    result = CliRunner().invoke(main, ["--interactive"], input="happy\nexit\nsad\n", env=ENV)

    assert result.exit_code == 0
    assert looked_up == ["happy"]
    assert "Enter a word" in result.output


def test_interactive_mode_stops_at_end_of_input(monkeypatch) -> None:
    monkeypatch.setattr(word_lookup, "lookup_word", lambda w, c: (LookupResult.empty(w), []))

    result = CliRunner().invoke(main, ["--interactive"], input="happy\n", env=ENV)

    assert result.exit_code == 0
    assert "Goodbye!" in result.output


def test_lookup_error_is_reported_and_loop_continues(monkeypatch) -> None:
    def fake_lookup(word, config):
        if word == "bad":
            raise RuntimeError("kaboom")
        return LookupResult.empty(word), ["a notice"]

    monkeypatch.setattr(word_lookup, "lookup_word", fake_lookup)

    result = CliRunner().invoke(main, [], input="bad\ngood\n", env=ENV)

    assert result.exit_code == 0
    assert 'Error fetching data for "bad": kaboom' in result.output
    assert "a notice" in result.output
    assert "Word:          good" in result.output
