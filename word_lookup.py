#!/usr/bin/env python3
"""
word_lookup.py — dictionary and thesaurus lookup

Features
- Definitions, synonyms, pronunciation and etymology (Merriam-Webster API)
- Pronunciation fallback and usage examples (Wiktionary REST API)
- Both providers queried in parallel; either one failing is survivable
- Single-source modes for Merriam-Webster or Wiktionary alone

Environment (.env)
  MERRIAM_WEBSTER_API_KEY=...          # thesaurus key
  MERRIAM_WEBSTER_DICTIONARY_KEY=...   # optional collegiate key

Usage
  # Words one per line on stdin, empty line to stop
  python word_lookup.py < words.txt

  # Words as arguments
  python word_lookup.py happy serendipity

  # Prompt for each word
  python word_lookup.py --interactive [--source wiktionary]
"""

from __future__ import annotations

import logging
import os
import socket
from typing import Iterable, Iterator, List, Optional, Tuple

import click
from dotenv import load_dotenv

from lookup_apis.concurrency import settle_all
from lookup_apis.merriam_webster import NAME as MERRIAM_WEBSTER
from lookup_apis.merriam_webster import call_merriam_webster
from lookup_apis.models import (
    NOT_AVAILABLE,
    Failure,
    LookupConfig,
    LookupResult,
    ProviderOutcome,
    Success,
    Suggestions,
    WikiData,
)
from lookup_apis.wiktionary import MAX_DEFINITIONS, fetch_wiktionary

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 12.0
SOURCES = ("hybrid", "merriam-webster", "wiktionary")
SEPARATOR = "=" * 50


# --------------------------
# Configuration
# --------------------------


def load_config(
    source: str = "hybrid", timeout: float = DEFAULT_TIMEOUT
) -> LookupConfig:
    load_dotenv()
    return LookupConfig(
        api_key=os.getenv("MERRIAM_WEBSTER_API_KEY") or None,
        dictionary_key=os.getenv("MERRIAM_WEBSTER_DICTIONARY_KEY") or None,
        timeout=timeout,
        source=source,
    )


# --------------------------
# Decision logic
# --------------------------


def combine_results(
    word: str, mw: ProviderOutcome, wiki: WikiData
) -> Tuple[LookupResult, List[str]]:
    """Merge both providers; Merriam-Webster wins wherever it has data."""
    notices: List[str] = []
    data = mw.data if isinstance(mw, Success) else None
    suggestions = mw.words if isinstance(mw, Suggestions) else []

    if data is None and not wiki.has_data():
        if suggestions:
            notices.append(
                f'The word "{word}" doesn\'t exist. '
                f"Did you mean: {', '.join(suggestions)}?"
            )
        else:
            notices.append(
                f'The word "{word}" doesn\'t exist and no suggestions available.'
            )
        return LookupResult.empty(word), notices

    if data is None:
        if suggestions:
            notices.append(f"Word not found. Suggestions: {', '.join(suggestions)}")
        else:
            notices.append(
                f"⚠️  {MERRIAM_WEBSTER} failed. Using Wiktionary data only."
            )
        return (
            LookupResult(
                word=word,
                definitions=[],
                pronunciation=wiki.pronunciation,
                synonyms=[],
                origin=NOT_AVAILABLE,
                examples=list(wiki.examples),
            ),
            notices,
        )

    pronunciation = data.pronunciation
    if pronunciation == NOT_AVAILABLE:
        pronunciation = wiki.pronunciation
    return (
        LookupResult(
            word=word,
            definitions=list(data.definitions),
            pronunciation=pronunciation,
            synonyms=list(data.synonyms),
            origin=data.origin,
            examples=list(wiki.examples),
        ),
        notices,
    )


def merriam_webster_record(
    word: str, mw: ProviderOutcome
) -> Tuple[LookupResult, List[str]]:
    if isinstance(mw, Suggestions):
        if mw.words:
            return LookupResult.empty(word), [
                f"Word not found. Suggestions: {', '.join(mw.words)}"
            ]
        return LookupResult.empty(word), [f'The word "{word}" was not found.']
    if isinstance(mw, Failure):
        return LookupResult.empty(word), [
            f'Failed to fetch data for "{word}": {mw.detail}'
        ]

    data = mw.data
    return (
        LookupResult(
            word=word,
            definitions=list(data.definitions),
            pronunciation=data.pronunciation,
            synonyms=list(data.synonyms),
            origin=data.origin,
            examples=[],  # the free API has no usage examples
        ),
        [],
    )


def wiktionary_record(word: str, wiki: WikiData) -> Tuple[LookupResult, List[str]]:
    if not wiki.has_any():
        return LookupResult.empty(word), ["Word not found or no definitions available"]
    return (
        LookupResult(
            word=word,
            definitions=list(wiki.definitions[:MAX_DEFINITIONS]),
            pronunciation=wiki.pronunciation,
            synonyms=list(wiki.synonyms),
            origin=wiki.origin,
            examples=list(wiki.examples),
        ),
        [],
    )


def lookup_word(word: str, config: LookupConfig) -> Tuple[LookupResult, List[str]]:
    """Query the configured source(s) and build one record plus any notices."""

    def merriam_webster() -> ProviderOutcome:
        return call_merriam_webster(
            word, config.api_key, config.dictionary_key, timeout=config.timeout
        )

    if config.source == "merriam-webster":
        return merriam_webster_record(word, merriam_webster())
    if config.source == "wiktionary":
        wiki = fetch_wiktionary(word, include_thesaurus=True, timeout=config.timeout)
        return wiktionary_record(word, wiki)
    if config.source != "hybrid":
        raise ValueError(f"Unknown source: {config.source}")

    mw_result, wiki_result = settle_all(
        merriam_webster,
        lambda: fetch_wiktionary(word, timeout=config.timeout),
    )
    if mw_result.ok:
        mw = mw_result.value
    else:
        logger.warning("%s lookup crashed for %r: %s", MERRIAM_WEBSTER, word, mw_result.error)
        mw = Failure(MERRIAM_WEBSTER, f"Error: {mw_result.error}")
    if wiki_result.ok:
        wiki = wiki_result.value
    else:
        logger.warning("Wiktionary lookup crashed for %r: %s", word, wiki_result.error)
        wiki = WikiData()

    return combine_results(word, mw, wiki)


# --------------------------
# Report
# --------------------------


def format_report(result: LookupResult) -> str:
    """Render a lookup as a fixed-order, human-readable block."""
    lines = [
        f"Word:          {result.word}",
        f"Pronunciation: {result.pronunciation}",
        f"Synonyms:      {', '.join(result.synonyms) or 'None available'}",
        f"Origin:        {result.origin}",
        "Examples:",
    ]
    if result.examples:
        lines.extend(f"  - {ex}" for ex in result.examples)
    else:
        lines.append("  None available")

    lines.append("Definitions:")
    if result.definitions:
        lines.extend(f"  {i}. {d}" for i, d in enumerate(result.definitions, 1))
    else:
        lines.append("  None available")
    return "\n".join(lines)


def report_word(word: str, config: LookupConfig) -> None:
    try:
        result, notices = lookup_word(word, config)
        for notice in notices:
            print(notice)
        print(format_report(result))
    except Exception as e:
        logger.debug("Lookup failed for %r", word, exc_info=True)
        print(f'Error fetching data for "{word}": {e}')
    print(f"\n{SEPARATOR}\n")


# --------------------------
# Input
# --------------------------


def iter_words(words: Iterable[str], interactive: bool) -> Iterator[str]:
    """Yield trimmed words from arguments, prompts, or stdin lines."""
    words = [w.strip() for w in words if w.strip()]
    if words:
        yield from words
        return

    if interactive:
        yield from _prompted_words()
        return

    for line in click.get_text_stream("stdin"):
        word = line.strip()
        if not word:
            return
        yield word


def _prompted_words() -> Iterator[str]:
    while True:
        try:
            entry = click.prompt("Enter a word", default="", show_default=False)
        except click.Abort:
            return  # end of input
        entry = entry.strip()
        if not entry or entry.lower() == "exit":
            return
        yield entry


# --------------------------
# CLI
# --------------------------


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("words", nargs=-1)
@click.option(
    "--source",
    type=click.Choice(SOURCES),
    default="hybrid",
    show_default=True,
    help="Which provider(s) to query.",
)
@click.option(
    "--interactive", is_flag=True, help="Prompt for each word instead of reading stdin."
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Per-request timeout in seconds.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log provider activity to stderr.")
def main(
    words: Tuple[str, ...],
    source: str,
    interactive: bool,
    timeout: float,
    verbose: bool,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config(source=source, timeout=timeout)
    if config.api_key is None and source != "wiktionary":
        logger.warning("MERRIAM_WEBSTER_API_KEY is not set; Merriam-Webster is skipped")

    print(f"Welcome to the word lookup ({_source_label(source)})!")
    if not words and not interactive:
        print("Enter words (one per line). Press Enter on empty line or Ctrl+D to exit.\n")

    for word in iter_words(words, interactive):
        report_word(word, config)

    print("Goodbye!")


def _source_label(source: str) -> Optional[str]:
    return {
        "hybrid": "Merriam-Webster + Wiktionary",
        "merriam-webster": "Merriam-Webster",
        "wiktionary": "Wiktionary",
    }.get(source)


if __name__ == "__main__":
    # Requests already carry a timeout; this covers anything that does not
    socket.setdefaulttimeout(DEFAULT_TIMEOUT)
    main()
