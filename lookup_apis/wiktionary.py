"""Wiktionary REST API client (page HTML and structured definitions)."""

import logging
from typing import Any, List, Optional, Union
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup, Tag

from .concurrency import Settled, settle_all
from .html_text import parse_document, strip_html
from .models import NOT_AVAILABLE, WikiData

logger = logging.getLogger(__name__)

PAGE_HTML_URL = "https://en.wiktionary.org/api/rest_v1/page/html/{}"
DEFINITION_URL = "https://en.wiktionary.org/api/rest_v1/page/definition/{}"
HEADERS = {"User-Agent": "word-lookup/0.1 (command-line dictionary client)"}

MAX_DEFINITIONS = 3
MAX_SYNONYMS = 10
MAX_EXAMPLES = 2

# Anchor texts carrying any of these are cross-references, not synonyms
_SYNONYM_REJECT = (":", "⇒")

Document = Union[str, BeautifulSoup]


def fetch_wiktionary(
    word: str, include_thesaurus: bool = False, timeout: float = 12
) -> WikiData:
    """
    Fetch the page HTML and definitions for a word, plus the Thesaurus:
    page when include_thesaurus is set.

    Every request degrades only the fields it feeds; this never raises.
    """
    quoted = quote(word, safe="")
    calls = [
        lambda: _get(PAGE_HTML_URL.format(quoted), timeout).text,
        lambda: _get(DEFINITION_URL.format(quoted), timeout).json(),
    ]
    if include_thesaurus:
        calls.append(
            lambda: _get(PAGE_HTML_URL.format(f"Thesaurus:{quoted}"), timeout).text
        )
    settled = settle_all(*calls)
    page, definitions = settled[0], settled[1]

    data = WikiData()
    if _usable(word, "page HTML", page):
        soup = parse_document(page.value)
        data.pronunciation = parse_pronunciation(soup)
        data.synonyms = parse_synonyms(soup)
        data.origin = parse_origin(soup)

    if _usable(word, "definitions", definitions):
        data.examples = parse_examples(definitions.value)
        data.definitions = parse_definitions(definitions.value)

    if include_thesaurus and _usable(word, "thesaurus page", settled[2]):
        thesaurus_synonyms = parse_synonyms(settled[2].value)
        if thesaurus_synonyms:
            data.synonyms = thesaurus_synonyms

    return data


def _get(url: str, timeout: float) -> requests.Response:
    r = requests.get(url, headers=HEADERS, timeout=timeout)
    r.raise_for_status()
    return r


def _usable(word: str, what: str, result: Settled) -> bool:
    if result.ok:
        return True
    if isinstance(result.error, requests.HTTPError):
        logger.info("Wiktionary %s unavailable for %r: %s", what, word, result.error)
    else:
        logger.warning("Wiktionary %s request failed for %r: %s", what, word, result.error)
    return False


# --------------------------
# HTML extraction
# --------------------------


def _heading_block(heading: Tag) -> Tag:
    """Newer page HTML wraps headings in <div class="mw-heading">."""
    parent = heading.parent
    if isinstance(parent, Tag) and "mw-heading" in (parent.get("class") or []):
        return parent
    return heading


def _find_section(soup: BeautifulSoup, heading_text: str) -> Optional[Tag]:
    needle = heading_text.lower()
    for heading in soup.find_all(["h2", "h3", "h4"]):
        if needle in heading.get_text().strip().lower():
            return _heading_block(heading).parent
    return None


def parse_pronunciation(document: Document) -> str:
    section = _find_section(parse_document(document), "Pronunciation")
    if section is None:
        return NOT_AVAILABLE
    for ipa in section.select("span.IPA"):
        text = ipa.get_text().strip()
        if text:
            return text
    return NOT_AVAILABLE


def parse_synonyms(document: Document) -> List[str]:
    soup = parse_document(document)
    heading = None
    for h in soup.find_all(["h2", "h3", "h4", "h5"]):
        if h.get_text().strip().lower() == "synonyms":
            heading = h
            break
    if heading is None:
        return []

    listing = _heading_block(heading).find_next_sibling("ul")
    if listing is None:
        return []

    synonyms: List[str] = []
    for link in listing.find_all("a"):
        text = link.get_text().strip()
        if len(text) <= 1 or any(c.isspace() for c in text):
            continue
        if any(mark in text for mark in _SYNONYM_REJECT):
            continue
        synonyms.append(text)
    return synonyms[:MAX_SYNONYMS]


def parse_origin(document: Document) -> str:
    section = _find_section(parse_document(document), "Etymology")
    if section is None:
        return NOT_AVAILABLE
    paragraph = section.find("p")
    if paragraph is None:
        return NOT_AVAILABLE
    text = paragraph.get_text().strip()
    if not text:
        return NOT_AVAILABLE
    return text.split(".")[0].strip() + "."


# --------------------------
# Definition JSON extraction
# --------------------------


def _english_senses(payload: Any) -> List[dict]:
    entries = payload.get("en") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return []
    senses: List[dict] = []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("language") != "English":
            continue
        definitions = entry.get("definitions")
        if isinstance(definitions, list):
            senses.extend(d for d in definitions if isinstance(d, dict))
    return senses


def parse_definitions(payload: Any) -> List[str]:
    definitions: List[str] = []
    for sense in _english_senses(payload):
        text = strip_html(sense.get("definition"))
        if text:
            definitions.append(text)
        if len(definitions) >= MAX_DEFINITIONS:
            break
    return definitions


def parse_examples(payload: Any) -> List[str]:
    examples: List[str] = []
    for sense in _english_senses(payload):
        plain = sense.get("examples")
        if isinstance(plain, list):
            examples.extend(strip_html(ex) for ex in plain)
        parsed = sense.get("parsedExamples")
        if isinstance(parsed, list):
            examples.extend(
                strip_html(ex.get("example")) for ex in parsed if isinstance(ex, dict)
            )
    return [ex for ex in examples if ex][:MAX_EXAMPLES]
