"""Merriam-Webster collegiate dictionary and thesaurus client."""

import logging
import re
from typing import Any, List, Optional, Tuple
from urllib.parse import quote

import requests

from .concurrency import Settled, settle_all
from .models import (
    NOT_AVAILABLE,
    DictionaryData,
    Failure,
    ProviderOutcome,
    Success,
    Suggestions,
)

logger = logging.getLogger(__name__)

NAME = "Merriam-Webster"
THESAURUS_URL = "https://dictionaryapi.com/api/v3/references/thesaurus/json"
COLLEGIATE_URL = "https://dictionaryapi.com/api/v3/references/collegiate/json"

MAX_SUGGESTIONS = 5
MAX_SYNONYMS = 10

# Formatting tokens such as {it}word{/it} or {ds||1|a|}
_MARKUP_TOKEN = re.compile(r"{[^}]*}")


def call_merriam_webster(
    word: str,
    api_key: Optional[str],
    dictionary_key: Optional[str] = None,
    timeout: float = 12,
) -> ProviderOutcome:
    """Fetch thesaurus and collegiate entries for a word."""
    if not api_key:
        return Failure(NAME, "No API key")

    thesaurus, collegiate = settle_all(
        lambda: _get_json(THESAURUS_URL, word, api_key, timeout),
        lambda: _get_json(COLLEGIATE_URL, word, dictionary_key or api_key, timeout),
    )

    if not thesaurus.ok:
        detail = _error_detail(thesaurus.error)
        logger.warning("%s thesaurus request failed for %r: %s", NAME, word, detail)
        return Failure(NAME, detail)

    payload = thesaurus.value
    if is_suggestion_payload(payload):
        return Suggestions(NAME, list(payload[:MAX_SUGGESTIONS]))
    if not isinstance(payload, list):
        logger.warning("%s returned a %s payload for %r", NAME, type(payload).__name__, word)
        return Failure(NAME, "Unexpected response shape")

    pronunciation, origin = _collegiate_fields(word, collegiate)
    return Success(
        NAME,
        DictionaryData(
            definitions=parse_definitions(payload),
            synonyms=parse_synonyms(payload),
            pronunciation=pronunciation,
            origin=origin,
        ),
    )


def _get_json(base_url: str, word: str, api_key: str, timeout: float) -> Any:
    r = requests.get(
        f"{base_url}/{quote(word, safe='')}",
        params={"key": api_key},
        timeout=timeout,
    )
    r.raise_for_status()
    return r.json()


def _error_detail(error: Optional[Exception]) -> str:
    if isinstance(error, requests.RequestException):
        return f"HTTP error: {error}"
    return f"Error: {error}"


def _collegiate_fields(word: str, collegiate: Settled) -> Tuple[str, str]:
    """Pronunciation and origin; both degrade to NOT_AVAILABLE."""
    if not collegiate.ok:
        logger.info(
            "%s collegiate request failed for %r: %s",
            NAME,
            word,
            _error_detail(collegiate.error),
        )
        return NOT_AVAILABLE, NOT_AVAILABLE
    if is_suggestion_payload(collegiate.value):
        return NOT_AVAILABLE, NOT_AVAILABLE
    return parse_pronunciation(collegiate.value), parse_origin(collegiate.value)


# --------------------------
# Payload extraction
# --------------------------


def is_suggestion_payload(payload: Any) -> bool:
    """An unknown word comes back as a bare list of spelling suggestions."""
    return isinstance(payload, list) and all(isinstance(p, str) for p in payload)


def _first_entry(payload: Any) -> Optional[dict]:
    if not isinstance(payload, list) or not payload:
        return None
    entry = payload[0]
    return entry if isinstance(entry, dict) else None


def parse_definitions(payload: Any) -> List[str]:
    entry = _first_entry(payload)
    if entry is None:
        return []
    shortdef = entry.get("shortdef")
    if not isinstance(shortdef, list):
        return []
    return [d for d in shortdef if isinstance(d, str)]


def parse_pronunciation(payload: Any) -> str:
    entry = _first_entry(payload)
    if entry is None:
        return NOT_AVAILABLE
    hwi = entry.get("hwi")
    prs = hwi.get("prs") if isinstance(hwi, dict) else None
    if isinstance(prs, list) and prs and isinstance(prs[0], dict):
        spelling = prs[0].get("mw")
        if isinstance(spelling, str) and spelling:
            return f"/{spelling}/"
    return NOT_AVAILABLE


def parse_synonyms(payload: Any) -> List[str]:
    entry = _first_entry(payload)
    if entry is None:
        return []
    meta = entry.get("meta")
    groups = meta.get("syns") if isinstance(meta, dict) else None
    if not isinstance(groups, list):
        return []

    synonyms: List[str] = []
    for group in groups:
        if not isinstance(group, list):
            continue
        synonyms.extend(s for s in group if isinstance(s, str))
    return synonyms[:MAX_SYNONYMS]


def parse_origin(payload: Any) -> str:
    entry = _first_entry(payload)
    if entry is None:
        return NOT_AVAILABLE
    et = entry.get("et")
    if not isinstance(et, list) or not et:
        return NOT_AVAILABLE

    segments: List[str] = []
    for segment in et:
        # Tagged pairs look like ["text", "from Old English ..."]
        if isinstance(segment, list):
            segment = segment[1] if len(segment) > 1 else None
        if isinstance(segment, str):
            segments.append(segment)

    origin = _MARKUP_TOKEN.sub("", " ".join(segments)).strip()
    return origin or NOT_AVAILABLE
