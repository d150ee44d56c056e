"""Shared data models for dictionary and thesaurus lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

NOT_AVAILABLE = "Not available"


@dataclass
class LookupResult:
    word: str
    definitions: List[str]
    pronunciation: str  # NOT_AVAILABLE when unknown
    synonyms: List[str]
    origin: str  # NOT_AVAILABLE when unknown
    examples: List[str]

    @classmethod
    def empty(cls, word: str) -> "LookupResult":
        return cls(word, [], NOT_AVAILABLE, [], NOT_AVAILABLE, [])


@dataclass
class DictionaryData:
    definitions: List[str]
    synonyms: List[str]
    pronunciation: str
    origin: str


@dataclass
class Success:
    name: str
    data: DictionaryData


@dataclass
class Failure:
    name: str
    detail: str  # short human-readable summary


@dataclass
class Suggestions:
    name: str
    words: List[str]  # alternate spellings, best first


ProviderOutcome = Union[Success, Failure, Suggestions]


@dataclass
class WikiData:
    pronunciation: str = NOT_AVAILABLE
    examples: List[str] = field(default_factory=list)
    definitions: List[str] = field(default_factory=list)
    synonyms: List[str] = field(default_factory=list)
    origin: str = NOT_AVAILABLE

    def has_data(self) -> bool:
        """True when the fields used alongside Merriam-Webster carry anything."""
        return self.pronunciation != NOT_AVAILABLE or bool(self.examples)

    def has_any(self) -> bool:
        return (
            self.has_data()
            or bool(self.definitions)
            or bool(self.synonyms)
            or self.origin != NOT_AVAILABLE
        )


@dataclass(frozen=True)
class LookupConfig:
    api_key: Optional[str]
    dictionary_key: Optional[str] = None  # falls back to api_key
    timeout: float = 12.0  # seconds, per request
    source: str = "hybrid"  # hybrid | merriam-webster | wiktionary
