from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
import requests


class FakeResponse:
    def __init__(
        self, status_code: int = 200, payload: Any = None, text: Optional[str] = None
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    @property
    def text(self) -> str:
        return self._text or ""

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("Response body is not JSON")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


Route = Tuple[str, Any]


@pytest.fixture
def fake_http(monkeypatch) -> Callable[..., List[Dict[str, Any]]]:
    """
    Patch requests.get with substring routes; the first matching route wins.

    A route target is a FakeResponse or an exception instance to raise.
    Unrouted URLs answer 404. Returns the list of recorded calls.
    """

    def install(*routes: Route) -> List[Dict[str, Any]]:
        calls: List[Dict[str, Any]] = []

        def fake_get(url: str, params=None, headers=None, timeout=None):
            calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
            for needle, target in routes:
                if needle in url:
                    if isinstance(target, Exception):
                        raise target
                    return target
            return FakeResponse(status_code=404, text="Not found")

        monkeypatch.setattr(requests, "get", fake_get)
        return calls

    return install


@pytest.fixture
def happy_entry() -> List[Dict[str, Any]]:
    return [
        {
            "meta": {"id": "happy", "syns": [["joyful", "glad"]]},
            "hwi": {"hw": "hap*py", "prs": [{"mw": "ˈha-pē"}]},
            "shortdef": ["feeling joy"],
            "et": [["text", "from Old English"]],
        }
    ]


PAGE_HTML = """
<html><body>
<section><h2 id="English">English</h2>
<section><h3 id="Etymology">Etymology</h3>
<p>From Middle English <i>happy</i>, equivalent to <a>hap</a> + <a>-y</a>. Displaced Old English forms.</p>
</section>
<section><h3 id="Pronunciation">Pronunciation</h3>
<ul><li>(UK) IPA: <span class="IPA"></span><span class="IPA">/ˈhæpi/</span></li>
<li>(US) IPA: <span class="IPA">[ˈhæpi]</span></li></ul>
</section>
<section><h3 id="Adjective">Adjective</h3>
<p><b>happy</b></p>
<section><h4 id="Synonyms">Synonyms</h4>
<p>See also:</p>
<ul><li><a>cheerful</a>, <a>glad</a>, <a>Thesaurus:happy</a>, <a>very happy</a>, <a>x</a>, <a>⇒joy</a></li></ul>
</section>
</section>
</section>
</body></html>
"""

DEFINITIONS_JSON = {
    "en": [
        {
            "partOfSpeech": "Adjective",
            "language": "English",
            "definitions": [
                {
                    "definition": "Having a feeling arising from <a>well-being</a>.",
                    "examples": ["<b>Happy</b> people live longer."],
                    "parsedExamples": [{"example": "a <i>happy</i> outcome"}],
                },
                {
                    "definition": "Experiencing the effect of favourable fortune.",
                    "examples": ["a third example"],
                },
                {"definition": "Content, satisfied."},
                {"definition": "Willing."},
            ],
        },
        {
            "partOfSpeech": "Noun",
            "language": "Translingual",
            "definitions": [{"definition": "not English", "examples": ["skip me"]}],
        },
    ]
}


@pytest.fixture
def page_html() -> str:
    return PAGE_HTML


@pytest.fixture
def definitions_json() -> Dict[str, Any]:
    return DEFINITIONS_JSON
