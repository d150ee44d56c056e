"""HTML helpers built on BeautifulSoup."""

from typing import Any, Union

from bs4 import BeautifulSoup


def parse_document(document: Union[str, BeautifulSoup]) -> BeautifulSoup:
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document or "", "html.parser")


def strip_html(markup: Any) -> str:
    """Return the visible text of an HTML fragment, or "" for non-strings."""
    if not isinstance(markup, str) or not markup:
        return ""
    return BeautifulSoup(markup, "html.parser").get_text().strip()
