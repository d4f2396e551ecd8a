from __future__ import annotations

from bs4 import BeautifulSoup

_PARSER = "html.parser"


def select(markup: str, selector: str) -> list[str]:
    """Return the outer markup of every node matching the CSS ``selector``."""
    soup = BeautifulSoup(markup, _PARSER)
    return [str(node) for node in soup.select(selector)]


def has_selector(markup: str, selector: str) -> bool:
    return BeautifulSoup(markup, _PARSER).select_one(selector) is not None
