from __future__ import annotations

from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class Link:
    text: str
    href: str


def _soup(description: str) -> BeautifulSoup:
    return BeautifulSoup(description or "", "lxml")


def extract_links(description: str) -> List[Link]:
    """
    Anchors embedded in a description, in order.
    'hello <a href=https://pub.dev>world</a>!' -> [Link("world", "https://pub.dev")]
    """
    links: List[Link] = []
    for a in _soup(description).select("a[href]"):
        href = (a.get("href") or "").strip()
        if not href:
            continue
        text = a.get_text(" ", strip=True) or href
        links.append(Link(text=text, href=href))
    return links


def plain_text(description: str) -> str:
    """Description with markup removed and whitespace collapsed."""
    text = _soup(description).get_text()
    return " ".join(text.split())


def markdown(description: str) -> str:
    """Render anchors as [text](href) and keep the rest of the text as is."""
    soup = _soup(description)
    for a in soup.select("a[href]"):
        href = (a.get("href") or "").strip()
        text = a.get_text(" ", strip=True) or href
        a.replace_with(f"[{text}]({href})" if href else text)
    return " ".join(soup.get_text().split())
