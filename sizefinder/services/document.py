"""
Thin query layer over a parsed product page.

The rest of the pipeline only needs: CSS selection, full text content, parent
lookup and the option texts of a <select>.
"""

from typing import Iterable, List, Optional
from bs4 import BeautifulSoup, Tag


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def select_all(root: Tag, selectors: Iterable[str]) -> List[Tag]:
    """Run each selector in turn and concatenate matches, keeping the first occurrence of each element."""
    seen = set()
    out: List[Tag] = []
    for selector in selectors:
        for element in root.select(selector):
            if id(element) in seen:
                continue
            seen.add(id(element))
            out.append(element)
    return out


def text_of(element: Optional[Tag], separator: str = "") -> str:
    """Concatenated text content; pass a separator to keep adjacent cells apart."""
    if element is None:
        return ""
    return element.get_text(separator)


def contains_table(element: Tag) -> bool:
    return element.find("table") is not None


def parent_of(element: Tag) -> Optional[Tag]:
    """Parent element, or None at the top of the document."""
    parent = element.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        return None
    return parent


def is_select(element: Tag) -> bool:
    return (element.name or "").lower() == "select"


def option_texts(element: Tag) -> List[str]:
    return [opt.get_text() for opt in element.find_all("option")]
