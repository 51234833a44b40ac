"""
Helpers for locating nodes in parsed HTML.

All lookups take a BeautifulSoup node and CSS selectors. A lookup with several
candidate selectors tries them in order and returns the first match, which is how
renamed page classes (``span.Year`` vs ``span.model-year``) are tolerated.
"""

import logging
from typing import List, Sequence, Union

from bs4 import BeautifulSoup, Tag

from .errors import AttributeNotFound, ElementNotFound

logger = logging.getLogger(__name__)

Node = Union[BeautifulSoup, Tag]


def elements(root: Node, selector: str, source: str = "") -> List[Tag]:
    """
    Return every node under ``root`` matching ``selector``.

    Args:
        root: Node to search
        selector: CSS selector
        source: Page URL, used only in the warning for an empty result

    Returns:
        List of matching nodes (possibly empty)
    """
    results = root.select(selector)
    if not results:
        logger.warning(f"No elements found for selector '{selector}' on {source or 'page'}")
    return results


def element_within(root: Node, selectors: Sequence[str]) -> Tag:
    """
    Return the first descendant matching any of ``selectors``, tried in order.

    Raises:
        ElementNotFound: If no selector matches
    """
    for selector in selectors:
        elem = root.select_one(selector)
        if elem is not None:
            return elem
    raise ElementNotFound(selectors, inner_html(root))


def element_attr(root: Node, selector: str, attr: str) -> str:
    """
    Return attribute ``attr`` of the first node matching ``selector``.

    Raises:
        ElementNotFound: If nothing matches ``selector``
        AttributeNotFound: If the matched node has no such attribute
    """
    elem = element_within(root, [selector])
    value = elem.get(attr)
    if value is None:
        raise AttributeNotFound(attr, str(elem))
    if isinstance(value, list):
        return ' '.join(value)
    return value


def inner_html(node: Node) -> str:
    """Markup of a node's children."""
    return node.decode_contents()


def inner_text(node: Node) -> str:
    """Concatenated text of a node and its descendants, untrimmed."""
    return node.get_text()


def select_inner_html(root: Node, selector: str) -> str:
    """Markup inside the first node matching ``selector``."""
    return inner_html(element_within(root, [selector])).strip()
