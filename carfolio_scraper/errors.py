"""
Error types raised while fetching and reading Carfolio pages.
"""

import logging
from typing import Sequence

logger = logging.getLogger(__name__)

# Longest markup excerpt carried into an error message
SNIPPET_LENGTH = 500


def _snippet(html: str) -> str:
    html = html.strip()
    if len(html) > SNIPPET_LENGTH:
        return html[:SNIPPET_LENGTH] + '...'
    return html


class ScraperError(Exception):
    """Base class for every error this package raises."""


class FetchError(ScraperError):
    """A page could not be retrieved."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ElementNotFound(ScraperError):
    """None of the candidate selectors matched inside the searched node."""

    def __init__(self, selectors: Sequence[str], html: str):
        self.selectors = list(selectors)
        self.html = html.strip()
        elements = ', '.join(self.selectors)
        logger.error(f"Unable to find elements '{elements}' within HTML:\n{_snippet(self.html)}")
        super().__init__(f"Unable to find elements '{elements}' within HTML: {_snippet(self.html)}")


class AttributeNotFound(ScraperError):
    """An element was found but lacks a required attribute."""

    def __init__(self, attribute: str, html: str):
        self.attribute = attribute
        self.html = html.strip()
        logger.error(f"Unable to find attribute '{attribute}' within HTML:\n{_snippet(self.html)}")
        super().__init__(f"Unable to find attribute '{attribute}' within HTML: {_snippet(self.html)}")
