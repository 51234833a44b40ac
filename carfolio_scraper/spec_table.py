"""
Reads the specification table of a Carfolio page into a flat mapping.

Row labels become canonical keys ("Kerb Weight" -> "kerb_weight") and cell text is
cleaned up. Rows that are section headings, known duplicates, or carry no data
are left out.
"""

import logging
import re
from typing import Dict, Optional

from .markup import Node, element_within, elements, inner_text
from .spec_fields import DEFAULT_CONFIG, ExtractionConfig, GLYPH_REPLACEMENTS, NO_INFORMATION

logger = logging.getLogger(__name__)

TABLE_SELECTOR = "table.specstable"
# Searched within the table element; lxml does not add a missing tbody
ROW_SELECTOR = "tr"
LABEL_SELECTOR = "th:not(.sechead)"
VALUE_SELECTOR = "td"

NEWLINE_REGEX = re.compile(r"\s*\n\s*")


def _replace_glyphs(text: str) -> str:
    for glyph, replacement in GLYPH_REPLACEMENTS.items():
        text = text.replace(glyph, replacement)
    return text


def lower_underscore(label: str) -> str:
    """Canonical key for a row label: "Engine Code" -> "engine_code"."""
    return _replace_glyphs(label).strip().lower().replace(' ', '_')


def sanitize_text(text: str) -> str:
    """Trim, join lines with ", ", normalize glyphs, drop the no-information phrase."""
    text = NEWLINE_REGEX.sub(', ', text.strip())
    text = _replace_glyphs(text)
    return text.replace(NO_INFORMATION, '').strip()


def extract_specifications_table(page: Node, source: str = "",
                                 config: Optional[ExtractionConfig] = None) -> Dict[str, str]:
    """
    Build the mapping of canonical key to cell text for one specification page.

    Args:
        page: Parsed specification page
        source: Page URL, for log messages
        config: Lookup sets to apply (default: shared static configuration)

    Returns:
        Ordered dict of canonical key -> sanitized value. Later duplicate labels
        overwrite earlier ones.

    Raises:
        ElementNotFound: If the page has no specification table at all
    """
    config = config or DEFAULT_CONFIG
    specs_table = element_within(page, [TABLE_SELECTOR])

    table: Dict[str, str] = {}
    for row in elements(specs_table, ROW_SELECTOR, source):
        th = row.select_one(LABEL_SELECTOR)
        if th is None:
            # Section heading row
            continue

        label = inner_text(th)
        if config.is_ignored_row(label):
            continue

        key = lower_underscore(label)
        if not key:
            continue

        td = row.select_one(VALUE_SELECTOR)
        if td is None:
            logger.warning(f"Unable to find `td` for row '{key}' on {source or 'page'}:\n{row}")
            value = ""
        else:
            value = sanitize_text(inner_text(td))

        if config.is_useless_value(value):
            continue

        if key in table:
            logger.debug(f"Duplicate row '{key}' on {source or 'page'}, keeping the later value")
        table[key] = value

    return table
