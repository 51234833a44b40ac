"""
Crawl report: what was parsed, what failed, and which unknown fields showed up.
"""

import logging
from collections import Counter
from typing import List, Tuple

from .models import Vehicle

logger = logging.getLogger(__name__)


class CrawlReport:
    """Track per-page outcomes across a crawl."""

    def __init__(self):
        self.parsed = 0
        self.failures: List[Tuple[str, str]] = []
        self.unused_fields: Counter = Counter()
        self.pages_with_unused_fields = 0

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def total(self) -> int:
        return self.parsed + self.failed

    def add_vehicle(self, vehicle: Vehicle, unused_fields: List[Tuple[str, str]]):
        """Record a parsed page and the unknown fields it carried."""
        self.parsed += 1
        if unused_fields:
            self.pages_with_unused_fields += 1
            self.unused_fields.update(key for key, _ in unused_fields)

    def add_failure(self, url: str, error: Exception):
        """Record a page that could not be fetched or parsed."""
        self.failures.append((url, str(error)))

    def log_report(self):
        """Write the report summary to the log."""
        logger.info(f"Pages: {self.total} total, {self.parsed} parsed, {self.failed} failed")
        if self.unused_fields:
            top = ', '.join(f"{key} ({count})" for key, count in self.unused_fields.most_common(10))
            logger.warning(f"{self.pages_with_unused_fields} page(s) had unused fields: {top}")
        for url, error in self.failures:
            logger.debug(f"Failed page {url}: {error}")

    def print_report(self):
        """Print crawl report."""
        print("\n" + "=" * 80)
        print("CRAWL REPORT")
        print("=" * 80)
        print(f"Total pages: {self.total}")
        if self.total > 0:
            print(f"Parsed: {self.parsed} ({self.parsed / self.total * 100:.1f}%)")
            print(f"Failed: {self.failed} ({self.failed / self.total * 100:.1f}%)")
        else:
            print("Parsed: 0")
            print("Failed: 0")

        if self.unused_fields:
            print(f"\nUnused fields ({self.pages_with_unused_fields} page(s)):")
            for key, count in self.unused_fields.most_common(10):
                print(f"  - {key}: {count} occurrences")

        print("=" * 80 + "\n")
