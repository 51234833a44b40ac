"""
Carfolio Scraper - reads vehicle specification pages from carfolio.com into typed records.
"""

__version__ = "0.1.0"

from .models import Make, Model, Vehicle, Measurement, MpgRating
from .errors import ScraperError, FetchError, ElementNotFound, AttributeNotFound
from .spec_fields import ExtractionConfig, DEFAULT_CONFIG
from .spec_table import extract_specifications_table, lower_underscore, sanitize_text
from .vehicle import extract_specification, assemble_vehicle, parse_vehicle_page, find_unused_fields
from .scraper import CarfolioScraper
from .report import CrawlReport
from .utils import save_to_json, save_to_jsonl, save_to_file, StreamingOutputWriter
from .logging_config import setup_logging
from .config import ScraperConfig

__all__ = [
    "Make",
    "Model",
    "Vehicle",
    "Measurement",
    "MpgRating",
    "ScraperError",
    "FetchError",
    "ElementNotFound",
    "AttributeNotFound",
    "ExtractionConfig",
    "DEFAULT_CONFIG",
    "extract_specifications_table",
    "lower_underscore",
    "sanitize_text",
    "extract_specification",
    "assemble_vehicle",
    "parse_vehicle_page",
    "find_unused_fields",
    "CarfolioScraper",
    "CrawlReport",
    "save_to_json",
    "save_to_jsonl",
    "save_to_file",
    "StreamingOutputWriter",
    "setup_logging",
    "ScraperConfig",
]
