"""
CLI interface for the Carfolio specification scraper.
"""

import argparse
import json
import sys
import logging
from pathlib import Path

from .config import ScraperConfig, DEFAULT_CONFIG_PATH
from .errors import ScraperError
from .logging_config import setup_logging
from .report import CrawlReport
from .scraper import CarfolioScraper
from .utils import StreamingOutputWriter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape vehicle specifications from carfolio.com",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --make Porsche --output porsche.jsonl
  %(prog)s --max-makes 2 --max-models 5
  %(prog)s --url https://carfolio.com/porsche-911-carrera-s-123
        """
    )

    parser.add_argument(
        '--make',
        action='append',
        dest='makes',
        help='Only crawl this make (can be used multiple times)'
    )

    parser.add_argument(
        '--max-makes',
        type=int,
        help='Stop after this many makes'
    )

    parser.add_argument(
        '--max-models',
        type=int,
        help='Parse at most this many models per make'
    )

    parser.add_argument(
        '--url',
        help='Parse a single specification page and print it as JSON'
    )

    parser.add_argument(
        '--output',
        help='Output file path (default: vehicles.json). Format auto-detected from extension (.json or .jsonl)'
    )

    parser.add_argument(
        '--format',
        choices=['json', 'jsonl', 'auto'],
        default='auto',
        help='Output format: json, jsonl, or auto (detect from file extension). Default: auto'
    )

    parser.add_argument(
        '--no-cache',
        action='store_true',
        help='Disable the on-disk HTTP cache'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Set logging level (default: INFO)'
    )

    parser.add_argument(
        '--log-file',
        help='Optional file path to write logs to'
    )

    parser.add_argument(
        '--config',
        help='Path to configuration file (JSON). CLI arguments override config file settings.'
    )

    parser.add_argument(
        '--create-config',
        help='Create a default configuration file at the specified path and exit'
    )

    return parser


def load_config(args: argparse.Namespace) -> ScraperConfig:
    """
    Load the config file (explicit or default location) and apply CLI overrides.

    Raises:
        FileNotFoundError: If an explicit config file is missing
        ValueError: If the config file is invalid
    """
    if args.config:
        config = ScraperConfig.from_file(args.config)
    elif Path(DEFAULT_CONFIG_PATH).exists():
        config = ScraperConfig.from_file(DEFAULT_CONFIG_PATH)
    else:
        config = ScraperConfig()

    if args.makes:
        config.makes = args.makes
    if args.max_makes is not None:
        config.max_makes = args.max_makes
    if args.max_models is not None:
        config.max_models = args.max_models
    if args.output:
        config.output_path = args.output
    if args.format != 'auto':
        config.output_format = args.format
    if args.no_cache:
        config.use_cache = False
    if args.log_level:
        config.log_level = args.log_level
    if args.log_file:
        config.log_file = args.log_file
    return config


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.create_config:
        ScraperConfig.create_default(args.create_config)
        print(f"Created default configuration file: {args.create_config}")
        sys.exit(0)

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config file: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(level=getattr(logging, config.log_level), log_file=config.log_file)
    logger = logging.getLogger(__name__)

    scraper = CarfolioScraper(config)

    if args.url:
        try:
            vehicle, _ = scraper.get_vehicle(args.url)
        except ScraperError as e:
            logger.error(f"Failed to parse {args.url}: {e}")
            sys.exit(1)
        print(json.dumps(vehicle.to_dict(), indent=2, ensure_ascii=False))
        sys.exit(0)

    logger.info("=" * 60)
    logger.info("Starting Carfolio Scraper")
    logger.info("=" * 60)
    if config.makes:
        logger.info(f"  - Makes: {config.makes}")
    if config.max_makes is not None:
        logger.info(f"  - Max makes: {config.max_makes}")
    if config.max_models is not None:
        logger.info(f"  - Max models per make: {config.max_models}")
    logger.info(f"Output: {config.output_path} ({config.output_format})")
    logger.info("-" * 60)

    output_format = config.output_format if config.output_format != 'auto' else None
    writer = StreamingOutputWriter(config.output_path, format=output_format)
    report = CrawlReport()

    try:
        vehicles = scraper.scrape(report=report, on_vehicle=writer.append_vehicle)
    except ScraperError as e:
        logger.error(f"Scraping failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    report.log_report()
    report.print_report()
    print(f"Results saved to {config.output_path} ({writer.get_count()} vehicles)")
    logger.info(f"Scraping completed: {len(vehicles)} vehicles")


if __name__ == "__main__":
    main()
