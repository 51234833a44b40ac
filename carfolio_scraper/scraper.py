"""
Crawler for the Carfolio specifications site.

The site is organized as makes -> models -> specification pages. This module
fetches each level, reads the links off it, and hands specification pages to
``vehicle.parse_vehicle_page``.
"""

from typing import Callable, List, Optional, Tuple
import time
import logging
from datetime import timedelta

import requests
import requests_cache
from bs4 import BeautifulSoup
from tqdm import tqdm

from .config import ScraperConfig
from .errors import FetchError, ScraperError
from .markup import Node, element_attr, elements, select_inner_html
from .models import Make, Model, Vehicle
from .report import CrawlReport
from .vehicle import parse_vehicle_page

logger = logging.getLogger(__name__)

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'

MAKE_CARD_SELECTOR = 'div.grid div[class^="m"]'
MAKE_LINK_SELECTOR = "a.man"
MAKE_COUNTRY_SELECTOR = "div.footer"

MODEL_CARD_SELECTOR = "div.grid div.grid-card"
MODEL_LINK_SELECTOR = "div.card-head a"
MODEL_MAKE_SELECTOR = "div.manufacturer h2"
MODEL_NAME_SELECTOR = "span.model.name"
MODEL_DATA_SELECTOR = "div.card-head a span.automobile"
MODEL_YEAR_SELECTORS = ["span.Year", "span.model-year"]


class CarfolioScraper:
    """Fetches Carfolio pages and turns them into Make, Model and Vehicle objects."""

    def __init__(self, config: Optional[ScraperConfig] = None):
        """
        Initialize the scraper.

        Args:
            config: Scraper configuration (default: ScraperConfig())
        """
        self.config = config or ScraperConfig()
        self.base_url = self.config.base_url

        if self.config.use_cache:
            self.session = requests_cache.CachedSession(
                '.cache_carfolio',
                expire_after=timedelta(hours=self.config.cache_expire_hours),
                backend='sqlite'
            )
        else:
            self.session = requests.Session()

        self.session.headers.update({'User-Agent': USER_AGENT})

    @property
    def makes_url(self) -> str:
        return f"{self.base_url}/specifications"

    def _get_page(self, url: str) -> BeautifulSoup:
        """
        Fetch a page and return parsed HTML.

        Raises:
            FetchError: If the request fails or returns an error status
        """
        logger.info(f"Fetching HTML from {url}")
        start_time = time.time()
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise FetchError(url, str(e)) from e
        logger.info(f"Fetched {url} in {time.time() - start_time:.2f} seconds")
        return BeautifulSoup(response.content, 'lxml')

    # ====================
    # MAKES
    # ====================

    def parse_makes_page(self, html: Node, page_url: str = "") -> List[Make]:
        """
        Read every make listed on the specifications index.

        Raises:
            ScraperError: If a make card has no link
        """
        logger.info("Parsing for Make links...")
        makes = []
        for card in elements(html, MAKE_CARD_SELECTOR, page_url or self.makes_url):
            href = element_attr(card, MAKE_LINK_SELECTOR, 'href')
            url = f"{self.base_url}/specifications/{href.lstrip('/')}"
            name = select_inner_html(card, MAKE_LINK_SELECTOR)
            country = self._optional_text(card, [MAKE_COUNTRY_SELECTOR])
            if not country:
                logger.warning(f"Unable to find country for make: {name} ({url})")
            logger.info(f"Link found for Make: {name} ({country}) - {url}")
            makes.append(Make(name=name, country=country, url=url))
        return makes

    def get_makes(self) -> List[Make]:
        html = self._get_page(self.makes_url)
        return self.parse_makes_page(html, self.makes_url)

    # ====================
    # MODELS
    # ====================

    def parse_models_page(self, html: Node, make: Make) -> List[Model]:
        """
        Read every model listed on a make's page.

        Raises:
            ScraperError: If a model card has no link or name
        """
        logger.info(f"Parsing for Model links of {make.name}...")
        models = []
        for card in elements(html, MODEL_CARD_SELECTOR, make.url):
            href = element_attr(card, MODEL_LINK_SELECTOR, 'href')
            url = f"{self.base_url}/{href.lstrip('/')}"
            name = select_inner_html(card, MODEL_NAME_SELECTOR)
            card_make = self._optional_text(card, [MODEL_MAKE_SELECTOR]) or make.name
            year = self._model_year(card)
            if not year:
                logger.warning(f"Unable to find year for model: {card_make} {name} ({url})")
            logger.info(f"Link found for Model: {year} {card_make} {name} - {url}")
            models.append(Model(make=make, name=name, year=year, url=url))
        return models

    def get_models(self, make: Make) -> List[Model]:
        html = self._get_page(make.url)
        return self.parse_models_page(html, make)

    # ====================
    # VEHICLES
    # ====================

    def get_vehicle(self, url: str) -> Tuple[Vehicle, List[Tuple[str, str]]]:
        """
        Fetch and parse one specification page.

        Returns:
            Tuple of (vehicle, unused_fields)

        Raises:
            ScraperError: If the page cannot be fetched or lacks its header or table
        """
        html = self._get_page(url)
        return parse_vehicle_page(html, url)

    def scrape(self, report: Optional[CrawlReport] = None,
               on_vehicle: Optional[Callable[[Vehicle], None]] = None) -> List[Vehicle]:
        """
        Crawl makes -> models -> specification pages.

        Pages that fail are logged, recorded in ``report`` and skipped.

        Args:
            report: Optional report collecting per-page outcomes
            on_vehicle: Optional callback receiving each vehicle as it is parsed

        Returns:
            List of Vehicle objects

        Raises:
            ScraperError: If the makes index itself cannot be read
        """
        report = report if report is not None else CrawlReport()
        start_time = time.time()
        vehicles: List[Vehicle] = []

        makes = [make for make in self.get_makes() if self.config.wants_make(make.name)]
        if self.config.max_makes is not None:
            makes = makes[:self.config.max_makes]
        logger.info(f"Found {len(makes)} make(s) to crawl")

        for make in tqdm(makes, desc="Scraping makes"):
            try:
                models = self.get_models(make)
            except ScraperError as e:
                logger.error(f"{make.name}: Failed to process make page {make.url}: {e}")
                report.add_failure(make.url, e)
                continue

            if self.config.max_models is not None:
                models = models[:self.config.max_models]

            for model in models:
                try:
                    vehicle, unused_fields = self.get_vehicle(model.url)
                except ScraperError as e:
                    logger.warning(f"{make.name}: Failed to parse specification page {model.url}: {e}")
                    report.add_failure(model.url, e)
                    continue

                report.add_vehicle(vehicle, unused_fields)
                vehicles.append(vehicle)
                if on_vehicle is not None:
                    on_vehicle(vehicle)

        logger.info(f"Scraped {len(vehicles)} vehicles in {time.time() - start_time:.2f} seconds")
        return vehicles

    # ====================
    # HELPERS
    # ====================

    @staticmethod
    def _optional_text(card: Node, selectors: List[str]) -> str:
        for selector in selectors:
            elem = card.select_one(selector)
            if elem is not None:
                return elem.decode_contents().strip()
        return ""

    def _model_year(self, card: Node) -> str:
        data = card.select_one(MODEL_DATA_SELECTOR)
        if data is None:
            return ""
        return self._optional_text(data, MODEL_YEAR_SELECTORS)
