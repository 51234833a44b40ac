import unittest
from unittest import mock

import requests
from bs4 import BeautifulSoup

from carfolio_scraper.config import ScraperConfig
from carfolio_scraper.errors import AttributeNotFound, FetchError
from carfolio_scraper.models import Make
from carfolio_scraper.report import CrawlReport
from carfolio_scraper.scraper import CarfolioScraper

BASE = "https://carfolio.com"

MAKES_HTML = """
<html><body><div class="grid">
  <div class="m1"><a class="man" href="porsche/">Porsche</a><div class="footer">Germany</div></div>
  <div class="m2"><a class="man" href="tvr/">TVR</a></div>
</div></body></html>
"""

PORSCHE_HTML = """
<html><body><div class="grid">
  <div class="grid-card">
    <div class="card-head"><a href="/porsche-911-carrera-1">
      <span class="automobile"><span class="model-year">2004</span></span>
    </a></div>
    <div class="manufacturer"><h2>Porsche</h2></div>
    <span class="model name">911 Carrera</span>
  </div>
  <div class="grid-card">
    <div class="card-head"><a href="porsche-boxster-2">
      <span class="automobile"><span class="Year">1997</span></span>
    </a></div>
    <span class="model name">Boxster</span>
  </div>
  <div class="grid-card">
    <div class="card-head"><a href="porsche-924-3"></a></div>
    <span class="model name">924</span>
  </div>
</div></body></html>
"""

TVR_HTML = """
<html><body><div class="grid">
  <div class="grid-card">
    <div class="card-head"><a href="tvr-griffith-4"><span class="automobile"><span class="Year">1992</span></span></a></div>
    <span class="model name">Griffith</span>
  </div>
</div></body></html>
"""


def spec_html(year: str, make: str, model: str, weight: str) -> str:
    return f"""
    <html><body>
      <div><h3><span class="automobile">
        <span class="Year">{year}</span>
        <span class="manufacturer">{make}</span>
        <span class="model name">{model}</span>
      </span></h3></div>
      <table class="specstable"><tbody>
        <tr><th>Kerb weight</th><td>{weight}</td></tr>
        <tr><th>Some New Spec</th><td>42</td></tr>
      </tbody></table>
    </body></html>
    """


PAGES = {
    f"{BASE}/specifications": MAKES_HTML,
    f"{BASE}/specifications/porsche/": PORSCHE_HTML,
    f"{BASE}/specifications/tvr/": TVR_HTML,
    f"{BASE}/porsche-911-carrera-1": spec_html("2004", "Porsche", "911 Carrera", "1370 kg"),
    f"{BASE}/porsche-boxster-2": "<html><body><p>Gone</p></body></html>",
    f"{BASE}/porsche-924-3": spec_html("1976", "Porsche", "924", "1080 kg"),
    f"{BASE}/tvr-griffith-4": spec_html("1992", "TVR", "Griffith", "1060 kg"),
}


def fake_get_page(url: str) -> BeautifulSoup:
    if url not in PAGES:
        raise FetchError(url, "404 Client Error")
    return BeautifulSoup(PAGES[url], 'lxml')


def make_scraper(**overrides) -> CarfolioScraper:
    config = ScraperConfig(dict({'use_cache': False}, **overrides))
    return CarfolioScraper(config)


class ListingPageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scraper = make_scraper()

    def test_parse_makes_page(self) -> None:
        makes = self.scraper.parse_makes_page(BeautifulSoup(MAKES_HTML, 'lxml'))
        self.assertEqual(
            makes,
            [
                Make(name="Porsche", country="Germany", url=f"{BASE}/specifications/porsche/"),
                Make(name="TVR", country="", url=f"{BASE}/specifications/tvr/"),
            ]
        )

    def test_make_without_link_target_fails(self) -> None:
        html = BeautifulSoup('<div class="grid"><div class="m1"><a class="man">Ghost</a></div></div>', 'lxml')
        with self.assertRaises(AttributeNotFound) as ctx:
            self.scraper.parse_makes_page(html)
        self.assertEqual(ctx.exception.attribute, "href")

    def test_parse_models_page(self) -> None:
        make = Make(name="Porsche", country="Germany", url=f"{BASE}/specifications/porsche/")
        models = self.scraper.parse_models_page(BeautifulSoup(PORSCHE_HTML, 'lxml'), make)
        self.assertEqual([m.name for m in models], ["911 Carrera", "Boxster", "924"])
        self.assertEqual([m.year for m in models], ["2004", "1997", ""])
        self.assertEqual(models[0].url, f"{BASE}/porsche-911-carrera-1")
        self.assertEqual(models[1].url, f"{BASE}/porsche-boxster-2")
        self.assertIs(models[0].make, make)


class FetchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scraper = make_scraper()
        self.scraper.session = mock.Mock()

    def test_connection_error_becomes_fetch_error(self) -> None:
        self.scraper.session.get.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(FetchError) as ctx:
            self.scraper._get_page(f"{BASE}/specifications")
        self.assertEqual(ctx.exception.url, f"{BASE}/specifications")
        self.assertIn("refused", ctx.exception.reason)

    def test_error_status_becomes_fetch_error(self) -> None:
        response = mock.Mock()
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        self.scraper.session.get.return_value = response
        with self.assertRaises(FetchError):
            self.scraper._get_page(f"{BASE}/specifications")

    def test_success_returns_parsed_html(self) -> None:
        response = mock.Mock()
        response.content = MAKES_HTML.encode('utf-8')
        self.scraper.session.get.return_value = response
        html = self.scraper._get_page(f"{BASE}/specifications")
        self.assertEqual(len(html.select("a.man")), 2)


class ScrapeTests(unittest.TestCase):
    def scrape(self, scraper: CarfolioScraper, report: CrawlReport, collected: list) -> list:
        with mock.patch.object(scraper, '_get_page', side_effect=fake_get_page):
            return scraper.scrape(report=report, on_vehicle=collected.append)

    def test_full_crawl_skips_failed_pages(self) -> None:
        report = CrawlReport()
        collected = []
        vehicles = self.scrape(make_scraper(), report, collected)

        self.assertEqual([v.model for v in vehicles], ["911 Carrera", "924", "Griffith"])
        self.assertEqual(collected, vehicles)
        self.assertEqual(vehicles[0].curb_weight, (1370, "kg"))
        self.assertEqual(vehicles[0].url, f"{BASE}/porsche-911-carrera-1")

        self.assertEqual(report.parsed, 3)
        self.assertEqual(report.failed, 1)
        self.assertEqual(report.failures[0][0], f"{BASE}/porsche-boxster-2")
        self.assertEqual(report.unused_fields["some_new_spec"], 3)

    def test_make_filter_and_model_cap(self) -> None:
        scraper = make_scraper(makes=["porsche"], max_models=1)
        vehicles = self.scrape(scraper, CrawlReport(), [])
        self.assertEqual([v.model for v in vehicles], ["911 Carrera"])

    def test_max_makes(self) -> None:
        scraper = make_scraper(max_makes=1)
        vehicles = self.scrape(scraper, CrawlReport(), [])
        self.assertEqual({v.make for v in vehicles}, {"Porsche"})

    def test_failed_make_page_is_recorded(self) -> None:
        report = CrawlReport()
        pages = dict(PAGES)
        del pages[f"{BASE}/specifications/tvr/"]
        scraper = make_scraper(makes=["TVR"])

        def get_page(url):
            if url not in pages:
                raise FetchError(url, "404 Client Error")
            return BeautifulSoup(pages[url], 'lxml')

        with mock.patch.object(scraper, '_get_page', side_effect=get_page):
            vehicles = scraper.scrape(report=report)
        self.assertEqual(vehicles, [])
        self.assertEqual(report.failures[0][0], f"{BASE}/specifications/tvr/")

    def test_unreadable_index_propagates(self) -> None:
        scraper = make_scraper()
        with mock.patch.object(scraper, '_get_page', side_effect=FetchError(BASE, "timeout")):
            with self.assertRaises(FetchError):
                scraper.scrape()

    def test_get_vehicle(self) -> None:
        scraper = make_scraper()
        with mock.patch.object(scraper, '_get_page', side_effect=fake_get_page):
            vehicle, unused = scraper.get_vehicle(f"{BASE}/tvr-griffith-4")
        self.assertEqual(vehicle.title, "1992 TVR Griffith")
        self.assertEqual(unused, [("some_new_spec", "42")])


if __name__ == "__main__":
    unittest.main()
