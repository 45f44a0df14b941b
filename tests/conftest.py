"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the baycheck test suite.
"""

import pytest
from unittest.mock import Mock

from baycheck.models.config import Configuration
from baycheck.models.criteria import ListingType, SearchConfig, SearchCriteria
from baycheck.models.listing import Duration, Listing


SEARCH_RESULTS_HTML = """
<html>
  <body>
    <ul class="srp-results">
      <li class="s-item">
        <div class="s-item__title">Shop on eBay</div>
        <span class="s-item__price">EUR 20,00</span>
        <a class="s-item__link" href="https://www.ebay.de/itm/123456"></a>
      </li>
      <li class="s-item">
        <div class="s-item__title"><span>Neues Angebot</span>Nintendo Switch Konsole</div>
        <span class="s-item__price">EUR 1.234,56</span>
        <a class="s-item__link" href="https://www.ebay.de/itm/111"></a>
        <span class="s-item__watchcount">12 Beobachter</span>
        <span class="s-item__time-left">5T 12Std</span>
        <span class="s-item__bids">3 Gebote</span>
      </li>
      <li class="s-item">
        <div class="s-item__title">ThinkPad X220</div>
        <span class="s-item__price">EUR 120,00</span>
        <a class="s-item__link" href="https://www.ebay.de/itm/222"></a>
      </li>
      <li class="s-item">
        <div class="s-item__title">Gesponserter Artikel</div>
        <span class="s-item__price">EUR 5,00</span>
        <a class="s-item__link" href="https://www.ebay.de/itmmeta/333"></a>
      </li>
      <li class="s-item">
        <div class="s-item__title">Listing without price</div>
        <a class="s-item__link" href="https://www.ebay.de/itm/444"></a>
      </li>
      <li class="s-item">
        <div class="s-item__title">Retro Game Boy</div>
        <span class="s-item__price">EUR 45,00</span>
        <a class="s-item__link" href="https://www.ebay.de/itm/555"></a>
        <span class="s-item__bids">0 Gebote</span>
      </li>
    </ul>
  </body>
</html>
"""


# Test data fixtures
@pytest.fixture
def search_results_html():
    """Search results page with real, placeholder and advertisement blocks."""
    return SEARCH_RESULTS_HTML


@pytest.fixture
def sample_auction_listing():
    """Create a sample auction Listing for testing."""
    return Listing(
        title="Nintendo Switch Konsole",
        raw_price="EUR 150,00",
        price=150.0,
        url="https://www.ebay.de/itm/111",
        is_auction=True,
        watcher_count=12,
        time_remaining=Duration(days=0, hours=0, minutes=45),
        raw_time_remaining="45 Min",
    )


@pytest.fixture
def sample_buy_now_listing():
    """Create a sample fixed price Listing for testing."""
    return Listing(
        title="ThinkPad X220",
        raw_price="EUR 120,00",
        price=120.0,
        url="https://www.ebay.de/itm/222",
        is_auction=False,
    )


@pytest.fixture
def sample_criteria():
    """Create permissive SearchCriteria for testing."""
    return SearchCriteria(
        listing_type=ListingType.ANY,
        min_price=50.0,
        max_price=200.0,
    )


@pytest.fixture
def sample_search(sample_criteria):
    """Create a sample SearchConfig for testing."""
    return SearchConfig(query="nintendo switch", criteria=sample_criteria)


@pytest.fixture
def sample_configuration(sample_search, tmp_path):
    """Create a sample Configuration writing into a temporary directory."""
    return Configuration(
        searches=[sample_search],
        poll_interval_seconds=60,
        findings_file=str(tmp_path / "findings.json"),
        daily_log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def mock_fetcher(search_results_html):
    """Mock fetcher returning the sample search results page."""
    fetcher = Mock()
    fetcher.fetch.return_value = search_results_html
    return fetcher


@pytest.fixture
def mock_persistence():
    """Mock persistence sink."""
    persistence = Mock()
    persistence.record.return_value = True
    return persistence


@pytest.fixture
def mock_presenter():
    """Mock presentation sink."""
    return Mock()
