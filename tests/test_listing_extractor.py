"""
Unit tests for listing classification and extraction.
"""

from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from baycheck.components.listing_classifier import ListingClassifier, select_text
from baycheck.components.listing_extractor import ExtractionEngine
from baycheck.components.selectors import ListingSelectors
from baycheck.models.listing import Duration
from baycheck.utils.error_handling import DocumentParseError


def make_block(html: str):
    """Parse a single result block."""
    return BeautifulSoup(html, "html.parser").select_one(".s-item")


class TestSelectText:
    """Test cases for selector text collection."""

    def test_concatenates_all_matches(self):
        """Test that every matching element contributes its text."""
        block = make_block(
            '<li class="s-item"><span class="a">EUR </span><span class="a">5,00</span></li>'
        )
        assert select_text(block, ".a") == "EUR 5,00"

    def test_no_match(self):
        """Test that a missing element yields empty text."""
        block = make_block('<li class="s-item"></li>')
        assert select_text(block, ".missing") == ""


class TestListingClassifier:
    """Test cases for ListingClassifier."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ListingClassifier()

    def test_time_left_marks_auction(self):
        """Test that a time-left fragment makes a block an auction."""
        block = make_block(
            '<li class="s-item"><span class="s-item__time-left">2Std</span></li>'
        )
        assert self.classifier.is_auction(block) is True

    def test_bids_mark_auction(self):
        """Test that a bid count fragment makes a block an auction."""
        block = make_block(
            '<li class="s-item"><span class="s-item__bids">0 Gebote</span></li>'
        )
        assert self.classifier.is_auction(block) is True

    def test_fixed_price(self):
        """Test that a block without auction fragments is fixed price."""
        block = make_block(
            '<li class="s-item"><span class="s-item__price">EUR 5,00</span></li>'
        )
        assert self.classifier.is_auction(block) is False

    def test_valid_listing(self):
        """Test that a complete block passes the gate."""
        assert self.classifier.is_valid_listing(
            "ThinkPad X220", "EUR 120,00", "https://www.ebay.de/itm/222"
        )

    @pytest.mark.parametrize(
        "title,raw_price,url",
        [
            ("", "EUR 1,00", "https://www.ebay.de/itm/1"),
            ("Item", "", "https://www.ebay.de/itm/1"),
            ("Item", "EUR 1,00", ""),
            ("Item", "   ", "https://www.ebay.de/itm/1"),
        ],
    )
    def test_missing_fields(self, title, raw_price, url):
        """Test that blocks missing a required field are rejected."""
        assert self.classifier.is_valid_listing(title, raw_price, url) is False

    def test_placeholder_title(self):
        """Test that the promotional placeholder is rejected in any case."""
        assert not self.classifier.is_valid_listing(
            "SHOP ON EBAY", "EUR 20,00", "https://www.ebay.de/itm/123456"
        )

    def test_advertisement_url(self):
        """Test that advertisement URLs are rejected."""
        assert not self.classifier.is_valid_listing(
            "Gesponsert", "EUR 5,00", "https://www.ebay.de/itmmeta/333"
        )


class TestExtractionEngine:
    """Test cases for ExtractionEngine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = ExtractionEngine()

    def test_extracts_real_listings_in_order(self, search_results_html):
        """Test that placeholder, advertisement and incomplete blocks are skipped."""
        listings = list(self.engine.extract(self.engine.parse(search_results_html)))

        assert [listing.url for listing in listings] == [
            "https://www.ebay.de/itm/111",
            "https://www.ebay.de/itm/222",
            "https://www.ebay.de/itm/555",
        ]

    def test_auction_fields(self, search_results_html):
        """Test field normalization of an auction block."""
        listing = next(iter(self.engine.extract(search_results_html)))

        assert listing.title == "Nintendo Switch Konsole"
        assert listing.raw_price == "EUR 1.234,56"
        assert listing.price == pytest.approx(1234.56)
        assert listing.is_auction is True
        assert listing.watcher_count == 12
        assert listing.time_remaining == Duration(days=5, hours=12)
        assert listing.raw_time_remaining == "5T 12Std"

    def test_fixed_price_fields(self, search_results_html):
        """Test defaults for a block without optional fragments."""
        listing = list(self.engine.extract(search_results_html))[1]

        assert listing.title == "ThinkPad X220"
        assert listing.price == 120.0
        assert listing.is_auction is False
        assert listing.watcher_count == 0
        assert listing.time_remaining is None

    def test_auction_by_bids_only(self, search_results_html):
        """Test that an auction without time-left text has no remaining time."""
        listing = list(self.engine.extract(search_results_html))[2]

        assert listing.is_auction is True
        assert listing.time_remaining is None

    def test_unparseable_price_kept(self):
        """Test that a block with an unparseable price is still a listing."""
        html = """
        <li class="s-item">
          <div class="s-item__title">Bundle</div>
          <span class="s-item__price">EUR 10,00 bis EUR 20,00</span>
          <a class="s-item__link" href="https://www.ebay.de/itm/9"></a>
        </li>
        """
        listings = list(self.engine.extract(html))

        assert len(listings) == 1
        assert listings[0].price is None

    def test_empty_document(self):
        """Test that a document without result blocks yields nothing."""
        assert list(self.engine.extract("<html><body></body></html>")) == []

    def test_parse_none(self):
        """Test that missing content cannot be parsed."""
        with pytest.raises(DocumentParseError):
            self.engine.parse(None)

    def test_parser_failure(self):
        """Test that parser exceptions surface as DocumentParseError."""
        with patch(
            "baycheck.components.listing_extractor.BeautifulSoup",
            side_effect=RuntimeError("boom"),
        ):
            with pytest.raises(DocumentParseError, match="boom"):
                self.engine.parse("<html>")

    def test_custom_selectors(self):
        """Test extraction with non-default markup."""
        selectors = ListingSelectors(
            container=".result",
            title=".name",
            price=".cost",
            link="a.go",
            link_attribute="href",
            watchers=".watch",
            time_left=".ends",
            bids=".bids",
        )
        engine = ExtractionEngine(selectors=selectors)
        html = """
        <div class="result">
          <span class="name">Camera</span>
          <span class="cost">EUR 80,00</span>
          <a class="go" href="https://example.com/item/1">open</a>
          <span class="ends">45 Min</span>
        </div>
        """

        listings = list(engine.extract(html))

        assert len(listings) == 1
        assert listings[0].is_auction is True
        assert listings[0].time_remaining == Duration(minutes=45)
