"""
Listing extraction components for the baycheck listing monitor.

This module walks a parsed search results page, locates listing blocks and
assembles each one into a Listing, skipping advertisement and placeholder
blocks.
"""

import logging
from typing import Iterator, Union

from bs4 import BeautifulSoup, Tag

from ..models.listing import Listing
from ..utils.error_handling import DocumentParseError
from .field_normalizer import FieldNormalizer
from .listing_classifier import ListingClassifier, select_text
from .selectors import EBAY_SELECTORS, ListingSelectors

logger = logging.getLogger(__name__)


class ExtractionEngine:
    """Converts search results documents into Listing records."""

    def __init__(
        self,
        selectors: ListingSelectors = EBAY_SELECTORS,
        normalizer: FieldNormalizer = None,
        classifier: ListingClassifier = None,
    ):
        """
        Initialize extraction engine.

        Args:
            selectors: CSS selectors for the marketplace markup
            normalizer: Field normalizer, a default one if omitted
            classifier: Listing classifier, a default one if omitted
        """
        self.selectors = selectors
        self.normalizer = normalizer or FieldNormalizer()
        self.classifier = classifier or ListingClassifier(selectors)

    def parse(self, document_content: str) -> BeautifulSoup:
        """
        Parse raw document content.

        Args:
            document_content: HTML text of a search results page

        Returns:
            Parsed document

        Raises:
            DocumentParseError: If the content cannot be parsed at all
        """
        if document_content is None:
            raise DocumentParseError("No document content to parse")

        try:
            return BeautifulSoup(document_content, "html.parser")
        except Exception as e:
            raise DocumentParseError(f"Failed to parse document: {e}") from e

    def extract(self, document: Union[BeautifulSoup, str]) -> Iterator[Listing]:
        """
        Extract listings from a document in document order.

        Blocks failing the validity gate are dropped; optional fields that
        cannot be parsed fall back to their normalizer defaults.

        Args:
            document: Parsed document or raw HTML content

        Yields:
            Listing objects
        """
        if not isinstance(document, BeautifulSoup):
            document = self.parse(document)

        blocks = document.select(self.selectors.container)
        logger.debug(f"Found {len(blocks)} listing blocks")

        for block in blocks:
            listing = self._build_listing(block)
            if listing is not None:
                yield listing

    def _build_listing(self, block: Tag):
        title = self.normalizer.normalize_title(
            select_text(block, self.selectors.title)
        )
        raw_price = select_text(block, self.selectors.price)
        url = self._extract_url(block)

        if not self.classifier.is_valid_listing(title, raw_price, url):
            return None

        raw_time_left = select_text(block, self.selectors.time_left)

        return Listing(
            title=title,
            raw_price=raw_price,
            price=self.normalizer.parse_price(raw_price),
            url=url,
            is_auction=self.classifier.is_auction(block),
            watcher_count=self.normalizer.parse_watcher_count(
                select_text(block, self.selectors.watchers)
            ),
            time_remaining=self.normalizer.parse_time_remaining(raw_time_left),
            raw_time_remaining=raw_time_left,
        )

    def _extract_url(self, block: Tag) -> str:
        link = block.select_one(self.selectors.link)
        if link is None:
            return ""

        value = link.get(self.selectors.link_attribute, "")
        if isinstance(value, list):
            value = " ".join(value)
        return value or ""
