"""
Listing classification: auction detection and validity gating.
"""

import logging

from bs4 import Tag

from .selectors import EBAY_SELECTORS, ListingSelectors

logger = logging.getLogger(__name__)


def select_text(block: Tag, selector: str) -> str:
    """Concatenated text of every element matching ``selector`` in ``block``."""
    return "".join(element.get_text() for element in block.select(selector))


class ListingClassifier:
    """Decides listing type and whether a result block is a real listing."""

    # Title text of promotional placeholder blocks
    PLACEHOLDER_TITLES = ["shop on ebay"]

    # URL markers of advertisement/meta blocks
    NON_LISTING_URL_MARKERS = ["itmmeta"]

    def __init__(self, selectors: ListingSelectors = EBAY_SELECTORS):
        self.selectors = selectors

    def is_auction(self, block: Tag) -> bool:
        """
        Determine whether a result block is an auction.

        A block with a time-left or a bid-count fragment is an auction;
        anything else is a fixed price listing.
        """
        time_left = select_text(block, self.selectors.time_left)
        bids = select_text(block, self.selectors.bids)
        return time_left != "" or bids != ""

    def is_valid_listing(self, title: str, raw_price: str, url: str) -> bool:
        """
        Check that a block has all required fields and is not promotional.

        Args:
            title: Normalized title text
            raw_price: Raw price text
            url: Listing URL

        Returns:
            True if the block should become a Listing
        """
        for value in (title, raw_price, url):
            if not value or not value.strip():
                return False

        title_lower = title.lower()
        if any(phrase in title_lower for phrase in self.PLACEHOLDER_TITLES):
            logger.debug(f"Skipping placeholder block: {title}")
            return False

        if any(marker in url for marker in self.NON_LISTING_URL_MARKERS):
            logger.debug(f"Skipping non-listing block: {url}")
            return False

        return True
