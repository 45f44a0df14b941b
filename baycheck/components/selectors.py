"""
CSS selectors describing where listing fragments live in a search results page.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ListingSelectors:
    """Selectors for one marketplace's search results markup."""

    container: str = ".s-item"
    title: str = ".s-item__title"
    price: str = ".s-item__price"
    link: str = "a.s-item__link"
    link_attribute: str = "href"
    watchers: str = ".s-item__watchcount"
    time_left: str = ".s-item__time-left"
    bids: str = ".s-item__bids"


EBAY_SELECTORS = ListingSelectors()
