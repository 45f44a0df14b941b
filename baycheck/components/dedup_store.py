"""
Deduplication of reported listings.

Each monitored query owns one DeduplicationStore holding the URLs of every
listing already reported for it. Membership is permanent for the lifetime of
the process; listings do not come back under the same URL once they end.
"""

import logging
from typing import Dict, Iterable, List, Set

from ..models.listing import Listing

logger = logging.getLogger(__name__)


class DeduplicationStore:
    """Set of listing URLs already reported for one search term."""

    def __init__(self, search_term: str):
        self.search_term = search_term
        self.seen_urls: Set[str] = set()

    def filter_new(self, listings: Iterable[Listing]) -> List[Listing]:
        """
        Return the listings not reported before and mark them as seen.

        Input order is preserved and a URL repeated within ``listings`` is
        returned only once.

        Args:
            listings: Listings that passed the search filters

        Returns:
            Listings whose URL had not been seen yet
        """
        new_listings = []

        for listing in listings:
            if listing.url in self.seen_urls:
                continue

            self.seen_urls.add(listing.url)
            new_listings.append(listing)

        if new_listings:
            logger.debug(
                f"{len(new_listings)} new listings for '{self.search_term}' "
                f"({len(self.seen_urls)} seen in total)"
            )

        return new_listings

    def seed(self, urls: Iterable[str]) -> int:
        """
        Mark URLs as already reported without emitting them.

        Returns:
            Number of URLs that were not known before
        """
        before = len(self.seen_urls)
        self.seen_urls.update(url for url in urls if url)
        return len(self.seen_urls) - before

    def __contains__(self, url: object) -> bool:
        return url in self.seen_urls

    def __len__(self) -> int:
        return len(self.seen_urls)


class DeduplicationRegistry:
    """Owns one DeduplicationStore per search term."""

    def __init__(self):
        self._stores: Dict[str, DeduplicationStore] = {}

    def store_for(self, search_term: str) -> DeduplicationStore:
        """Get the store for a search term, creating it on first use."""
        if search_term not in self._stores:
            self._stores[search_term] = DeduplicationStore(search_term)
        return self._stores[search_term]

    def stats(self) -> Dict[str, int]:
        """Number of seen listings per search term."""
        return {term: len(store) for term, store in self._stores.items()}
