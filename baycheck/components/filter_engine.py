"""Filter engine for applying price, type, time and watcher filters to listings."""

import logging
from typing import Optional

from ..models.criteria import ListingType, SearchCriteria
from ..models.filter import FilterResult
from ..models.listing import Duration, Listing

logger = logging.getLogger(__name__)


class PriceFilter:
    """Handles price-range filtering logic."""

    def __init__(
        self, min_price: Optional[float] = None, max_price: Optional[float] = None
    ):
        """Initialize price filter with optional bounds."""
        self.min_price = min_price
        self.max_price = max_price

    def check_price_range(self, listing: Listing) -> bool:
        """Check if listing price falls within the configured range."""
        if listing.price is None:
            return False  # Unknown price is never in range

        if self.min_price is not None and listing.price < self.min_price:
            return False

        if self.max_price is not None and listing.price > self.max_price:
            return False

        return True


class FilterEngine:
    """Evaluates listings against search criteria."""

    def evaluate(self, listing: Listing, criteria: SearchCriteria) -> FilterResult:
        """Run every check and report the individual outcomes."""
        price_match = PriceFilter(
            criteria.min_price, criteria.max_price
        ).check_price_range(listing)

        result = FilterResult(
            price_match=price_match,
            type_match=self._check_listing_type(listing, criteria.listing_type),
            time_match=self._check_time_remaining(listing, criteria),
            watcher_match=self._check_watchers(listing, criteria),
        )

        if not result.passes_filters:
            logger.debug(
                f"Listing {listing.url} filtered out: "
                f"failed {', '.join(result.failed_checks())} "
                f"(price: {listing.price}, auction: {listing.is_auction}, "
                f"watchers: {listing.watcher_count})"
            )

        return result

    def matches(self, listing: Listing, criteria: SearchCriteria) -> bool:
        """Return True if the listing passes all filters."""
        return self.evaluate(listing, criteria).passes_filters

    def _check_listing_type(self, listing: Listing, listing_type: ListingType) -> bool:
        if listing_type == ListingType.FIXED_PRICE_ONLY:
            return not listing.is_auction
        if listing_type == ListingType.AUCTION_ONLY:
            return listing.is_auction
        return True

    def _check_time_remaining(self, listing: Listing, criteria: SearchCriteria) -> bool:
        """Time ceiling only applies to auction-only searches."""
        if not self._should_check_time(criteria):
            return True

        return self._is_within(listing.time_remaining, criteria.max_time_remaining)

    @staticmethod
    def _should_check_time(criteria: SearchCriteria) -> bool:
        return (
            criteria.listing_type == ListingType.AUCTION_ONLY
            and criteria.max_time_remaining is not None
        )

    @staticmethod
    def _is_within(time_remaining: Optional[Duration], ceiling: Duration) -> bool:
        if time_remaining is None:
            return False
        return time_remaining.to_total_minutes() <= ceiling.to_total_minutes()

    def _check_watchers(self, listing: Listing, criteria: SearchCriteria) -> bool:
        """Watcher bounds <= 0 are treated as no limit."""
        if criteria.min_watchers > 0 and listing.watcher_count < criteria.min_watchers:
            return False

        if criteria.max_watchers > 0 and listing.watcher_count > criteria.max_watchers:
            return False

        return True
