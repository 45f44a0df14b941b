"""
Filter result models.
"""

from dataclasses import dataclass


@dataclass
class FilterResult:
    """Result of evaluating a listing against search criteria."""

    price_match: bool
    type_match: bool
    time_match: bool
    watcher_match: bool

    @property
    def passes_filters(self) -> bool:
        """True only when every individual check passed."""
        return (
            self.price_match
            and self.type_match
            and self.time_match
            and self.watcher_match
        )

    def failed_checks(self) -> list:
        """Names of the checks that excluded the listing."""
        checks = {
            "price": self.price_match,
            "listing_type": self.type_match,
            "time_remaining": self.time_match,
            "watchers": self.watcher_match,
        }
        return [name for name, passed in checks.items() if not passed]
