"""
Search criteria models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from .listing import Duration


class ListingType(Enum):
    """Listing types a search can be restricted to."""

    ANY = "any"
    FIXED_PRICE_ONLY = "buy_now"
    AUCTION_ONLY = "auction"

    @classmethod
    def from_config(cls, value: Union[str, int, None]) -> "ListingType":
        """
        Resolve a configuration value into a ListingType.

        Accepts the enum values, a few aliases, and the integers 0-2 used by
        older configuration files.

        Raises:
            ValueError: If the value does not name a listing type
        """
        if value is None:
            return cls.ANY

        if isinstance(value, bool):
            raise ValueError(f"Invalid listing type: {value!r}")

        if isinstance(value, int):
            by_index = {0: cls.ANY, 1: cls.FIXED_PRICE_ONLY, 2: cls.AUCTION_ONLY}
            if value not in by_index:
                raise ValueError(f"Invalid listing type: {value!r}")
            return by_index[value]

        aliases = {
            "any": cls.ANY,
            "all": cls.ANY,
            "buy_now": cls.FIXED_PRICE_ONLY,
            "fixed_price": cls.FIXED_PRICE_ONLY,
            "auction": cls.AUCTION_ONLY,
        }
        key = str(value).strip().lower()
        if key not in aliases:
            raise ValueError(
                f"Invalid listing type: {value!r} "
                f"(expected one of: {sorted(aliases)})"
            )
        return aliases[key]


@dataclass(frozen=True)
class SearchCriteria:
    """Filter bounds configured for one monitored query."""

    listing_type: ListingType = ListingType.ANY
    min_price: Optional[float] = None  # None means no limit
    max_price: Optional[float] = None
    min_watchers: int = 0  # <= 0 means no limit
    max_watchers: int = 0
    max_time_remaining: Optional[Duration] = None

    def validate(self) -> bool:
        """Validate search criteria."""
        if not isinstance(self.listing_type, ListingType):
            raise ValueError("listing_type must be a ListingType enum")

        for name in ("min_price", "max_price"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number")
            if value < 0:
                raise ValueError(f"{name} cannot be negative")

        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price cannot be greater than max_price")

        for name in ("min_watchers", "max_watchers"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer")

        if 0 < self.max_watchers < self.min_watchers:
            raise ValueError("min_watchers cannot be greater than max_watchers")

        if self.max_time_remaining is not None:
            if not isinstance(self.max_time_remaining, Duration):
                raise ValueError("max_time_remaining must be a Duration")
            self.max_time_remaining.validate()

        return True

    def to_dict(self) -> dict:
        """Serialize into the configuration file layout."""
        return {
            "listing_type": self.listing_type.value,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "min_watchers": self.min_watchers,
            "max_watchers": self.max_watchers,
            "max_time_left": self.max_time_remaining.to_string()
            if self.max_time_remaining
            else None,
        }


@dataclass(frozen=True)
class SearchConfig:
    """One monitored query together with its criteria."""

    query: str
    criteria: SearchCriteria = field(default_factory=SearchCriteria)

    def validate(self) -> bool:
        """Validate search configuration."""
        if not isinstance(self.query, str) or not self.query.strip():
            raise ValueError("Search query cannot be empty")

        self.criteria.validate()
        return True

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {"query": self.query}
        data.update(self.criteria.to_dict())
        return data
