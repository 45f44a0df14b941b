"""
Listing data models for the baycheck listing monitor.
"""

from dataclasses import asdict, dataclass
from functools import total_ordering
from typing import Any, Dict, Optional


@total_ordering
@dataclass(frozen=True, eq=False)
class Duration:
    """Days/hours/minutes remaining, compared by total minutes only."""

    days: int = 0
    hours: int = 0
    minutes: int = 0

    def to_total_minutes(self) -> int:
        """Convert the duration into total minutes."""
        return (self.days * 24 * 60) + (self.hours * 60) + self.minutes

    def validate(self) -> bool:
        """Validate duration components."""
        for name in ("days", "hours", "minutes"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Duration {name} must be an integer")
            if value < 0:
                raise ValueError(f"Duration {name} cannot be negative")

        return True

    @classmethod
    def from_string(cls, value: str) -> "Duration":
        """
        Parse a ``DD:HH:MM`` string.

        Args:
            value: Duration text such as ``"01:12:30"``

        Returns:
            Parsed Duration

        Raises:
            ValueError: If the text is not a valid ``DD:HH:MM`` value
        """
        parts = str(value).strip().split(":")
        if len(parts) != 3:
            raise ValueError(f"Duration must use the DD:HH:MM format: {value!r}")

        try:
            days, hours, minutes = (int(part) for part in parts)
        except ValueError:
            raise ValueError(f"Duration must use the DD:HH:MM format: {value!r}")

        return cls._in_range(days, hours, minutes, value)

    @classmethod
    def from_mapping(cls, value: Dict[str, Any]) -> "Duration":
        """
        Build a Duration from a ``{"Days": 1, "Hours": 0, "Minutes": 0}`` mapping.

        Keys are matched case-insensitively and missing units count as 0.

        Raises:
            ValueError: If a unit is unknown, not an integer or out of range
        """
        units = {"days": 0, "hours": 0, "minutes": 0}
        for key, amount in value.items():
            unit = str(key).lower()
            if unit not in units:
                raise ValueError(f"Unknown duration unit {key!r} in {value!r}")
            if not isinstance(amount, int) or isinstance(amount, bool):
                raise ValueError(f"Duration {unit} must be an integer: {value!r}")
            units[unit] = amount

        return cls._in_range(units["days"], units["hours"], units["minutes"], value)

    @classmethod
    def _in_range(cls, days: int, hours: int, minutes: int, source: Any) -> "Duration":
        if days < 0 or not (0 <= hours < 24) or not (0 <= minutes < 60):
            raise ValueError(
                f"Duration out of range (hours < 24, minutes < 60): {source!r}"
            )

        return cls(days=days, hours=hours, minutes=minutes)

    def to_string(self) -> str:
        """Render as ``DD:HH:MM``."""
        return f"{self.days:02d}:{self.hours:02d}:{self.minutes:02d}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.to_total_minutes() == other.to_total_minutes()

    def __lt__(self, other: "Duration") -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.to_total_minutes() < other.to_total_minutes()

    def __hash__(self) -> int:
        return hash(self.to_total_minutes())


@dataclass(frozen=True)
class Listing:
    """Structured marketplace listing extracted from a search results page."""

    title: str
    raw_price: str
    price: Optional[float]
    url: str
    is_auction: bool
    watcher_count: int = 0
    time_remaining: Optional[Duration] = None
    raw_time_remaining: str = ""

    def __post_init__(self):
        self.validate()

    def validate(self) -> bool:
        """Validate the listing data."""
        if not self.title or not self.title.strip():
            raise ValueError("Listing title cannot be empty")

        if not self.raw_price or not self.raw_price.strip():
            raise ValueError("Listing price text cannot be empty")

        if not self.url or not self.url.strip():
            raise ValueError("Listing URL cannot be empty")

        if self.watcher_count < 0:
            raise ValueError("Watcher count cannot be negative")

        if self.time_remaining is not None:
            self.time_remaining.validate()

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the listing for persistence."""
        data = asdict(self)
        data["time_remaining"] = (
            self.time_remaining.to_string() if self.time_remaining else None
        )
        return data
