"""
Finding and cycle report models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .listing import Listing


@dataclass
class Finding:
    """A newly reported listing with metadata about when it was discovered."""

    listing: Listing
    query: str
    found_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the append-only findings record layout."""
        return {
            "item": self.listing.to_dict(),
            "found": self.found_at.isoformat(),
            "query": self.query,
        }


@dataclass
class CycleReport:
    """Summary of one search processed during a polling cycle."""

    query: str
    fetched: bool = False
    extracted: int = 0
    matched: int = 0
    new_items: List[Listing] = field(default_factory=list)
    error: Optional[str] = None
    finished_at: Optional[datetime] = None

    @property
    def new_count(self) -> int:
        return len(self.new_items)

    @property
    def succeeded(self) -> bool:
        return self.error is None
