"""
Protocol interfaces for the baycheck listing monitor.

This module defines the protocol interfaces that establish the boundaries
between the polling core and its collaborators (transport, persistence,
presentation, configuration) and enable dependency injection.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterable, Optional, Protocol

from .models.criteria import SearchCriteria
from .models.listing import Listing

if TYPE_CHECKING:
    from .models.config import Configuration
    from .models.finding import CycleReport


class IListingFetcher(Protocol):
    """Protocol for fetching search result documents."""

    def fetch(self, search_term: str) -> Optional[str]:
        """Fetch the document for a query, None on failure."""
        ...


class IListingExtractor(Protocol):
    """Protocol for turning documents into listings."""

    def parse(self, document_content: str) -> Any:
        """Parse raw document content."""
        ...

    def extract(self, document: Any) -> Iterable[Listing]:
        """Extract listings from a parsed document."""
        ...


class IFilterEngine(Protocol):
    """Protocol for applying search criteria to listings."""

    def matches(self, listing: Listing, criteria: SearchCriteria) -> bool:
        """Return True if the listing satisfies the criteria."""
        ...


class IPersistenceSink(Protocol):
    """Protocol for the append-only record of reported listings."""

    def record(
        self, listing: Listing, search_term: str, found_at: Optional[datetime] = None
    ) -> bool:
        """Append a newly reported listing."""
        ...


class IPresentationSink(Protocol):
    """Protocol for showing newly reported listings."""

    def present(self, listing: Listing, search_term: str) -> None:
        """Present a newly reported listing."""
        ...

    def present_summary(self, report: "CycleReport") -> None:
        """Present the outcome of one search within a cycle."""
        ...


class IConfigurationManager(Protocol):
    """Protocol for managing system configuration."""

    def load_config(self) -> "Configuration":
        """Load and validate configuration."""
        ...
