"""
Console presentation of newly found listings.
"""

import sys
from datetime import datetime
from typing import Optional, TextIO

from ..models.finding import CycleReport
from ..models.listing import Listing

SEPARATOR = "-" * 80


class ConsolePresenter:
    """Prints found listings and per-search cycle summaries to a stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def format_listing(self, listing: Listing, search_term: str) -> str:
        """Render a listing as a block of text."""
        if listing.is_auction:
            remaining = listing.raw_time_remaining.strip() or "unknown time"
            listing_type = f"Auction - {remaining} remaining"
        else:
            listing_type = "Buy Now"

        if listing.watcher_count > 0:
            listing_type += f" ({listing.watcher_count} watchers)"

        lines = [
            "",
            SEPARATOR,
            f"Title: {listing.title}",
            f"Price: {listing.raw_price.strip()}",
            f"Type: {listing_type}",
            f"URL: {listing.url}",
            f"Query: {search_term}",
        ]
        return "\n".join(lines)

    def format_summary(self, report: CycleReport) -> str:
        """Render the one-line result of a search within a cycle."""
        timestamp = (report.finished_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

        if report.error:
            return f"[{timestamp}] Query '{report.query}': Skipped ({report.error})"
        if report.new_count > 0:
            return (
                f"\n[{timestamp}] Query '{report.query}': "
                f"Found {report.new_count} new items!"
            )
        return f"[{timestamp}] Query '{report.query}': No new items"

    def present(self, listing: Listing, search_term: str) -> None:
        """Print a newly found listing."""
        print(self.format_listing(listing, search_term), file=self.stream)

    def present_summary(self, report: CycleReport) -> None:
        """Print the per-search summary line."""
        print(self.format_summary(report), file=self.stream)
