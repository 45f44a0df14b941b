"""
Polling scheduler for the baycheck listing monitor.

The scheduler repeatedly runs cycles over every configured search: fetch the
results page, extract listings, apply the search criteria, drop listings
already reported, and hand the remainder to the persistence and presentation
sinks. Searches are processed one after another; a failing search is logged
and skipped and never stops the cycle or the loop.
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from ..components.dedup_store import DeduplicationRegistry
from ..components.filter_engine import FilterEngine
from ..components.listing_extractor import ExtractionEngine
from ..interfaces import (
    IFilterEngine,
    IListingExtractor,
    IListingFetcher,
    IPersistenceSink,
    IPresentationSink,
)
from ..models.config import DEFAULT_POLL_INTERVAL
from ..models.criteria import SearchConfig
from ..models.finding import CycleReport
from ..models.listing import Listing
from ..utils.error_handling import (
    DocumentParseError,
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
    get_error_tracker,
    with_error_handling,
)
from ..utils.logging import get_logger


class SchedulerState(Enum):
    """Scheduler states."""

    IDLE = "idle"
    RUNNING = "running"


class PollingScheduler:
    """Drives the fetch, extract, filter, deduplicate and emit cycle."""

    def __init__(
        self,
        searches: Iterable[SearchConfig],
        fetcher: IListingFetcher,
        extractor: Optional[IListingExtractor] = None,
        filter_engine: Optional[IFilterEngine] = None,
        persistence: Optional[IPersistenceSink] = None,
        presenter: Optional[IPresentationSink] = None,
        poll_interval: Optional[int] = DEFAULT_POLL_INTERVAL,
        registry: Optional[DeduplicationRegistry] = None,
        error_tracker: Optional[ErrorTracker] = None,
    ):
        """
        Initialize the polling scheduler.

        Args:
            searches: Searches to process on every cycle, in order
            fetcher: Transport collaborator returning document content
            extractor: Document to listings extractor
            filter_engine: Criteria evaluator
            persistence: Append-only sink for new listings
            presenter: Presentation sink for new listings and summaries
            poll_interval: Seconds to sleep between cycles; unset or
                non-positive values fall back to the default
            registry: Per-search deduplication stores
            error_tracker: Error tracker, the global one if omitted
        """
        self.searches: List[SearchConfig] = list(searches)
        self.fetcher = fetcher
        self.extractor = extractor or ExtractionEngine()
        self.filter_engine = filter_engine or FilterEngine()
        self.persistence = persistence
        self.presenter = presenter
        self.poll_interval = (
            poll_interval if poll_interval and poll_interval > 0 else DEFAULT_POLL_INTERVAL
        )
        self.registry = registry or DeduplicationRegistry()
        self.error_tracker = error_tracker or get_error_tracker()

        self.logger = get_logger("scheduler")
        self.state = SchedulerState.IDLE
        self.cycle_count = 0
        self._stop_event = asyncio.Event()

        for search in self.searches:
            self.registry.store_for(search.query)

    @property
    def is_stopping(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Request the loop to stop after the current search."""
        if not self._stop_event.is_set():
            self.logger.info("Stop requested")
        self._stop_event.set()

    def seed_seen(self, search_term: str, urls: Iterable[str]) -> int:
        """Mark previously recorded listings as seen for a search."""
        added = self.registry.store_for(search_term).seed(urls)
        self.logger.info(
            f"Restored {added} seen listings for '{search_term}'",
            extra={"query": search_term, "restored": added},
        )
        return added

    async def run(self, max_cycles: Optional[int] = None) -> None:
        """
        Run cycles until stopped.

        Args:
            max_cycles: Stop after this many cycles, run forever if None
        """
        self.logger.info(
            f"Starting continuous monitoring for {len(self.searches)} searches, "
            f"checking every {self.poll_interval} seconds"
        )

        while not self.is_stopping:
            await self.run_cycle()

            if max_cycles is not None and self.cycle_count >= max_cycles:
                break

            await self._sleep()

        self.logger.info(f"Monitoring stopped after {self.cycle_count} cycles")

    async def run_cycle(self) -> List[CycleReport]:
        """
        Process every configured search once.

        Returns:
            One report per processed search
        """
        self.state = SchedulerState.RUNNING
        reports = []

        try:
            for search in self.searches:
                if self.is_stopping:
                    break

                try:
                    report = await self.process_search(search)
                except Exception as e:
                    self._record_failure(
                        search.query, ErrorCategory.SYSTEM, f"Unexpected error: {e}", e
                    )
                    report = CycleReport(
                        query=search.query, error=str(e), finished_at=datetime.now()
                    )

                reports.append(report)
        finally:
            self.state = SchedulerState.IDLE

        self.cycle_count += 1
        self.logger.debug(
            f"Cycle {self.cycle_count} finished",
            extra={
                "cycle": self.cycle_count,
                "new_items": sum(report.new_count for report in reports),
            },
        )
        return reports

    async def process_search(self, search: SearchConfig) -> CycleReport:
        """Run the full pipeline for one search."""
        report = CycleReport(query=search.query)

        content = await self._fetch(search.query)
        if content is None:
            report.error = "fetch failed"
            return self._finish(report)

        report.fetched = True

        try:
            document = self.extractor.parse(content)
            listings = list(self.extractor.extract(document))
        except DocumentParseError as e:
            self._record_failure(search.query, ErrorCategory.PARSING, str(e), e)
            report.error = "parse failed"
            return self._finish(report)

        report.extracted = len(listings)

        matched = [
            listing
            for listing in listings
            if self.filter_engine.matches(listing, search.criteria)
        ]
        report.matched = len(matched)

        store = self.registry.store_for(search.query)
        report.new_items = store.filter_new(matched)

        found_at = datetime.now()
        for listing in report.new_items:
            self._record(listing, search.query, found_at)
            self._present(listing, search.query)

        self.logger.info(
            f"Query '{search.query}': {report.new_count} new of "
            f"{report.matched} matching ({report.extracted} extracted)",
            extra={
                "query": search.query,
                "extracted": report.extracted,
                "matched": report.matched,
                "new_items": report.new_count,
            },
        )
        return self._finish(report)

    async def _fetch(self, search_term: str) -> Optional[str]:
        """Run the blocking fetch in the default executor."""
        try:
            content = await asyncio.get_running_loop().run_in_executor(
                None, self.fetcher.fetch, search_term
            )
        except Exception as e:
            self._record_failure(search_term, ErrorCategory.NETWORK, str(e), e)
            return None

        if content is None:
            self._record_failure(
                search_term, ErrorCategory.NETWORK, "Fetch returned no content"
            )
        return content

    @with_error_handling(
        component="scheduler",
        category=ErrorCategory.PERSISTENCE,
        severity=ErrorSeverity.MEDIUM,
        fallback_value=False,
        suppress_exceptions=True,
    )
    def _record(self, listing: Listing, search_term: str, found_at: datetime):
        if self.persistence is None:
            return False
        return self.persistence.record(listing, search_term, found_at)

    @with_error_handling(
        component="scheduler",
        category=ErrorCategory.PRESENTATION,
        severity=ErrorSeverity.LOW,
        suppress_exceptions=True,
    )
    def _present(self, listing: Listing, search_term: str):
        if self.presenter is not None:
            self.presenter.present(listing, search_term)

    def _finish(self, report: CycleReport) -> CycleReport:
        report.finished_at = datetime.now()
        if self.presenter is not None:
            self._present_summary(report)
        return report

    @with_error_handling(
        component="scheduler",
        category=ErrorCategory.PRESENTATION,
        severity=ErrorSeverity.LOW,
        suppress_exceptions=True,
    )
    def _present_summary(self, report: CycleReport):
        self.presenter.present_summary(report)

    def _record_failure(
        self,
        search_term: str,
        category: ErrorCategory,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> None:
        self.error_tracker.record_error(
            component="scheduler",
            category=category,
            severity=ErrorSeverity.MEDIUM,
            message=f"Skipping '{search_term}' this cycle: {message}",
            exception=exception,
            context={"query": search_term, "cycle": self.cycle_count + 1},
        )

    async def _sleep(self) -> None:
        """Sleep for the poll interval, waking early when stopped."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            pass
