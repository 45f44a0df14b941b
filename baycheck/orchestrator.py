"""
Main application orchestrator for the baycheck listing monitor.

This module wires configuration, collaborators and the polling scheduler
together, and handles startup and graceful shutdown.
"""

import asyncio
import signal
import sys
from typing import Optional

from .components.console_presenter import ConsolePresenter
from .components.filter_engine import FilterEngine
from .components.findings_recorder import FindingsRecorder
from .components.listing_extractor import ExtractionEngine
from .components.listing_fetcher import ListingFetcher
from .interfaces import IConfigurationManager
from .models.config import Configuration
from .services.config_manager import ConfigurationManager
from .services.polling_scheduler import PollingScheduler
from .utils.logging import get_logger


class ApplicationOrchestrator:
    """
    Builds the monitoring pipeline from configuration and runs it.

    Configuration problems surface from ``initialize`` before the loop starts;
    nothing that happens inside the loop stops it.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config_manager: Optional[IConfigurationManager] = None,
    ):
        """
        Initialize the application orchestrator.

        Args:
            config_path: Path to configuration file. If None, uses default paths.
            config_manager: Configuration source, a file based one if omitted
        """
        self.logger = get_logger("orchestrator")
        self.config_path = config_path
        self.config_manager = config_manager

        self.config: Optional[Configuration] = None
        self.fetcher: Optional[ListingFetcher] = None
        self.recorder: Optional[FindingsRecorder] = None
        self.scheduler: Optional[PollingScheduler] = None

    def initialize(self) -> PollingScheduler:
        """
        Load configuration and build all components.

        Returns:
            Ready to run PollingScheduler

        Raises:
            ConfigurationError: If the configuration is missing or invalid
        """
        self.logger.info("Initializing baycheck...")

        if self.config_manager is None:
            self.config_manager = ConfigurationManager(self.config_path)
        self.config = self.config_manager.load_config()
        self.logger.info(
            "Configuration loaded and validated successfully",
            extra={"searches": len(self.config.searches)},
        )

        self.fetcher = ListingFetcher(
            url_template=self.config.search_url_template,
            timeout=self.config.request_timeout,
            max_retries=self.config.max_retries,
        )
        self.recorder = FindingsRecorder(
            findings_file=self.config.findings_file,
            daily_log_dir=self.config.daily_log_dir,
        )

        self.scheduler = PollingScheduler(
            searches=self.config.searches,
            fetcher=self.fetcher,
            extractor=ExtractionEngine(),
            filter_engine=FilterEngine(),
            persistence=self.recorder,
            presenter=ConsolePresenter(),
            poll_interval=self.config.effective_poll_interval,
        )

        if self.config.restore_seen_on_start:
            for search in self.config.searches:
                self.scheduler.seed_seen(
                    search.query, self.recorder.load_seen(search.query)
                )

        self.logger.info(
            f"Saving results to {self.config.findings_file} and daily logs "
            f"in {self.config.daily_log_dir}/"
        )
        return self.scheduler

    def _setup_signal_handlers(self) -> None:
        """Stop the scheduler on SIGINT/SIGTERM."""
        if sys.platform == "win32":
            signal.signal(signal.SIGINT, self._signal_handler)
            return

        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, self._signal_handler, signum, None)

    def _signal_handler(self, signum: int, frame) -> None:
        """Handle shutdown signals."""
        self.logger.info(
            "Received shutdown signal, initiating graceful shutdown",
            extra={"signal": signum},
        )
        if self.scheduler is not None:
            self.scheduler.stop()

    async def run(self, max_cycles: Optional[int] = None) -> None:
        """Initialize if needed and run the polling loop."""
        if self.scheduler is None:
            self.initialize()

        self._setup_signal_handlers()

        try:
            await self.scheduler.run(max_cycles=max_cycles)
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        """Release resources and report errors seen during the run."""
        if self.fetcher is not None:
            self.fetcher.close()

        if self.scheduler is not None:
            self._log_error_summary()

        self.logger.info("Shutdown complete")

    def _log_error_summary(self) -> None:
        tracker = self.scheduler.error_tracker
        stats = tracker.get_error_stats()
        if stats["total_errors"] == 0:
            return

        self.logger.warning(
            f"{stats['total_errors']} errors recorded during this run",
            extra={
                "cycles": self.scheduler.cycle_count,
                "category_breakdown": stats["category_breakdown"],
                "recent_scheduler_errors": [
                    error.message
                    for error in tracker.get_component_errors("scheduler", limit=5)
                ],
            },
        )
