"""
Integration tests for application wiring and the command line entry point.
"""

import json
from unittest.mock import Mock, patch

import pytest
import yaml

from baycheck.components.listing_fetcher import ListingFetcher
from baycheck.main import async_main, main, parse_args
from baycheck.orchestrator import ApplicationOrchestrator
from baycheck.utils.error_handling import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
)


@pytest.fixture
def config_file(tmp_path):
    """Write a valid configuration whose output goes to a temporary directory."""
    path = tmp_path / "config.yaml"
    config_data = {
        "searches": [
            {"query": "nintendo switch", "min_price": 50, "max_price": 2000},
            {"query": "game boy", "listing_type": "auction"},
        ],
        "system": {
            "check_interval_seconds": 60,
            "findings_file": str(tmp_path / "findings.json"),
            "daily_log_dir": str(tmp_path / "daily"),
        },
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config_data, f)
    return path


def read_findings(path):
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.integration
class TestApplicationOrchestrator:
    """Test cases for ApplicationOrchestrator."""

    def test_initialize(self, config_file):
        """Test that initialization builds a ready scheduler."""
        orchestrator = ApplicationOrchestrator(str(config_file))

        scheduler = orchestrator.initialize()

        assert scheduler is orchestrator.scheduler
        assert [search.query for search in scheduler.searches] == [
            "nintendo switch",
            "game boy",
        ]
        assert scheduler.poll_interval == 60
        assert scheduler.persistence is orchestrator.recorder
        assert scheduler.registry.stats() == {"nintendo switch": 0, "game boy": 0}
        orchestrator.shutdown()

    def test_initialize_with_config_manager(self, sample_configuration):
        """Test that an injected configuration source is used."""
        config_manager = Mock()
        config_manager.load_config.return_value = sample_configuration
        orchestrator = ApplicationOrchestrator(config_manager=config_manager)

        scheduler = orchestrator.initialize()

        config_manager.load_config.assert_called_once_with()
        assert scheduler.searches == sample_configuration.searches
        assert scheduler.poll_interval == 60
        orchestrator.shutdown()

    def test_shutdown_reports_recorded_errors(self, sample_configuration):
        """Test that errors recorded during the run are summarized at shutdown."""
        config_manager = Mock()
        config_manager.load_config.return_value = sample_configuration
        orchestrator = ApplicationOrchestrator(config_manager=config_manager)
        scheduler = orchestrator.initialize()
        scheduler.error_tracker = ErrorTracker()
        scheduler.error_tracker.record_error(
            component="scheduler",
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.MEDIUM,
            message="Skipping 'nintendo switch' this cycle: timeout",
        )
        orchestrator.logger = Mock()

        orchestrator.shutdown()

        orchestrator.logger.warning.assert_called_once()
        extra = orchestrator.logger.warning.call_args[1]["extra"]
        assert extra["category_breakdown"]["network"] == 1
        assert extra["recent_scheduler_errors"] == [
            "Skipping 'nintendo switch' this cycle: timeout"
        ]

    def test_shutdown_without_errors(self, sample_configuration):
        """Test that a clean run logs no error summary."""
        config_manager = Mock()
        config_manager.load_config.return_value = sample_configuration
        orchestrator = ApplicationOrchestrator(config_manager=config_manager)
        scheduler = orchestrator.initialize()
        scheduler.error_tracker = ErrorTracker()
        orchestrator.logger = Mock()

        orchestrator.shutdown()

        orchestrator.logger.warning.assert_not_called()
        orchestrator.logger.info.assert_called_with("Shutdown complete")

    def test_initialize_invalid_config(self, tmp_path):
        """Test that configuration errors surface before the loop starts."""
        path = tmp_path / "config.yaml"
        path.write_text("searches: []\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ApplicationOrchestrator(str(path)).initialize()

    def test_restore_seen_on_start(self, config_file, tmp_path):
        """Test reseeding from the findings file when enabled."""
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
        config_data["system"]["restore_seen_on_start"] = True
        with open(config_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(config_data, f)

        (tmp_path / "findings.json").write_text(
            json.dumps(
                {
                    "query": "nintendo switch",
                    "found": "2024-01-01T12:00:00",
                    "item": {"url": "https://www.ebay.de/itm/111"},
                }
            )
            + "\n",
            encoding="utf-8",
        )

        orchestrator = ApplicationOrchestrator(str(config_file))
        scheduler = orchestrator.initialize()

        assert scheduler.registry.stats() == {"nintendo switch": 1, "game boy": 0}
        orchestrator.shutdown()

    @pytest.mark.asyncio
    async def test_run_single_cycle(self, config_file, tmp_path, search_results_html, capsys):
        """Test a full cycle from fetch to findings files and console output."""
        orchestrator = ApplicationOrchestrator(str(config_file))

        with patch.object(ListingFetcher, "fetch", return_value=search_results_html):
            await orchestrator.run(max_cycles=1)

        findings = read_findings(tmp_path / "findings.json")
        assert [(f["query"], f["item"]["url"]) for f in findings] == [
            ("nintendo switch", "https://www.ebay.de/itm/111"),
            ("nintendo switch", "https://www.ebay.de/itm/222"),
            ("game boy", "https://www.ebay.de/itm/111"),
            ("game boy", "https://www.ebay.de/itm/555"),
        ]
        assert len(list((tmp_path / "daily").glob("findings_*.json"))) == 1

        output = capsys.readouterr().out
        assert "Title: Nintendo Switch Konsole" in output
        assert "Query 'nintendo switch': Found 2 new items!" in output
        assert orchestrator.scheduler.cycle_count == 1

    def test_signal_handler_stops_scheduler(self, config_file):
        """Test that a shutdown signal requests a stop."""
        orchestrator = ApplicationOrchestrator(str(config_file))
        scheduler = orchestrator.initialize()

        orchestrator._signal_handler(15, None)

        assert scheduler.is_stopping is True
        orchestrator.shutdown()


class TestCommandLine:
    """Test cases for the command line entry point."""

    def test_parse_args_defaults(self):
        """Test default arguments."""
        args = parse_args([])

        assert args.config_path is None
        assert args.log_level == "INFO"
        assert args.log_dir == "logs"
        assert args.once is False

    def test_parse_args(self):
        """Test explicit arguments."""
        args = parse_args(["my.yaml", "--log-level", "DEBUG", "--once"])

        assert args.config_path == "my.yaml"
        assert args.log_level == "DEBUG"
        assert args.once is True

    @pytest.mark.asyncio
    async def test_async_main_config_error(self, tmp_path, capsys):
        """Test that an invalid configuration exits with status 1."""
        exit_code = await async_main(str(tmp_path / "missing.yaml"))

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().err

    @patch("baycheck.main.setup_logging")
    def test_main_once(self, mock_setup_logging, config_file, tmp_path, search_results_html):
        """Test a single cycle run through the entry point."""
        with patch.object(ListingFetcher, "fetch", return_value=search_results_html):
            with pytest.raises(SystemExit) as exc_info:
                main([str(config_file), "--once", "--log-dir", str(tmp_path / "logs")])

        assert exc_info.value.code == 0
        mock_setup_logging.assert_called_once_with(
            log_dir=str(tmp_path / "logs"), log_level="INFO"
        )
        assert len(read_findings(tmp_path / "findings.json")) == 4

    @patch("baycheck.main.setup_logging")
    def test_main_invalid_config(self, mock_setup_logging, tmp_path):
        """Test that the process exits non-zero on configuration errors."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.yaml")])

        assert exc_info.value.code == 1
