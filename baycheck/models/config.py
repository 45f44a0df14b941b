"""
Configuration models for the system.
"""

from dataclasses import dataclass
from typing import List

from .criteria import SearchConfig

DEFAULT_POLL_INTERVAL = 300
DEFAULT_SEARCH_URL_TEMPLATE = "https://www.ebay.de/sch/i.html?_nkw={query}"


@dataclass
class Configuration:
    """System configuration."""

    searches: List[SearchConfig]
    poll_interval_seconds: int = DEFAULT_POLL_INTERVAL
    findings_file: str = "findings.json"
    daily_log_dir: str = "logs"
    restore_seen_on_start: bool = False
    request_timeout: int = 30
    max_retries: int = 3
    search_url_template: str = DEFAULT_SEARCH_URL_TEMPLATE

    @property
    def effective_poll_interval(self) -> int:
        """Poll interval in seconds, falling back to the default when unset."""
        if not self.poll_interval_seconds or self.poll_interval_seconds <= 0:
            return DEFAULT_POLL_INTERVAL
        return self.poll_interval_seconds

    def validate(self) -> bool:
        """Validate system configuration."""
        if not isinstance(self.searches, list):
            raise ValueError("Searches must be a list")

        if not self.searches:
            raise ValueError("At least one search must be configured")

        queries = set()
        for search in self.searches:
            search.validate()
            if search.query in queries:
                raise ValueError(f"Duplicate search query: {search.query!r}")
            queries.add(search.query)

        if (
            not isinstance(self.poll_interval_seconds, int)
            or isinstance(self.poll_interval_seconds, bool)
            or self.poll_interval_seconds < 0
        ):
            raise ValueError("Check interval must be a non-negative integer")

        if not self.findings_file or not self.findings_file.strip():
            raise ValueError("Findings file path cannot be empty")

        if not self.daily_log_dir or not self.daily_log_dir.strip():
            raise ValueError("Daily log directory cannot be empty")

        if not isinstance(self.request_timeout, int) or self.request_timeout <= 0:
            raise ValueError("Request timeout must be a positive integer")

        if not isinstance(self.max_retries, int) or self.max_retries < 0:
            raise ValueError("Max retries must be a non-negative integer")

        if "{query}" not in self.search_url_template:
            raise ValueError("Search URL template must contain '{query}'")

        return True
