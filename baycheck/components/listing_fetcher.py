"""
Search results fetching for the baycheck listing monitor.

This module downloads marketplace search result pages with transport-level
retries. Failures are reported as ``None`` so the caller can skip the search
for the current cycle.
"""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import quote_plus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..models.config import DEFAULT_SEARCH_URL_TEMPLATE

logger = logging.getLogger(__name__)


class ListingFetcher:
    """Fetches search result pages for query terms."""

    def __init__(
        self,
        url_template: str = DEFAULT_SEARCH_URL_TEMPLATE,
        timeout: int = 30,
        max_retries: int = 3,
    ):
        """
        Initialize listing fetcher.

        Args:
            url_template: Search URL containing a ``{query}`` placeholder
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for failed requests
        """
        self.url_template = url_template
        self.timeout = timeout
        self.max_retries = max_retries

        self.last_fetch_time: Optional[datetime] = None
        self.consecutive_failures = 0

        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update(
            {"User-Agent": "Mozilla/5.0 (compatible; baycheck/1.0)"}
        )

    def build_search_url(self, search_term: str) -> str:
        """Build the search results URL for a query."""
        return self.url_template.format(query=quote_plus(search_term.strip()))

    def fetch(self, search_term: str) -> Optional[str]:
        """
        Fetch the search results page for a query.

        Args:
            search_term: Query text

        Returns:
            Page content as string, or None if the request failed
        """
        url = self.build_search_url(search_term)

        try:
            logger.debug(f"Fetching search results: {url}")

            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()

            self.consecutive_failures = 0
            self.last_fetch_time = datetime.now()

            return response.text

        except requests.exceptions.Timeout:
            self.consecutive_failures += 1
            logger.warning(
                f"Timeout fetching '{search_term}' "
                f"(failure #{self.consecutive_failures})"
            )
            return None

        except requests.exceptions.ConnectionError:
            self.consecutive_failures += 1
            logger.warning(
                f"Connection error fetching '{search_term}' "
                f"(failure #{self.consecutive_failures})"
            )
            return None

        except requests.exceptions.HTTPError as e:
            self.consecutive_failures += 1
            status = e.response.status_code if e.response is not None else "?"
            logger.error(
                f"HTTP error {status} fetching '{search_term}' "
                f"(failure #{self.consecutive_failures})"
            )
            return None

        except requests.exceptions.RequestException as e:
            self.consecutive_failures += 1
            logger.error(
                f"Unexpected error fetching '{search_term}': {e} "
                f"(failure #{self.consecutive_failures})"
            )
            return None

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
