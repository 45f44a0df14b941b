"""
Append-only persistence of reported listings.

Every newly reported listing is written as one JSON line to a cumulative
findings file and to a per-day file under the daily log directory.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Set

from ..models.finding import Finding
from ..models.listing import Listing

logger = logging.getLogger(__name__)


class FindingsRecorder:
    """Writes findings to ``findings.json`` and ``logs/findings_<date>.json``."""

    def __init__(self, findings_file: str = "findings.json", daily_log_dir: str = "logs"):
        """
        Initialize findings recorder.

        Args:
            findings_file: Path of the cumulative findings file
            daily_log_dir: Directory for per-day findings files
        """
        self.findings_file = Path(findings_file)
        self.daily_log_dir = Path(daily_log_dir)

    def daily_log_path(self, day: Optional[datetime] = None) -> Path:
        """Path of the findings file for the given day (today by default)."""
        day = day or datetime.now()
        return self.daily_log_dir / f"findings_{day.strftime('%Y-%m-%d')}.json"

    def record(
        self, listing: Listing, search_term: str, found_at: Optional[datetime] = None
    ) -> bool:
        """
        Append a finding to both findings files.

        Args:
            listing: Newly reported listing
            search_term: Query that produced the listing
            found_at: Discovery time, now if omitted

        Returns:
            True if both files were written
        """
        finding = Finding(
            listing=listing, query=search_term, found_at=found_at or datetime.now()
        )
        line = json.dumps(finding.to_dict(), ensure_ascii=False)

        written = self._append(self.findings_file, line)
        written = self._append(self.daily_log_path(finding.found_at), line) and written
        return written

    def _append(self, path: Path, line: str) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
            return True
        except OSError as e:
            logger.error(f"Could not save finding to {path}: {e}")
            return False

    def load_seen(self, search_term: str) -> Set[str]:
        """
        Read back the URLs recorded for a query.

        Malformed lines are skipped.

        Args:
            search_term: Query whose findings should be loaded

        Returns:
            Set of listing URLs
        """
        urls: Set[str] = set()

        if not self.findings_file.exists():
            return urls

        try:
            with open(self.findings_file, "r", encoding="utf-8") as f:
                for line_number, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        record = json.loads(line)
                    except json.JSONDecodeError:
                        logger.warning(
                            f"Skipping malformed line {line_number} in {self.findings_file}"
                        )
                        continue

                    if not isinstance(record, dict) or record.get("query") != search_term:
                        continue

                    url = (record.get("item") or {}).get("url")
                    if url:
                        urls.add(url)

        except OSError as e:
            logger.warning(f"Could not load findings from {self.findings_file}: {e}")

        logger.debug(f"Loaded {len(urls)} recorded listings for '{search_term}'")
        return urls
