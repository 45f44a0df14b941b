"""
Field normalization for marketplace listing fragments.

Search results pages encode prices, watcher counts and remaining auction time
as locale-specific text. The functions here turn those fragments into typed
values, degrading to defined defaults instead of raising.
"""

import re
from typing import Optional

from ..models.listing import Duration

CURRENCY_PREFIX = "EUR"
NEW_LISTING_MARKER = "Neues Angebot"


class FieldNormalizer:
    """Converts raw listing text fragments into typed values."""

    # Compact "5T 12Std 30 Min" style tokens
    DAYS_PATTERN = r"(\d+)T"
    HOURS_PATTERN = r"(\d+)Std"
    MINUTES_PATTERN = r"(\d+)\s*Min"

    # Spaced "Noch 5 Tage 12 Std" style unit tokens
    DAY_UNIT_PREFIX = "T"
    HOUR_UNIT_PREFIX = "Std"

    def __init__(self):
        """Initialize field normalizer."""
        self.non_numeric_regex = re.compile(r"[^0-9.]")
        self.digits_regex = re.compile(r"(\d+)")
        self.grouped_thousands_regex = re.compile(r"^\d{1,3}(?:\.\d{3})+\.\d{1,2}$")
        self.days_regex = re.compile(self.DAYS_PATTERN)
        self.hours_regex = re.compile(self.HOURS_PATTERN)
        self.minutes_regex = re.compile(self.MINUTES_PATTERN)

    def parse_price(self, raw: str) -> Optional[float]:
        """
        Extract a numeric price from price text.

        Args:
            raw: Price text such as ``"EUR 1.234,56"``

        Returns:
            Price as float, or None when no number can be recovered
        """
        if not raw:
            return None

        price_str = raw.strip()
        if price_str.startswith(CURRENCY_PREFIX):
            price_str = price_str[len(CURRENCY_PREFIX):]
        price_str = price_str.strip()

        price_str = price_str.replace(",", ".")
        clean_price = self.non_numeric_regex.sub("", price_str)

        # "1.234.56": grouped thousands followed by cents
        if self.grouped_thousands_regex.match(clean_price):
            integer_part, _, fraction = clean_price.rpartition(".")
            clean_price = f"{integer_part.replace('.', '')}.{fraction}"

        try:
            return float(clean_price)
        except ValueError:
            return None

    def parse_watcher_count(self, raw: str) -> int:
        """
        Extract the watcher count from text like ``"12 watchers"``.

        Returns:
            First number found in the text, or 0 if there is none
        """
        if not raw:
            return 0

        match = self.digits_regex.search(raw)
        if match:
            return int(match.group(1))
        return 0

    def parse_time_remaining(self, raw: str) -> Optional[Duration]:
        """
        Convert remaining-time text into a Duration.

        Compact tokens (``5T``, ``12Std``, ``30 Min``) are tried first; only
        when none of them match are whitespace separated ``<count> <unit>``
        pairs scanned. Unrecognised text yields a zero Duration.

        Args:
            raw: Time remaining text

        Returns:
            Duration, or None for empty input
        """
        if not raw:
            return None

        days = self._first_int(self.days_regex, raw)
        hours = self._first_int(self.hours_regex, raw)
        minutes = self._first_int(self.minutes_regex, raw)

        if days is None and hours is None and minutes is None:
            days, hours = self._scan_spaced_units(raw)

        return Duration(days=days or 0, hours=hours or 0, minutes=minutes or 0)

    def normalize_title(self, raw: str) -> str:
        """Strip the new-listing marker and surrounding whitespace."""
        if not raw:
            return ""

        title = raw.strip()
        if title.startswith(NEW_LISTING_MARKER):
            title = title[len(NEW_LISTING_MARKER):]
        return title.strip()

    def _first_int(self, regex: "re.Pattern", text: str) -> Optional[int]:
        match = regex.search(text)
        if match:
            return int(match.group(1))
        return None

    def _scan_spaced_units(self, text: str):
        days = 0
        hours = 0
        parts = text.split()

        for i, part in enumerate(parts):
            if i == 0:
                continue
            if part.startswith(self.DAY_UNIT_PREFIX):
                days = self._to_int(parts[i - 1])
            if part.startswith(self.HOUR_UNIT_PREFIX):
                hours = self._to_int(parts[i - 1])

        return days, hours

    @staticmethod
    def _to_int(token: str) -> int:
        try:
            return int(token)
        except ValueError:
            return 0


_default_normalizer = FieldNormalizer()


def parse_price(raw: str) -> Optional[float]:
    """Module-level shortcut for :meth:`FieldNormalizer.parse_price`."""
    return _default_normalizer.parse_price(raw)


def parse_watcher_count(raw: str) -> int:
    """Module-level shortcut for :meth:`FieldNormalizer.parse_watcher_count`."""
    return _default_normalizer.parse_watcher_count(raw)


def parse_time_remaining(raw: str) -> Optional[Duration]:
    """Module-level shortcut for :meth:`FieldNormalizer.parse_time_remaining`."""
    return _default_normalizer.parse_time_remaining(raw)


def normalize_title(raw: str) -> str:
    """Module-level shortcut for :meth:`FieldNormalizer.normalize_title`."""
    return _default_normalizer.normalize_title(raw)
