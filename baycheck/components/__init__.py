"""
Core components for the baycheck listing monitor.

This module contains the components that fetch search result pages,
normalize and extract listings, filter them, deduplicate them and emit
new findings.
"""

from .console_presenter import ConsolePresenter
from .dedup_store import DeduplicationRegistry, DeduplicationStore
from .field_normalizer import FieldNormalizer
from .filter_engine import FilterEngine, PriceFilter
from .findings_recorder import FindingsRecorder
from .listing_classifier import ListingClassifier
from .listing_extractor import ExtractionEngine
from .listing_fetcher import ListingFetcher
from .selectors import EBAY_SELECTORS, ListingSelectors

__all__ = [
    "FieldNormalizer",
    "ListingClassifier",
    "ExtractionEngine",
    "ListingSelectors",
    "EBAY_SELECTORS",
    "FilterEngine",
    "PriceFilter",
    "DeduplicationStore",
    "DeduplicationRegistry",
    "ListingFetcher",
    "FindingsRecorder",
    "ConsolePresenter",
]
