"""
Data models for the baycheck listing monitor.

This module contains all data classes and type definitions used throughout
the application for representing listings, search criteria, configuration,
and polling results.
"""

from .config import Configuration
from .criteria import ListingType, SearchConfig, SearchCriteria
from .filter import FilterResult
from .finding import CycleReport, Finding
from .listing import Duration, Listing

__all__ = [
    "Listing",
    "Duration",
    "ListingType",
    "SearchCriteria",
    "SearchConfig",
    "Configuration",
    "FilterResult",
    "Finding",
    "CycleReport",
]
