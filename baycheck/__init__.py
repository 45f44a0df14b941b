"""
baycheck Listing Monitor

Continuously polls marketplace search results, extracts and normalizes
listings, filters them against user-defined criteria and reports only the
listings that have not been seen before.
"""

__version__ = "0.1.0"
__author__ = "baycheck Team"
