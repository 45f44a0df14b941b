"""
Service layer for the baycheck listing monitor.

This module contains the configuration manager and the polling scheduler
that drives the monitoring cycle.
"""

from .config_manager import ConfigurationManager
from .polling_scheduler import PollingScheduler, SchedulerState

__all__ = [
    "ConfigurationManager",
    "PollingScheduler",
    "SchedulerState",
]
