"""
Data models and schemas for the application
"""

from .github import ContributionKind, HistoryItem, TriggerEvent, MalformedTriggerError
from .configuration import ResponseConfig, ConfigurationError, parse_labels

__all__ = [
    "ContributionKind",
    "HistoryItem",
    "TriggerEvent",
    "MalformedTriggerError",
    "ResponseConfig",
    "ConfigurationError",
    "parse_labels",
]
