"""Utility functions package."""

from .logger import get_logger
from .subscription import Subscription

__all__ = [
    "get_logger",
    "Subscription",
]
