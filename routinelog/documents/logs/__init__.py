"""Logs document package."""

from .Log import Log
from .LogFactory import LogFactory

__all__ = ["Log", "LogFactory"]
