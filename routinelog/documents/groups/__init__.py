"""Groups document package."""

from .Group import Group
from .GroupFactory import GroupFactory

__all__ = ["Group", "GroupFactory"]
