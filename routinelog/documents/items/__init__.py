"""Items document package."""

from .Item import Item
from .ItemFactory import ItemFactory

__all__ = ["Item", "ItemFactory"]
