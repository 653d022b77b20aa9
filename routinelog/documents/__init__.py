"""Documents package initialization."""

from .DocumentBase import DocumentBase, doc_from_snapshot
from .groups import Group, GroupFactory
from .items import Item, ItemFactory
from .logs import Log, LogFactory
from .presets import Preset, PresetFactory

__all__ = [
    "DocumentBase",
    "doc_from_snapshot",
    "Group",
    "GroupFactory",
    "Item",
    "ItemFactory",
    "Log",
    "LogFactory",
    "Preset",
    "PresetFactory",
]
