"""Presets document package."""

from .Preset import Preset
from .PresetFactory import PresetFactory

__all__ = ["Preset", "PresetFactory"]
