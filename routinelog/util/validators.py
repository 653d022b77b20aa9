"""Input checks shared by the documents and services."""

from typing import Optional

from routinelog.config.loader import HEX_COLOR_PATTERN
from routinelog.exceptions import ValidationError


def clean_name(name: Optional[str], field: str = "name") -> str:
    """Trim a display name, rejecting empty ones."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{field} cannot be empty", field=field)
    return name.strip()


def check_color(color: Optional[str], field: str = "color") -> str:
    if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
        raise ValidationError(f"Invalid color '{color}', expected #rgb or #rrggbb", field=field)
    return color


def require_id(value: Optional[str], field: str) -> str:
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    return value
