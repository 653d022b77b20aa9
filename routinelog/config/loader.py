"""
Configuration loader for Routine Log.
Loads and validates settings from settings.yaml.
"""

import re
import yaml
from typing import TypedDict, List, Dict, Optional
from pathlib import Path


HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Firestore rejects batches above this many operations
FIRESTORE_BATCH_MAX = 500


class AuthConfig(TypedDict, total=False):
    username_domain: str


class GroupsConfig(TypedDict, total=False):
    default_name: str
    default_color: str


class ItemsConfig(TypedDict, total=False):
    demo_names: List[str]


class LogsConfig(TypedDict, total=False):
    fanout_batch_limit: int


class CalendarConfig(TypedDict, total=False):
    fallback_color: str
    max_color_dots: int


class FriendsConfig(TypedDict, total=False):
    hidden_item_label: str
    default_permissions: Dict[str, bool]


class AppConfig(TypedDict, total=False):
    auth: AuthConfig
    groups: GroupsConfig
    items: ItemsConfig
    logs: LogsConfig
    calendar: CalendarConfig
    friends: FriendsConfig


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def _validate_config(config: dict) -> None:
    """
    Validate configuration values.

    Raises:
        ConfigValidationError: If validation fails
    """

    auth = config.get("auth", {})
    if "username_domain" in auth:
        domain = auth["username_domain"]
        if not isinstance(domain, str) or not domain.strip() or "@" in domain:
            raise ConfigValidationError("auth.username_domain must be a non-empty domain without '@'")

    groups = config.get("groups", {})
    if "default_name" in groups:
        name = groups["default_name"]
        if not isinstance(name, str) or not name.strip():
            raise ConfigValidationError("groups.default_name must be a non-empty string")
    if "default_color" in groups:
        if not isinstance(groups["default_color"], str) or not HEX_COLOR_PATTERN.match(groups["default_color"]):
            raise ConfigValidationError("groups.default_color must be a hex color like #8b5cf6")

    items = config.get("items", {})
    if "demo_names" in items:
        demo_names = items["demo_names"]
        if not isinstance(demo_names, list) or not all(isinstance(n, str) and n.strip() for n in demo_names):
            raise ConfigValidationError("items.demo_names must be a list of non-empty strings")

    logs = config.get("logs", {})
    if "fanout_batch_limit" in logs:
        limit = logs["fanout_batch_limit"]
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0 or limit > FIRESTORE_BATCH_MAX:
            raise ConfigValidationError(f"logs.fanout_batch_limit must be an integer between 1 and {FIRESTORE_BATCH_MAX}")

    calendar = config.get("calendar", {})
    if "fallback_color" in calendar:
        if not isinstance(calendar["fallback_color"], str) or not HEX_COLOR_PATTERN.match(calendar["fallback_color"]):
            raise ConfigValidationError("calendar.fallback_color must be a hex color like #8b5cf6")
    if "max_color_dots" in calendar:
        max_dots = calendar["max_color_dots"]
        if not isinstance(max_dots, int) or isinstance(max_dots, bool) or max_dots <= 0:
            raise ConfigValidationError("calendar.max_color_dots must be a positive integer")

    friends = config.get("friends", {})
    if "hidden_item_label" in friends:
        label = friends["hidden_item_label"]
        if not isinstance(label, str) or not label.strip():
            raise ConfigValidationError("friends.hidden_item_label must be a non-empty string")
    if "default_permissions" in friends:
        permissions = friends["default_permissions"]
        if not isinstance(permissions, dict):
            raise ConfigValidationError("friends.default_permissions must be a dict")
        for key in ("viewCalendar", "viewDetails", "hideTimes"):
            if key not in permissions or not isinstance(permissions[key], bool):
                raise ConfigValidationError(f"friends.default_permissions.{key} must be a boolean")


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load and validate application configuration from settings.yaml.

    Args:
        config_path: Optional path to config file. If None, uses default location.

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """

    if config_path is None:
        config_path = Path(__file__).parent / "settings.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML configuration: {e}")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration must be a YAML dictionary")

    _validate_config(config)

    return config


def get_username_domain(config: AppConfig) -> str:
    return config.get("auth", {}).get("username_domain", "routinelog.app")


def get_default_group(config: AppConfig) -> tuple:
    """
    Get the (name, color) of the auto-provisioned group.

    Returns:
        Tuple of name and hex color (default: ("Genel", "#8b5cf6"))
    """
    groups = config.get("groups", {})
    return groups.get("default_name", "Genel"), groups.get("default_color", "#8b5cf6")


def get_demo_item_names(config: AppConfig) -> List[str]:
    return list(config.get("items", {}).get("demo_names", []))


def get_fanout_batch_limit(config: AppConfig) -> int:
    """
    Get the maximum number of writes per fan-out batch.

    Returns:
        Writes per batch (default: 490, below Firestore's 500 limit)
    """
    return config.get("logs", {}).get("fanout_batch_limit", 490)


def get_calendar_fallback_color(config: AppConfig) -> str:
    return config.get("calendar", {}).get("fallback_color", "#8b5cf6")


def get_calendar_max_color_dots(config: AppConfig) -> int:
    return config.get("calendar", {}).get("max_color_dots", 4)


def get_hidden_item_label(config: AppConfig) -> str:
    return config.get("friends", {}).get("hidden_item_label", "Completed activity")


def get_default_friend_permissions(config: AppConfig) -> Dict[str, bool]:
    """
    Get the permissions a new friendship starts with.

    Returns:
        Dict with viewCalendar, viewDetails and hideTimes flags
    """
    defaults = {"viewCalendar": True, "viewDetails": False, "hideTimes": False}
    return {**defaults, **config.get("friends", {}).get("default_permissions", {})}


def get_config_value(key_path: str, default=None):
    """
    Get a nested configuration value using dot notation.

    Args:
        key_path: Dot-separated path to the configuration value (e.g., "logs.fanout_batch_limit")
        default: Default value if key is not found

    Returns:
        Configuration value or default
    """
    config = load_app_config()
    value = config

    for key in key_path.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
