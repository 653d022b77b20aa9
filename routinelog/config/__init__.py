"""
Configuration loading and environment variable management.

Key modules:
    - env_loader: Environment variable validation and access
    - loader: YAML configuration loading (settings.yaml)

Usage:
    from routinelog.config.env_loader import get_required_env_var, get_optional_env_var
    from routinelog.config.loader import load_app_config, get_config_value
"""
