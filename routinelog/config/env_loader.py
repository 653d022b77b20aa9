"""
Environment variable loader for Routine Log.
Loads and validates the variables the store and identity adapters need.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from routinelog.util.logger import get_logger

logger = get_logger(__name__)


class MissingEnvironmentError(Exception):
    """Raised when required environment variables are missing or invalid."""
    pass


def load_environment(env_file: Optional[str] = None) -> None:
    """
    Load environment variables from a .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in the working directory.
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        load_dotenv(env_path)
    else:
        # In production, environment variables should be set by the system
        logger.warning(f".env file not found at {env_path}, assuming variables are set by the system")


def get_required_env_var(name: str, description: str = "") -> str:
    """
    Get a required environment variable.

    Args:
        name: Environment variable name
        description: Optional description for error messages

    Returns:
        Environment variable value

    Raises:
        MissingEnvironmentError: If the environment variable is not set or empty
    """
    value = os.getenv(name)
    if not value:
        desc_part = f" ({description})" if description else ""

        guidance = ""
        if "API_KEY" in name:
            guidance = "\n  Hint: Use the Web API key from the Firebase console project settings"
        elif "PROJECT" in name:
            guidance = "\n  Hint: Set this to your Firebase project ID (e.g., routinelog-123)"
        elif "CREDENTIALS" in name:
            guidance = "\n  Hint: Set this to the path of your Google service account JSON file"

        raise MissingEnvironmentError(f"Required environment variable {name}{desc_part} is not set{guidance}")
    return value


def get_optional_env_var(name: str, default: str = "", description: str = "") -> str:
    """
    Get an optional environment variable with a default value.

    Args:
        name: Environment variable name
        default: Default value if not set
        description: Optional description for logging

    Returns:
        Environment variable value or default
    """
    return os.getenv(name, default)


def get_firebase_settings() -> Dict[str, str]:
    """
    Collect the Firebase connection settings from the environment.

    Returns:
        Dictionary with project_id, credentials_path and emulator hosts
        (empty strings when unset)

    Raises:
        MissingEnvironmentError: If GOOGLE_APPLICATION_CREDENTIALS points to a missing file
    """
    credentials_path = get_optional_env_var(
        "GOOGLE_APPLICATION_CREDENTIALS", "", "Path to Google service account JSON file"
    )
    if credentials_path and not os.path.exists(credentials_path):
        raise MissingEnvironmentError(
            f"GOOGLE_APPLICATION_CREDENTIALS path does not exist: {credentials_path}\n"
            f"Please ensure the service account JSON file is present at this location."
        )

    return {
        "project_id": get_optional_env_var("GCLOUD_PROJECT", "", "Firebase project ID"),
        "credentials_path": credentials_path,
        "firestore_emulator_host": get_optional_env_var("FIRESTORE_EMULATOR_HOST"),
        "auth_emulator_host": get_optional_env_var("FIREBASE_AUTH_EMULATOR_HOST"),
    }
