"""
Environment variable loader for the subscription backend.
Loads and validates environment variables used by the deployed functions.
"""

import os
from pathlib import Path
from typing import Dict, Optional
from dotenv import load_dotenv

from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


def load_environment(env_file: Optional[str] = None) -> None:
    """
    Load environment variables from .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in the project root.
    """
    if env_file is None:
        env_path = Path(__file__).parent.parent.parent / ".env"
    else:
        env_path = Path(env_file)

    # Load .env file if it exists
    if env_path.exists():
        load_dotenv(env_path)
    else:
        # In production, environment variables are set by the Functions runtime
        logger.debug(f".env file not found at {env_path}, using process environment")


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


def get_webhook_secret() -> str:
    """
    Get the shared secret expected in the billing webhook authorization header.

    Returns:
        The configured secret, or an empty string when the webhook runs unsecured
    """
    return get_optional_env_var(
        "REVENUECAT_WEBHOOK_SECRET",
        "",
        "Bearer token RevenueCat sends in the Authorization header"
    ).strip()


def get_environment_name() -> str:
    """Return the deployment environment name (production / development)."""
    return get_optional_env_var("ENV", "production").strip().lower()


def is_emulator() -> bool:
    """Check whether the functions run inside the Firebase emulator suite."""
    return get_optional_env_var("FUNCTIONS_EMULATOR", "").lower() == "true"


def validate_environment() -> Dict[str, str]:
    """
    Collect the environment the functions depend on.

    Nothing is strictly required at import time: the Firebase runtime supplies
    project credentials and the webhook secret is optional.

    Returns:
        Dictionary of environment variable names and values
    """
    load_environment()

    optional_vars = {
        "ENV": "production",
        "REVENUECAT_WEBHOOK_SECRET": "",
        "FIRESTORE_EMULATOR_HOST": "",
        "FIREBASE_AUTH_EMULATOR_HOST": "",
        "LOG_LEVEL": "INFO",
    }

    env_values = {}
    for var_name, default_value in optional_vars.items():
        env_values[var_name] = get_optional_env_var(var_name, default_value)

    if not env_values["REVENUECAT_WEBHOOK_SECRET"]:
        logger.warning("REVENUECAT_WEBHOOK_SECRET not configured. Webhook is not secured!")

    return env_values
