"""
Configuration loader for the subscription backend.
Loads and validates policy settings from settings.yaml.
"""

import yaml
from functools import lru_cache
from typing import TypedDict, Optional
from pathlib import Path

from subscription_backend.models.util_types import CodePolicy, ReferralPolicy


class ReferralConfig(TypedDict, total=False):
    reward_threshold: int
    reward_days: int
    max_rewards: int
    trial_days: int


class ReferralCodeConfig(TypedDict, total=False):
    length: int
    max_attempts: int
    alphabet: str


class ExpirySweepConfig(TypedDict, total=False):
    schedule: str
    timezone: str


class EntitlementsConfig(TypedDict, total=False):
    pro_key: str


class AppConfig(TypedDict, total=False):
    referral: ReferralConfig
    referral_code: ReferralCodeConfig
    expiry_sweep: ExpirySweepConfig
    entitlements: EntitlementsConfig


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


DEFAULT_CONFIG_PATH = Path(__file__).parent / "settings.yaml"


def _validate_config(config: dict) -> None:
    """
    Validate configuration values.

    Raises:
        ConfigValidationError: If validation fails
    """

    # Validate referral policy
    referral = config.get("referral", {})
    if not isinstance(referral, dict):
        raise ConfigValidationError("referral must be a mapping")

    for key in ["reward_threshold", "reward_days", "trial_days"]:
        if key in referral:
            value = referral[key]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigValidationError(f"referral.{key} must be a positive integer")

    if "max_rewards" in referral:
        max_rewards = referral["max_rewards"]
        if not isinstance(max_rewards, int) or isinstance(max_rewards, bool) or max_rewards < 0:
            raise ConfigValidationError("referral.max_rewards must be a non-negative integer")

    # Validate referral code generation
    referral_code = config.get("referral_code", {})
    if not isinstance(referral_code, dict):
        raise ConfigValidationError("referral_code must be a mapping")

    for key in ["length", "max_attempts"]:
        if key in referral_code:
            value = referral_code[key]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigValidationError(f"referral_code.{key} must be a positive integer")

    if "alphabet" in referral_code:
        alphabet = referral_code["alphabet"]
        if not isinstance(alphabet, str) or len(set(alphabet)) < 2:
            raise ConfigValidationError("referral_code.alphabet must be a string with at least 2 distinct characters")
        if alphabet != alphabet.upper():
            raise ConfigValidationError("referral_code.alphabet must be uppercase")

    # Validate sweep schedule
    sweep = config.get("expiry_sweep", {})
    if "schedule" in sweep:
        schedule = sweep["schedule"]
        if not isinstance(schedule, str) or len(schedule.split()) != 5:
            raise ConfigValidationError("expiry_sweep.schedule must be a 5-field cron expression")

    if "timezone" in sweep:
        if not isinstance(sweep["timezone"], str) or not sweep["timezone"].strip():
            raise ConfigValidationError("expiry_sweep.timezone must be a non-empty string")

    # Validate entitlements
    entitlements = config.get("entitlements", {})
    if "pro_key" in entitlements:
        if not isinstance(entitlements["pro_key"], str) or not entitlements["pro_key"].strip():
            raise ConfigValidationError("entitlements.pro_key must be a non-empty string")


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
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML configuration: {e}")

    # An empty file means "all defaults"
    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration must be a YAML dictionary")

    _validate_config(config)

    return config


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """Load the default settings.yaml once per process (function instance)."""
    return load_app_config()


def get_referral_policy(config: Optional[AppConfig] = None) -> ReferralPolicy:
    """
    Build the referral reward policy from config.

    Args:
        config: Application configuration (defaults to settings.yaml)

    Returns:
        ReferralPolicy (defaults: threshold 3, 7 reward days, cap 12, 3 trial days)
    """
    referral = (config if config is not None else get_app_config()).get("referral", {})
    return ReferralPolicy(
        reward_threshold=referral.get("reward_threshold", 3),
        reward_days=referral.get("reward_days", 7),
        max_rewards=referral.get("max_rewards", 12),
        trial_days=referral.get("trial_days", 3),
    )


def get_code_policy(config: Optional[AppConfig] = None) -> CodePolicy:
    """
    Build the referral code generation policy from config.

    Args:
        config: Application configuration (defaults to settings.yaml)

    Returns:
        CodePolicy (defaults: 8 characters, 10 attempts, A-Z0-9)
    """
    referral_code = (config if config is not None else get_app_config()).get("referral_code", {})
    return CodePolicy(
        length=referral_code.get("length", 8),
        max_attempts=referral_code.get("max_attempts", 10),
        alphabet=referral_code.get("alphabet", CodePolicy.model_fields["alphabet"].default),
    )


def get_sweep_schedule(config: Optional[AppConfig] = None) -> ExpirySweepConfig:
    """
    Get cron schedule and timezone for the expiry sweep.

    Returns:
        Dict with "schedule" (default "0 3 * * *") and "timezone" (default "UTC")
    """
    sweep = (config if config is not None else get_app_config()).get("expiry_sweep", {})
    return {
        "schedule": sweep.get("schedule", "0 3 * * *"),
        "timezone": sweep.get("timezone", "UTC"),
    }


def get_pro_entitlement_key(config: Optional[AppConfig] = None) -> str:
    """Get the entitlement identifier that grants Pro access (default "pro")."""
    return (config if config is not None else get_app_config()).get("entitlements", {}).get("pro_key", "pro")
