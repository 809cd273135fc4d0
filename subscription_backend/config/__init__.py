"""
Configuration loading and environment variable management.

Key modules:
    - env_loader: Environment variable access (webhook secret, emulator flags)
    - loader: YAML policy settings (settings.yaml)

Usage:
    from subscription_backend.config.env_loader import get_webhook_secret
    from subscription_backend.config.loader import get_referral_policy, get_code_policy
"""
