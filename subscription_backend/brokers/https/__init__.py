"""HTTPS brokers package."""

from .revenuecat_webhook import revenuecat_webhook

__all__ = [
    "revenuecat_webhook",
]
