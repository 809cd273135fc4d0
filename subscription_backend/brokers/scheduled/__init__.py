"""Scheduled brokers package."""

from .scheduled_expiry_check import scheduled_expiry_check

__all__ = [
    "scheduled_expiry_check",
]
