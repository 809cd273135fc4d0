"""User documents package."""

from .User import UserDocument

__all__ = ["UserDocument"]
