"""Documents package initialization."""

from .users import UserDocument

__all__ = ["UserDocument"]
