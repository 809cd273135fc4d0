"""External collaborators: document store and identity provider."""

from .Db import Db
from .Identity import Identity

__all__ = ["Db", "Identity"]
