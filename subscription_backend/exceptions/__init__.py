"""Exceptions package initialization."""

from .CustomError import (
    ProjectError,
    ValidationError,
    UnauthenticatedError,
    NotFoundError,
    InternalError,
    CodeGenerationExhausted,
)

__all__ = [
    "ProjectError",
    "ValidationError",
    "UnauthenticatedError",
    "NotFoundError",
    "InternalError",
    "CodeGenerationExhausted",
]
