"""Custom exception classes for the subscription backend."""

from typing import Optional, Dict, Any


class ProjectError(Exception):
    """Base exception class for project-specific errors."""

    # Callable error code reported to clients, see util.https_errors
    functions_code = "internal"

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize ProjectError.

        Args:
            message: Error message
            code: Optional error code
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.code = code or "PROJECT_ERROR"
        self.details = details or {}


class ValidationError(ProjectError):
    """Raised when required input is missing or malformed."""

    functions_code = "invalid-argument"

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize ValidationError.

        Args:
            message: Error message
            field: Optional field that failed validation
            details: Optional additional error details
        """
        if field:
            details = details or {}
            details["field"] = field

        super().__init__(message, code="VALIDATION_ERROR", details=details)


class UnauthenticatedError(ProjectError):
    """Raised when an operation needs a caller identity and none was given."""

    functions_code = "unauthenticated"

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message, code="UNAUTHENTICATED")


class NotFoundError(ProjectError):
    """Raised when a resource is not found."""

    functions_code = "not-found"

    def __init__(self, resource_type: str, resource_id: str):
        """Initialize NotFoundError.

        Args:
            resource_type: Type of resource not found
            resource_id: ID of resource not found
        """
        message = f"{resource_type} with ID '{resource_id}' not found"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, code="NOT_FOUND", details=details)


class InternalError(ProjectError):
    """Raised when the identity provider or the document store fails."""

    functions_code = "internal"

    def __init__(self, message: str, cause: Optional[BaseException] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize InternalError.

        Args:
            message: Error message
            cause: Optional underlying exception
            details: Optional additional error details
        """
        details = details or {}
        if cause is not None:
            details["cause"] = type(cause).__name__
        super().__init__(message, code="INTERNAL", details=details)


class CodeGenerationExhausted(InternalError):
    """Raised when no unused referral code was found within the attempt bound."""

    def __init__(self, attempts: int):
        super().__init__(
            "Failed to generate unique code",
            details={"attempts": attempts}
        )
        self.code = "CODE_GENERATION_EXHAUSTED"
        self.attempts = attempts
