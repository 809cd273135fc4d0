"""Translate project errors into callable function errors."""

from firebase_functions import https_fn
from subscription_backend.exceptions import ProjectError


def to_https_error(error: Exception, fallback_message: str = "An error occurred processing your request") -> https_fn.HttpsError:
    """Map an exception raised by a service to an HttpsError for the client.

    ProjectError subclasses keep their message and callable code; anything
    else becomes INTERNAL with ``fallback_message``.
    """
    if isinstance(error, https_fn.HttpsError):
        return error

    if isinstance(error, ProjectError):
        return https_fn.HttpsError(
            https_fn.FunctionsErrorCode(error.functions_code),
            error.message,
            error.details or None,
        )

    return https_fn.HttpsError(https_fn.FunctionsErrorCode.INTERNAL, fallback_message)
