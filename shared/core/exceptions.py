from fastapi import status

from shared.utils.app_status_code import AppStatusCode


class ConsoleError(Exception):
    """Base for every error the console API reports to its caller.

    Each subclass fixes the HTTP status and the application status code so a
    single exception handler can render any of them.
    """

    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.OPERATION_FAILED
    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ConsoleError):
    """Credential missing, expired or revoked. The caller must log in again."""

    http_status = status.HTTP_401_UNAUTHORIZED
    app_status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID
    default_message = "Not authenticated"

    def __init__(self, message: str | None = None, app_status_code: str | None = None):
        super().__init__(message)
        if app_status_code:
            self.app_status_code = app_status_code


class Forbidden(ConsoleError):
    http_status = status.HTTP_403_FORBIDDEN
    app_status_code = AppStatusCode.AUTHENTICATION_UNAUTHORIZED_ACCESS
    default_message = "Access forbidden"


class NotFound(ConsoleError):
    http_status = status.HTTP_404_NOT_FOUND
    app_status_code = AppStatusCode.PARTNER_NOT_FOUND
    default_message = "Partner not found"


class ValidationFailed(ConsoleError):
    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.REQUIRED_VALIDATION_ERROR
    default_message = "Validation failed"


class InvalidTransition(ConsoleError):
    """The partner is no longer eligible for the requested action."""

    http_status = status.HTTP_409_CONFLICT
    app_status_code = AppStatusCode.VERIFICATION_INVALID_TRANSITION
    default_message = "Action not allowed in the current verification status"


class ConcurrentModification(ConsoleError):
    """Another operator changed the partner first; refetch and decide again."""

    http_status = status.HTTP_409_CONFLICT
    app_status_code = AppStatusCode.VERIFICATION_CONCURRENT_MODIFICATION
    default_message = "Partner was modified by another operator, refresh and try again"
