"""Exceptions for the shortlink service layer.

Every error carries the HTTP status it maps to and whether the client may
simply retry the same request. The API layer translates them into responses
in ``shortlink_app.api.errors``.
"""


class ShortlinkError(Exception):
    """Base exception for all service-level errors."""
    status_code = 500
    error = "internal_error"
    retryable = False

    def __init__(self, message: str = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class InputValidationError(ShortlinkError):
    """Client supplied malformed input."""
    status_code = 400
    error = "invalid_input"


class InvalidURLError(InputValidationError):
    """The URL is missing, malformed or uses a disallowed scheme."""
    error = "invalid_url"


class InvalidShortCodeError(InputValidationError):
    """The short code is missing or has the wrong format."""
    error = "invalid_short_code"


class URLNotFoundError(ShortlinkError):
    """No URL exists for the given short code."""
    status_code = 404
    error = "not_found"


class CodeGenerationError(ShortlinkError):
    """Failed to generate a unique short code."""
    status_code = 503
    error = "code_generation_failed"
    retryable = True


class CodeGenerationExhaustedError(CodeGenerationError):
    """Every generation attempt collided with an existing code."""
    error = "code_generation_exhausted"

    def __init__(self, attempts: int):
        super().__init__(
            f"Could not generate unique short code after {attempts} attempts"
        )
        self.attempts = attempts


class CodeGenerationInfrastructureError(CodeGenerationError):
    """The existence check failed while generating a short code."""
    error = "code_generation_unavailable"


class StoreError(ShortlinkError):
    """The URL store failed to complete an operation."""
    error = "store_error"


class StoreConflictError(StoreError):
    """The short code was taken between the existence check and the insert."""
    status_code = 503
    error = "short_code_conflict"
    retryable = True


class StoreUnavailableError(StoreError):
    """The URL store is unreachable or its connection pool is exhausted."""
    status_code = 503
    error = "store_unavailable"
    retryable = True


class RedirectFailedError(ShortlinkError):
    """The redirect transaction failed and was rolled back."""
    error = "redirect_failed"
