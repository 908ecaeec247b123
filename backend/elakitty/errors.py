# backend/elakitty/errors.py


class ElaKittyError(Exception):
    code = "INTERNAL_SERVER_ERROR"
    http_status_code = 500
    default_message = "Error"

    def __init__(self, message=None):
        if message is None:
            message = self.default_message
        self.message = message
        super().__init__(message)

    def to_dict(self):
        return dict(code=self.code, message=self.message)


class ValidationError(ElaKittyError):
    """Missing required field, degenerate geometry, non-positive radius..."""

    code = "INVALID_INPUTS"
    default_message = "Invalid inputs"
    http_status_code = 422


class AuthenticationError(ElaKittyError):
    code = "AUTHENTICATION_ERROR"
    default_message = "Authentication required"
    http_status_code = 401


class AuthorizationError(ElaKittyError):
    code = "AUTHORIZATION_ERROR"
    default_message = "Forbidden operation"
    http_status_code = 403


class NotFoundError(ElaKittyError):
    """Unknown record, or an address lookup that returned nothing.

    An empty lookup is a valid outcome rather than a fault, it is still
    reported to the caller.
    """

    code = "NOT_FOUND"
    default_message = "Not found"
    http_status_code = 404


class ExternalServiceError(ElaKittyError):
    """Storage, geocoding or upload failure. Never retried automatically."""

    code = "EXTERNAL_SERVICE_ERROR"
    default_message = "External service failure"
    http_status_code = 502
