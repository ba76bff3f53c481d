"""
Portal errors raised by the services layer.

main.py registers an exception handler that turns these into
JSON responses with the matching status code.
"""


class PortalError(Exception):
    """Base class for expected, client-caused failures."""
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(PortalError):
    status_code = 404


class ConflictError(PortalError):
    status_code = 400


class ValidationError(PortalError):
    status_code = 422
