"""Failures raised by the query layer.

The API maps ``status_code`` straight onto the HTTP response, so only
``NotFoundError`` produces a 404; everything else is a 500.
"""


class EmissionsError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(EmissionsError):
    status_code = 404


class ValidationError(EmissionsError):
    """Malformed or missing request input (e.g. an unparsable year)."""


class InternalError(EmissionsError):
    """Store or query failure."""
