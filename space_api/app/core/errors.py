"""
Domain errors raised by the service layer.

Only two kinds exist.  ``BadRequestError`` covers malformed or
out-of-range input and ``ShipNotFoundError`` an identifier with no
backing record.  Endpoints translate them into HTTP 400 and 404
responses; anything else (for example ``sqlite3.Error``) propagates
to the server as an internal error.
"""


class BadRequestError(ValueError):
    """Input is missing, malformed or outside its valid range."""


class ShipNotFoundError(LookupError):
    """No ship exists with the requested identifier."""
