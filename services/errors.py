# services/errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries a client-safe message; main.py maps each class to a
status code and renders it as {"error": message}.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Bad or missing caller input. The message names the field or rule."""
    status_code = 400


class MalformedRequestError(ServiceError):
    """Request body could not be parsed at all."""
    status_code = 400


class UpstreamError(ServiceError):
    """A third-party dependency failed or answered with an unexpected shape."""
    status_code = 500


class CatalogError(ServiceError):
    """The local catalog document is missing or unreadable."""
    status_code = 500
