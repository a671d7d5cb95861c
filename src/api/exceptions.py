"""Exceptions raised by the API layer."""


class PatchApplicationError(Exception):
    """Raised when a JSON Patch document cannot be applied to an entity."""

    def __init__(self, message: str, cause: Exception) -> None:
        super().__init__(message)
        self.cause = cause


class ResponseAlreadySentError(RuntimeError):
    """Raised when a second response is written for the same request."""

    pass
