"""Exceptions for the datastore module."""


class DocumentStoreError(Exception):
    """Base exception for datastore errors."""

    pass


class DatabaseError(DocumentStoreError):
    """Raised when the underlying MongoDB operation fails."""

    pass


class InvalidDocumentError(DocumentStoreError):
    """Raised when a document body is rejected by its model."""

    pass
