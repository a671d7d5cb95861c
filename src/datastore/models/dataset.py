"""Dataset model."""

from datastore.models.base import BaseDocument


class Dataset(BaseDocument):
    """Dataset entity. Attributes beyond the identifier and timestamps are free-form."""
