"""Failure types raised by the store and the report exporter."""


class StoreError(Exception):
    """The link store could not complete an operation."""


class DuplicateKeyError(StoreError):
    """A link with the same short code already exists."""

    def __init__(self, code: str):
        super().__init__(f"Link with code '{code}' already exists")
        self.code = code


class ExportError(Exception):
    """The metrics report could not be delivered."""
