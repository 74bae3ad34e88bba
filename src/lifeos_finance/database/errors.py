"""Errors raised by document store implementations."""

from typing import Optional

from lifeos_finance.domain.errors import ConflictError, NotFoundError


class DocumentStoreError(Exception):
    """Base class for document store failures that are not driver errors."""

    def __init__(self, message: str, collection: str, key: str):
        self.collection = collection
        self.key = key
        super().__init__(message)


class DocumentConflictError(DocumentStoreError, ConflictError):
    """A document with the same key already exists."""

    def __init__(self, collection: str, key: str):
        super().__init__(f"Document {collection}/{key} already exists", collection, key)


class DocumentNotFoundError(DocumentStoreError, NotFoundError):
    """The addressed document does not exist."""

    def __init__(self, collection: str, key: str):
        super().__init__(f"Document {collection}/{key} not found", collection, key)


class RevisionConflictError(DocumentStoreError, ConflictError):
    """The document changed since the revision the caller read."""

    def __init__(self, collection: str, key: str, expected: Optional[int] = None):
        self.expected = expected
        message = f"Document {collection}/{key} was modified concurrently"
        if expected is not None:
            message += f" (expected revision {expected})"
        super().__init__(message, collection, key)
