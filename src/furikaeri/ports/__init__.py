"""Ports - interfaces/protocols for external dependencies."""

from .document_store import DocumentStore, RemoteDocument, WriteResult
from .mirror import Mirror

__all__ = [
    "DocumentStore",
    "RemoteDocument",
    "WriteResult",
    "Mirror",
]
