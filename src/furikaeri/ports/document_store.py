"""Remote document store interface."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class RemoteDocument:
    """A JSON document plus the revision it was read at."""

    path: str
    content: dict
    revision: str


@dataclass
class WriteResult:
    """Outcome of a remote operation, with a message fit for display."""

    ok: bool
    message: str = ""


class DocumentStore(Protocol):
    """Interface for reading and writing whole JSON documents remotely."""

    def is_configured(self) -> bool:
        """True when credentials are present."""
        ...

    def fetch_document(self, path: str) -> RemoteDocument | None:
        """Read a document. Returns None when no remote data is available."""
        ...

    def write_document(
        self, path: str, content: dict, known_revision: str | None = None
    ) -> WriteResult:
        """Write a document against a freshly read revision."""
        ...
