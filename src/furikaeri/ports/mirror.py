"""Local mirror interface."""

from typing import Protocol


class Mirror(Protocol):
    """Interface for the per-device copy of each document."""

    def read_mirror(self, key: str) -> dict | None:
        """Read a mirrored document. Returns None if not found."""
        ...

    def write_mirror(self, key: str, document: dict) -> None:
        """Overwrite a mirrored document. Never raises."""
        ...
