"""File-based local mirror adapter."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileMirror:
    """
    File-based document mirror.

    Implements Mirror protocol. Each document key gets a JSON file. This is a
    best-effort copy, not a write-ahead log: failures are logged, never raised.
    """

    def __init__(self, mirror_dir: Path | str):
        self.mirror_dir = Path(mirror_dir).expanduser()

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a document key."""
        return self.mirror_dir / f"{key}.json"

    def read_mirror(self, key: str) -> dict | None:
        """Read a mirrored document. Returns None if not found or unreadable."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable mirror {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring mirror {path}: not a JSON object")
            return None
        return data

    def write_mirror(self, key: str, document: dict) -> None:
        """Overwrite a mirrored document."""
        path = self._path_for_key(key)
        try:
            self.mirror_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write mirror {path}: {e}")
