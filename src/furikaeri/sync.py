"""Keeps the session's documents, the local mirror and GitHub in step.

Local writes always happen first and always happen. Remote writes are
attempted once and their outcome returned; nothing here raises on a remote or
storage failure.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from .core.documents import DiaryStore, ReflectionAnswer, ReflectionStore
from .core.session import Session
from .ports.document_store import DocumentStore, WriteResult
from .ports.mirror import Mirror

logger = logging.getLogger(__name__)

REFLECTIONS = "reflections"
DIARY = "diary"

REMOTE_PATHS = {
    REFLECTIONS: "data/reflections.json",
    DIARY: "data/diary.json",
}


@dataclass
class SyncReport:
    """What a hydrate/sync pulled from the remote store."""

    ok: bool
    message: str
    loaded: list[str] = field(default_factory=list)


class SyncOrchestrator:
    """Moves documents between a Session, a Mirror and a DocumentStore."""

    def __init__(self, session: Session, mirror: Mirror, remote: DocumentStore):
        self.session = session
        self.mirror = mirror
        self.remote = remote

    def _document(self, kind: str) -> dict:
        if kind == REFLECTIONS:
            return self.session.reflections.to_dict()
        if kind == DIARY:
            return self.session.diary.to_dict()
        raise ValueError(f"Unknown document kind: {kind}")

    def _replace(self, kind: str, data: dict) -> None:
        if kind == REFLECTIONS:
            self.session.reflections = ReflectionStore.from_dict(data)
        else:
            self.session.diary = DiaryStore.from_dict(data)

    def load_local(self) -> None:
        """Fill the session from the mirror, keeping current values where nothing is mirrored."""
        for kind in REMOTE_PATHS:
            data = self.mirror.read_mirror(kind)
            if data is None:
                continue
            try:
                self._replace(kind, data)
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Ignoring malformed mirrored {kind}: {e}")

    def pull(self) -> list[str]:
        """
        Fetch both documents. Each one found replaces its session copy
        wholesale and refreshes the mirror; the rest are left alone.
        """
        loaded = []
        for kind, path in REMOTE_PATHS.items():
            remote_doc = self.remote.fetch_document(path)
            if remote_doc is None:
                continue
            try:
                self._replace(kind, remote_doc.content)
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Ignoring malformed remote {path}: {e}")
                continue
            self.mirror.write_mirror(kind, self._document(kind))
            loaded.append(kind)
        return loaded

    def hydrate(self) -> SyncReport:
        """Startup load: mirror first, then GitHub when it is configured."""
        self.load_local()
        if not self.remote.is_configured():
            return SyncReport(True, "Loaded local data")
        loaded = self.pull()
        logger.debug(f"Hydrated from remote: {loaded or 'nothing'}")
        return SyncReport(True, "Loaded local and remote data", loaded)

    def sync(self) -> SyncReport:
        """User-requested refresh from GitHub."""
        if not self.remote.is_configured():
            return SyncReport(False, "GitHub settings are required")
        loaded = self.pull()
        if not loaded:
            return SyncReport(False, "No remote data available", loaded)
        return SyncReport(True, "Sync complete!", loaded)

    def persist(self, kind: str) -> WriteResult:
        """Mirror the document now, then push it to GitHub."""
        document = self._document(kind)
        self.mirror.write_mirror(kind, document)
        result = self.remote.write_document(REMOTE_PATHS[kind], document)
        if not result.ok:
            logger.warning(f"Remote save of {kind} failed, local copy kept: {result.message}")
        return result

    def record_answer(self, question_id: int, text: str, on: date | None = None) -> WriteResult:
        """Append an answer and persist the reflections document."""
        text = text.strip()
        if not text:
            return WriteResult(False, "Please enter an answer")
        day = on or date.today()
        self.session.reflections.append(
            ReflectionAnswer(question_id=question_id, date=day.isoformat(), text=text)
        )
        return self.persist(REFLECTIONS)

    def save_diary(self, text: str, on: date | None = None) -> WriteResult:
        """Upsert the entry for a day (the session's day by default) and persist."""
        day = on or self.session.current_date
        self.session.diary.upsert(day.isoformat(), text)
        return self.persist(DIARY)
