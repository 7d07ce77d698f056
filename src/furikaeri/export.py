"""Combined JSON export/import of both documents."""

import json
from datetime import date
from pathlib import Path

from .core.documents import DiaryStore, ReflectionStore
from .core.session import Session


def export_filename(day: date | None = None) -> str:
    day = day or date.today()
    return f"reflection-diary-{day.isoformat()}.json"


def export_documents(session: Session) -> dict:
    """Both documents in the shape they are stored remotely."""
    return {
        "reflections": session.reflections.to_dict(),
        "diary": session.diary.to_dict(),
    }


def write_export(session: Session, directory: Path | str, day: date | None = None) -> Path:
    """Write the export file into a directory. Returns its path."""
    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(day)
    path.write_text(
        json.dumps(export_documents(session), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


def import_documents(data: dict) -> tuple[ReflectionStore, DiaryStore]:
    """Rebuild both stores from an export. Raises ValueError on a bad export."""
    if not isinstance(data, dict):
        raise ValueError("Export must be a JSON object")
    try:
        reflections = ReflectionStore.from_dict(data.get("reflections"))
        diary = DiaryStore.from_dict(data.get("diary"))
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed export: {e}") from e
    return reflections, diary


def read_export(path: Path | str) -> tuple[ReflectionStore, DiaryStore]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Export is not valid JSON: {e}") from e
    return import_documents(data)
