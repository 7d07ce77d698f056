"""Pure document domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date


def month_day_key(day: date) -> tuple[int, int]:
    """(month, day) used for on-this-day matching. Feb 29 folds into Feb 28."""
    if day.month == 2 and day.day == 29:
        return (2, 28)
    return (day.month, day.day)


def _require(data: dict, key: str, kind: type, default=None):
    """Field value checked against a type. Raises TypeError on a mismatch."""
    value = data.get(key, default) if default is not None else data[key]
    # bool is an int subclass but never a valid questionId
    if not isinstance(value, kind) or isinstance(value, bool):
        raise TypeError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ReflectionAnswer:
    """An answer to a reflection question. Never edited once recorded."""

    question_id: int
    date: str
    text: str

    def to_dict(self) -> dict:
        return {"questionId": self.question_id, "date": self.date, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> "ReflectionAnswer":
        return cls(
            question_id=_require(data, "questionId", int),
            date=_require(data, "date", str),
            text=_require(data, "text", str, default=""),
        )


@dataclass
class DiaryEntry:
    """A diary entry. At most one per calendar day."""

    date: str
    text: str

    def to_dict(self) -> dict:
        return {"date": self.date, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> "DiaryEntry":
        return cls(
            date=_require(data, "date", str),
            text=_require(data, "text", str, default=""),
        )


@dataclass
class ReflectionStore:
    """Append-only collection of reflection answers."""

    answers: list[ReflectionAnswer] = field(default_factory=list)

    def append(self, answer: ReflectionAnswer) -> None:
        self.answers.append(answer)

    def query_by_question(self, question_id: int) -> list[ReflectionAnswer]:
        """Answers to one question, newest date first.

        Answers sharing a date keep their insertion order.
        """
        matching = [a for a in self.answers if a.question_id == question_id]
        return sorted(matching, key=lambda a: a.date, reverse=True)

    def to_dict(self) -> dict:
        return {"answers": [a.to_dict() for a in self.answers]}

    @classmethod
    def from_dict(cls, data: dict | None) -> "ReflectionStore":
        if not data:
            return cls()
        return cls(answers=[ReflectionAnswer.from_dict(a) for a in data.get("answers", [])])


@dataclass
class DiaryStore:
    """Diary entries keyed by ISO date."""

    entries: list[DiaryEntry] = field(default_factory=list)

    def _index_of(self, day: str) -> int | None:
        for idx, entry in enumerate(self.entries):
            if entry.date == day:
                return idx
        return None

    def get(self, day: str) -> DiaryEntry | None:
        """Entry for a date, or None."""
        idx = self._index_of(day)
        return self.entries[idx] if idx is not None else None

    def upsert(self, day: str, text: str) -> None:
        """
        Save text for a date.

        Empty text removes the existing entry, non-empty text replaces it or
        appends a new one.
        """
        text = text.strip()
        idx = self._index_of(day)
        if idx is not None:
            if text:
                self.entries[idx].text = text
            else:
                del self.entries[idx]
        elif text:
            self.entries.append(DiaryEntry(date=day, text=text))

    def on_this_day(self, day: date) -> list[DiaryEntry]:
        """Entries from other years on the same month and day, newest first."""
        target = month_day_key(day)
        matches = []
        for entry in self.entries:
            try:
                entry_date = date.fromisoformat(entry.date)
            except ValueError:
                continue
            if month_day_key(entry_date) == target and entry_date.year != day.year:
                matches.append(entry)
        return sorted(matches, key=lambda e: e.date, reverse=True)

    def to_dict(self) -> dict:
        return {"entries": [e.to_dict() for e in self.entries]}

    @classmethod
    def from_dict(cls, data: dict | None) -> "DiaryStore":
        if not data:
            return cls()
        # Last entry wins when a hand-edited or merged file repeats a date
        by_date: dict[str, DiaryEntry] = {}
        for item in data.get("entries", []):
            entry = DiaryEntry.from_dict(item)
            by_date[entry.date] = entry
        return cls(entries=list(by_date.values()))
