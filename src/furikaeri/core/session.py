"""In-memory session state shared by the CLI and the sync orchestrator."""

import random
from dataclasses import dataclass, field
from datetime import date, timedelta

from .documents import DiaryStore, ReflectionStore
from .questions import Question, random_question


@dataclass
class Session:
    """
    Current documents plus what the user is looking at.

    Starts with empty documents and today's date; hydration replaces the
    documents in place.
    """

    reflections: ReflectionStore = field(default_factory=ReflectionStore)
    diary: DiaryStore = field(default_factory=DiaryStore)
    current_date: date = field(default_factory=date.today)
    current_question: Question | None = None

    @property
    def date_key(self) -> str:
        return self.current_date.isoformat()

    def change_date(self, days: int) -> date:
        self.current_date = self.current_date + timedelta(days=days)
        return self.current_date

    def go_to_today(self) -> date:
        self.current_date = date.today()
        return self.current_date

    def next_question(self, rng: random.Random | None = None) -> Question:
        self.current_question = random_question(rng)
        return self.current_question
