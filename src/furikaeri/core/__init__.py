"""Functional core - pure document logic with no I/O."""

from .documents import (
    DiaryEntry,
    DiaryStore,
    ReflectionAnswer,
    ReflectionStore,
    month_day_key,
)
from .questions import QUESTIONS, Question, get_question, random_question
from .session import Session

__all__ = [
    # Documents
    "DiaryEntry",
    "DiaryStore",
    "ReflectionAnswer",
    "ReflectionStore",
    "month_day_key",
    # Questions
    "QUESTIONS",
    "Question",
    "get_question",
    "random_question",
    # Session
    "Session",
]
