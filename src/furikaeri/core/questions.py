"""Reflection question bank."""

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class Question:
    """A reflection prompt. The id is what answers are stored against."""

    id: int
    category: str
    text: str


QUESTIONS: tuple[Question, ...] = (
    Question(1, "Values", "What matters most to you right now?"),
    Question(2, "Values", "When did you last feel proud of a decision you made?"),
    Question(3, "Values", "What would you refuse to compromise on, and why?"),
    Question(4, "Growth", "What is something you understand now that you didn't a year ago?"),
    Question(5, "Growth", "Which mistake taught you the most recently?"),
    Question(6, "Growth", "What skill would you like to be practising more?"),
    Question(7, "Relationships", "Who has influenced you the most this year?"),
    Question(8, "Relationships", "Whom do you want to thank, and for what?"),
    Question(9, "Relationships", "Which conversation do you keep putting off?"),
    Question(10, "Work", "What work made you lose track of time lately?"),
    Question(11, "Work", "What are you doing out of habit rather than choice?"),
    Question(12, "Work", "What would you start if you knew it couldn't fail?"),
    Question(13, "Health", "How have you been sleeping, and what affects it?"),
    Question(14, "Health", "What does your body need more of?"),
    Question(15, "Joy", "What small thing made you happy this week?"),
    Question(16, "Joy", "Where do you feel most at ease?"),
    Question(17, "Future", "What do you hope to be saying about this year when it ends?"),
    Question(18, "Future", "What would your ideal ordinary day look like?"),
    Question(19, "Past", "What were you worried about a year ago, and how did it turn out?"),
    Question(20, "Past", "Which memory do you return to most often?"),
)

_BY_ID = {q.id: q for q in QUESTIONS}


def get_question(question_id: int) -> Question | None:
    return _BY_ID.get(question_id)


def random_question(rng: random.Random | None = None) -> Question:
    """Pick a question uniformly at random."""
    return (rng or random).choice(QUESTIONS)
