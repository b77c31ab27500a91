"""
Question model and evaluation.

A Question owns its type, prompt, correct and decoy answers and worth.
Construction validates the type/answer-shape invariants and only then draws
an id. Evaluation classifies every displayed option against the submitted
selections and hands the tallies to a scoring function.
"""

from __future__ import annotations

import math
import random
import threading
from dataclasses import InitVar, dataclass, field
from enum import Enum
from numbers import Real
from typing import TYPE_CHECKING, Iterable, NamedTuple

from loguru import logger

from .errors import QuestionConstructionError
from .scoring import ScoringPolicy, resolve_scoring_function

if TYPE_CHECKING:
    from .form_reader import FormReader


class QuestionType(str, Enum):
    """Supported question types."""
    SINGLE_ANSWER = "single_answer"        # one of N
    MULTIPLE_ANSWERS = "multiple_answers"  # M of N
    NO_ANSWER = "no_answer"                # informational, nothing to answer

    @property
    def tag(self) -> str:
        """Short tag used in display ids."""
        return _TYPE_TAGS[self]

    @property
    def answerable(self) -> bool:
        return self is not QuestionType.NO_ANSWER


_TYPE_TAGS = {
    QuestionType.SINGLE_ANSWER: "SA",
    QuestionType.MULTIPLE_ANSWERS: "MA",
    QuestionType.NO_ANSWER: "NA",
}


class QuestionIdCounter:
    """Monotonic id source shared by the questions it numbers."""

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
        return value

    def peek(self) -> int:
        """The id the next question will receive."""
        return self._next


# Process-wide counter for questions built outside a bank
DEFAULT_ID_COUNTER = QuestionIdCounter()


class QuestionScore(NamedTuple):
    """Score achieved on one question and the maximum obtainable."""
    score: float
    max_score: float

    @property
    def fully_correct(self) -> bool:
        return self.score == self.max_score

    @property
    def applicable(self) -> bool:
        """False for (0, 0): nothing was there to answer."""
        return self.max_score != 0


NOT_APPLICABLE = QuestionScore(0, 0)


@dataclass(frozen=True)
class OptionOutcome:
    """How one displayed option was answered."""
    text: str
    marked: bool
    is_correct_answer: bool

    @property
    def correct(self) -> bool:
        """Marked a correct answer, or left a decoy unmarked."""
        return self.marked == self.is_correct_answer


def _as_answer_tuple(answers: Iterable[str], what: str) -> tuple[str, ...]:
    if isinstance(answers, str):
        raise QuestionConstructionError(f"{what} must be a collection of strings, not a single string")
    if answers is None:
        return ()
    items = tuple(answers)
    for item in items:
        if not isinstance(item, str):
            raise QuestionConstructionError(f"{what} must contain strings, got {type(item).__name__}")
    # set semantics, first occurrence wins for display order
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class Question:
    """
    An immutable quiz question.

    Invariants:
    - worth is a finite number
    - correct and decoy answers are disjoint
    - NO_ANSWER: no answers at all and worth == 0
    - SINGLE_ANSWER: exactly one correct answer and worth > 0
    - MULTIPLE_ANSWERS: worth > 0

    The id is drawn from ``id_counter`` (or DEFAULT_ID_COUNTER) after all
    invariants pass, so a rejected question never consumes an id.
    """

    question_type: QuestionType
    prompt: str
    media: str | None = None
    correct_answers: tuple[str, ...] = ()
    decoy_answers: tuple[str, ...] = ()
    worth: float = 0
    explanation: str | None = None
    id_counter: InitVar[QuestionIdCounter | None] = None
    id: int = field(init=False)

    def __post_init__(self, id_counter: QuestionIdCounter | None) -> None:
        try:
            question_type = QuestionType(self.question_type)
        except ValueError:
            raise QuestionConstructionError(f"Unknown question type: {self.question_type!r}") from None

        correct = _as_answer_tuple(self.correct_answers, "Correct answers")
        decoys = _as_answer_tuple(self.decoy_answers, "Decoy answers")

        object.__setattr__(self, "question_type", question_type)
        object.__setattr__(self, "correct_answers", correct)
        object.__setattr__(self, "decoy_answers", decoys)

        self._validate()

        counter = id_counter if id_counter is not None else DEFAULT_ID_COUNTER
        object.__setattr__(self, "id", counter.next_id())

    def _validate(self) -> None:
        if not isinstance(self.prompt, str):
            raise QuestionConstructionError(f"Prompt must be a string, got {type(self.prompt).__name__}")
        if self.media is not None and not isinstance(self.media, str):
            raise QuestionConstructionError("Media must be a string or None")
        if self.explanation is not None and not isinstance(self.explanation, str):
            raise QuestionConstructionError("Explanation must be a string or None")
        if isinstance(self.worth, bool) or not isinstance(self.worth, Real):
            raise QuestionConstructionError(f"Worth must be a number, got {self.worth!r}")
        if not math.isfinite(self.worth):
            raise QuestionConstructionError(f"Worth must be finite, got {self.worth!r}")

        overlap = set(self.correct_answers) & set(self.decoy_answers)
        if overlap:
            raise QuestionConstructionError(
                f"The same answer cannot be correct and a decoy at the same time: {sorted(overlap)}"
            )

        if self.question_type is QuestionType.NO_ANSWER:
            if self.correct_answers or self.decoy_answers:
                raise QuestionConstructionError("No-answer questions cannot have any answers")
            if self.worth != 0:
                raise QuestionConstructionError(f"No-answer questions cannot have worth, got {self.worth}")

        elif self.question_type is QuestionType.SINGLE_ANSWER:
            if len(self.correct_answers) != 1:
                raise QuestionConstructionError(
                    f"Single-answer questions need exactly one correct answer, got {len(self.correct_answers)}"
                )
            if not self.worth > 0:
                raise QuestionConstructionError(
                    f"Questions with answers must be worth something, got {self.worth}"
                )

        elif self.question_type is QuestionType.MULTIPLE_ANSWERS:
            if not self.worth > 0:
                raise QuestionConstructionError(
                    f"Questions with answers must be worth something, got {self.worth}"
                )

    # ========================================
    # Display
    # ========================================

    @property
    def display_id(self) -> str:
        """Type tag followed by the numeric id, e.g. ``SA3``."""
        return f"{self.question_type.tag}{self.id}"

    @property
    def options(self) -> tuple[str, ...]:
        """Every displayed option, correct answers first."""
        return self.correct_answers + self.decoy_answers

    def shuffled_options(self, rng: random.Random | None = None) -> list[str]:
        """Options in a fresh random order, so position never hints at correctness."""
        options = list(self.options)
        (rng or random).shuffle(options)
        return options

    # ========================================
    # Evaluation
    # ========================================

    def grade_options(self, selections: Iterable[str]) -> list[OptionOutcome]:
        """Classify every displayed option against the submitted selections."""
        marked = set(selections)
        correct = set(self.correct_answers)
        return [
            OptionOutcome(text=option, marked=option in marked, is_correct_answer=option in correct)
            for option in self.options
        ]

    def evaluate(self, selections: Iterable[str] | None, scoring: ScoringPolicy) -> QuestionScore:
        """
        Score the submitted selections.

        Args:
            selections: Option texts the user marked, or None when no
                submission exists for this question
            scoring: Scoring function, or the name of a registered one

        Returns:
            QuestionScore (score, worth); (0, 0) for no-answer questions and
            missing submissions
        """
        if not self.question_type.answerable:
            return NOT_APPLICABLE
        if selections is None:
            logger.debug(f"No submission for {self.display_id}, skipping")
            return NOT_APPLICABLE

        scoring_function = resolve_scoring_function(scoring)
        outcomes = self.grade_options(selections)
        selected_correct = sum(1 for o in outcomes if o.correct)
        selected_wrong = len(outcomes) - selected_correct

        score = scoring_function(
            self.question_type,
            self.worth,
            len(self.correct_answers),
            len(self.decoy_answers),
            selected_correct,
            selected_wrong,
        )
        return QuestionScore(score, self.worth)

    def evaluate_with(self, form_reader: "FormReader | None", scoring: ScoringPolicy) -> QuestionScore:
        """Read this question's selections from a form reader and evaluate them."""
        if not self.question_type.answerable or form_reader is None:
            return NOT_APPLICABLE
        return self.evaluate(form_reader.read_selections(self.display_id), scoring)

    def to_dict(self) -> dict:
        """Serialize to the persisted record shape (ids are not persisted)."""
        return {
            "type": self.question_type.value,
            "prompt": self.prompt,
            "media": self.media,
            "correct_answers": list(self.correct_answers),
            "decoy_answers": list(self.decoy_answers),
            "worth": self.worth,
            "explanation": self.explanation,
        }
