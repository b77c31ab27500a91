"""
Question bank: pool management, session selection and scoring aggregation.

The bank owns the full question pool and its own id counter. Each call to
generate_session() reshuffles the pool, picks the first ``count`` questions
as the new active set, and returns a QuizSession that can score them.
The pool round-trips through JSON; sessions are never persisted.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from config import get_settings

from .errors import QuestionBankLoadError, QuestionConstructionError
from .form_reader import FormReader
from .question import Question, QuestionIdCounter, QuestionType
from .scoring import ScoringPolicy, resolve_scoring_function


# ========================================
# Persisted record
# ========================================


class QuestionRecord(BaseModel):
    """One persisted question. Every field must be present."""

    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    type: QuestionType
    prompt: str
    media: str | None
    correct_answers: list[str]
    decoy_answers: list[str]
    worth: int | float
    explanation: str | None


_POOL_ADAPTER = TypeAdapter(list[QuestionRecord])


# ========================================
# Session types
# ========================================


class SessionEntry(NamedTuple):
    """A selected question and its 1-based number label, if numbering is on."""
    question: Question
    number_label: str | None


class SessionScore(NamedTuple):
    """Aggregated result of checking a session."""
    score: float
    max_score: float
    not_fully_correct: list[str]


class QuizSession:
    """
    The questions selected for one sitting.

    A session owns its active set, so several sessions drawn from the same
    bank can be scored independently.
    """

    def __init__(
        self,
        entries: Sequence[SessionEntry],
        default_scoring: ScoringPolicy,
        form_reader: FormReader | None = None,
    ):
        self.entries: tuple[SessionEntry, ...] = tuple(entries)
        self.default_scoring = default_scoring
        self.form_reader = form_reader

    def __iter__(self) -> Iterator[SessionEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def questions(self) -> list[Question]:
        return [entry.question for entry in self.entries]

    @property
    def display_ids(self) -> list[str]:
        return [entry.question.display_id for entry in self.entries]

    def check_answers(
        self,
        scoring: ScoringPolicy | None = None,
        form_reader: FormReader | None = None,
    ) -> SessionScore:
        """
        Evaluate every question of the session in order.

        Questions whose selections cannot be read score (0, 0) and are
        skipped rather than counted as wrong.
        """
        scoring_function = resolve_scoring_function(scoring or self.default_scoring)
        reader = form_reader or self.form_reader

        total = 0
        total_max = 0
        not_fully_correct: list[str] = []

        for question in self.questions:
            result = question.evaluate_with(reader, scoring_function)
            if not result.fully_correct:
                not_fully_correct.append(question.display_id)
            total += result.score
            total_max += result.max_score

        return SessionScore(total, total_max, not_fully_correct)


# ========================================
# Question bank
# ========================================


class QuestionBank:
    """
    Manager for a pool of quiz questions.

    Handles:
    - Adding single-answer, multiple-answer and no-answer questions
    - Shuffled session selection with optional numbering
    - Scoring aggregation over the active session
    - JSON persistence of the pool
    """

    def __init__(
        self,
        questions: Iterable[Question] | None = None,
        *,
        id_counter: QuestionIdCounter | None = None,
        rng: random.Random | None = None,
        form_reader: FormReader | None = None,
        default_scoring: ScoringPolicy | None = None,
        shuffle_pool_in_place: bool | None = None,
        flag_multiple_answers_worth: bool | None = None,
    ):
        settings = get_settings()

        self.id_counter = id_counter or QuestionIdCounter()
        self.rng = rng or random.Random(settings.shuffle_seed)
        self.form_reader = form_reader
        self.default_scoring: ScoringPolicy = default_scoring or settings.default_scoring
        self.shuffle_pool_in_place = (
            settings.shuffle_pool_in_place if shuffle_pool_in_place is None else shuffle_pool_in_place
        )
        self.flag_multiple_answers_worth = (
            settings.flag_multiple_answers_worth
            if flag_multiple_answers_worth is None
            else flag_multiple_answers_worth
        )

        self._pool: list[Question] = list(questions or [])
        self._session: QuizSession | None = None

    def __len__(self) -> int:
        return len(self._pool)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._pool)

    @property
    def pool(self) -> list[Question]:
        """All questions, in current pool order."""
        return list(self._pool)

    @property
    def session(self) -> QuizSession | None:
        """The most recently generated session."""
        return self._session

    @property
    def active_set(self) -> list[Question]:
        """Questions of the current session; empty before the first one."""
        return self._session.questions if self._session else []

    # ========================================
    # Pool mutation
    # ========================================

    def add(self, question: Question) -> Question:
        """Append an already constructed question."""
        self._pool.append(question)
        logger.debug(f"Added {question.display_id} to pool ({len(self._pool)} questions)")
        return question

    def add_single_answer(
        self,
        prompt: str,
        media: str | None,
        correct_answer: str,
        decoys: Iterable[str],
        explanation: str | None = None,
        worth: float = 1,
    ) -> Question:
        """Add a question with exactly one correct option."""
        return self.add(
            Question(
                QuestionType.SINGLE_ANSWER,
                prompt,
                media,
                (correct_answer,),
                decoys,
                worth,
                explanation,
                id_counter=self.id_counter,
            )
        )

    def add_multiple_answers(
        self,
        prompt: str,
        media: str | None,
        correct_answers: Iterable[str],
        decoys: Iterable[str],
        explanation: str | None = None,
        worth: float = 1,
    ) -> Question:
        """
        Add a question where any number of options may be correct.

        A worth other than 1 is accepted as-is. It is flagged in the log
        because no per-option normalization is applied to it.
        """
        question = Question(
            QuestionType.MULTIPLE_ANSWERS,
            prompt,
            media,
            correct_answers,
            decoys,
            worth,
            explanation,
            id_counter=self.id_counter,
        )
        if worth != 1 and self.flag_multiple_answers_worth:
            logger.warning(
                f"{question.display_id}: multiple-answer question has worth {worth}; "
                "score is not normalized per option"
            )
        return self.add(question)

    def add_no_answer(
        self,
        prompt: str,
        media: str | None = None,
        explanation: str | None = None,
    ) -> Question:
        """Add an informational question with nothing to answer."""
        return self.add(
            Question(
                QuestionType.NO_ANSWER,
                prompt,
                media,
                (),
                (),
                0,
                explanation,
                id_counter=self.id_counter,
            )
        )

    # ========================================
    # Sessions
    # ========================================

    def shuffle(self) -> None:
        """Shuffle the pool in place."""
        self.rng.shuffle(self._pool)

    def generate_session(self, count: int, show_numbering: bool = False) -> QuizSession:
        """
        Select a new active set.

        Args:
            count: Number of questions wanted; clamped to [0, pool size]
            show_numbering: Attach "1".."N" labels in selection order

        Returns:
            The new QuizSession, which replaces the previous one
        """
        if self.shuffle_pool_in_place:
            self.shuffle()
            source = self._pool
        else:
            source = list(self._pool)
            self.rng.shuffle(source)

        count = max(0, min(count, len(source)))
        entries = [
            SessionEntry(question, str(index + 1) if show_numbering else None)
            for index, question in enumerate(source[:count])
        ]

        self._session = QuizSession(entries, self.default_scoring, self.form_reader)
        logger.debug(f"Generated session with {count} of {len(source)} questions")
        return self._session

    def check_answers(
        self,
        scoring: ScoringPolicy | None = None,
        form_reader: FormReader | None = None,
    ) -> SessionScore:
        """Score the current session; (0, 0, []) before any session exists."""
        if self._session is None:
            return SessionScore(0, 0, [])
        return self._session.check_answers(
            scoring or self.default_scoring,
            form_reader or self.form_reader,
        )

    # ========================================
    # Persistence
    # ========================================

    def serialize(self) -> str:
        """Pool as a JSON array of question records. Ids are not written."""
        return json.dumps([q.to_dict() for q in self._pool], ensure_ascii=False, indent=2)

    @classmethod
    def deserialize(cls, text: str | bytes, **kwargs) -> "QuestionBank":
        """
        Build a bank from serialized records.

        Ids are reassigned from the new bank's counter. Any malformed record
        fails the whole load.
        """
        try:
            records = _POOL_ADAPTER.validate_json(text)
        except ValidationError as exc:
            logger.error(f"Invalid question pool: {exc.error_count()} error(s)")
            raise QuestionBankLoadError(f"Invalid question pool: {exc}") from exc

        bank = cls(**kwargs)
        for index, record in enumerate(records):
            try:
                question = Question(
                    record.type,
                    record.prompt,
                    record.media,
                    tuple(record.correct_answers),
                    tuple(record.decoy_answers),
                    record.worth,
                    record.explanation,
                    id_counter=bank.id_counter,
                )
            except QuestionConstructionError as exc:
                logger.error(f"Invalid question record at index {index}: {exc}")
                raise QuestionBankLoadError(f"Record {index}: {exc}") from exc
            bank._pool.append(question)

        logger.debug(f"Loaded {len(bank._pool)} questions")
        return bank

    def save(self, path: Path | str) -> Path:
        """Write the serialized pool to a UTF-8 file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.serialize(), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path | str, **kwargs) -> "QuestionBank":
        """Read a pool written by save()."""
        return cls.deserialize(Path(path).read_text(encoding="utf-8"), **kwargs)
