"""
Quizbank: multiple-choice questions, sessions and scoring.

Components:
- question: Question model, type invariants, per-option evaluation
- scoring: Named, pluggable scoring policies
- question_bank: Pool, session selection, aggregation, JSON persistence
- render: HTML and terminal renderers
- form_reader: Where submitted selections are read from
"""

from .errors import (
    QuestionBankLoadError,
    QuestionConstructionError,
    QuizBankError,
    UnknownScoringFunctionError,
)
from .form_reader import DictFormReader, FormDataReader, FormReader
from .logging_setup import configure_logging
from .question import (
    DEFAULT_ID_COUNTER,
    OptionOutcome,
    Question,
    QuestionIdCounter,
    QuestionScore,
    QuestionType,
)
from .question_bank import QuestionBank, QuestionRecord, QuizSession, SessionEntry, SessionScore
from .render import HtmlRenderer, Renderer, RichRenderer
from .scoring import (
    InbuiltScoringFunction,
    ScoringFunction,
    all_or_nothing,
    get_scoring_function,
    list_scoring_functions,
    per_option,
    register_scoring_function,
    resolve_scoring_function,
)

__all__ = [
    # Errors
    "QuizBankError",
    "QuestionConstructionError",
    "QuestionBankLoadError",
    "UnknownScoringFunctionError",
    # Questions
    "Question",
    "QuestionType",
    "QuestionIdCounter",
    "QuestionScore",
    "OptionOutcome",
    "DEFAULT_ID_COUNTER",
    # Bank
    "QuestionBank",
    "QuestionRecord",
    "QuizSession",
    "SessionEntry",
    "SessionScore",
    # Scoring
    "ScoringFunction",
    "InbuiltScoringFunction",
    "all_or_nothing",
    "per_option",
    "get_scoring_function",
    "list_scoring_functions",
    "register_scoring_function",
    "resolve_scoring_function",
    # Collaborators
    "Renderer",
    "HtmlRenderer",
    "RichRenderer",
    "FormReader",
    "DictFormReader",
    "FormDataReader",
    # Logging
    "configure_logging",
]
