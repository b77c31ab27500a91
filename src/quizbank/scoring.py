"""
Scoring policies for evaluated questions.

A scoring function turns the outcome tallies of one question into the score
awarded for it. Built-in policies are registered under stable names; callers
can register their own with the same decorator.

Example:
    @register_scoring_function("half_credit")
    def half_credit(question_type, worth, n_correct, n_decoys, right, wrong):
        return worth if wrong == 0 else worth / 2

    scoring = get_scoring_function("half_credit")
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

from loguru import logger

from .errors import UnknownScoringFunctionError

if TYPE_CHECKING:
    from .question import QuestionType


# (question_type, worth, n_correct_options, n_decoy_options,
#  selected_correct, selected_wrong) -> awarded score
ScoringFunction = Callable[["QuestionType", float, int, int, int, int], float]


class InbuiltScoringFunction(str, Enum):
    """Names of the scoring policies shipped with the library."""
    ALL_OR_NOTHING = "all_or_nothing"
    PER_OPTION = "per_option"


# Registry - populated by @register_scoring_function
SCORING_FUNCTIONS: dict[str, ScoringFunction] = {}


def register_scoring_function(name: str | InbuiltScoringFunction):
    """Decorator to register a scoring function under a name."""
    key = name.value if isinstance(name, InbuiltScoringFunction) else name

    def decorator(func: ScoringFunction) -> ScoringFunction:
        if key in SCORING_FUNCTIONS and SCORING_FUNCTIONS[key] is not func:
            logger.warning(f"Replacing scoring function '{key}'")
        SCORING_FUNCTIONS[key] = func
        logger.debug(f"Registered scoring function: {key} -> {func.__name__}")
        return func

    return decorator


def get_scoring_function(name: str | InbuiltScoringFunction) -> ScoringFunction:
    """Get a registered scoring function by name."""
    key = name.value if isinstance(name, InbuiltScoringFunction) else name
    try:
        return SCORING_FUNCTIONS[key]
    except KeyError:
        raise UnknownScoringFunctionError(
            f"No scoring function registered for '{key}'. "
            f"Known: {', '.join(sorted(SCORING_FUNCTIONS))}"
        ) from None


def list_scoring_functions() -> list[str]:
    """Names of all registered scoring functions."""
    return sorted(SCORING_FUNCTIONS)


ScoringPolicy = Union[ScoringFunction, str, InbuiltScoringFunction]


def resolve_scoring_function(policy: ScoringPolicy) -> ScoringFunction:
    """Accept a callable, a registered name, or a built-in enum member."""
    if isinstance(policy, (str, InbuiltScoringFunction)):
        return get_scoring_function(policy)
    if not callable(policy):
        raise TypeError(f"Scoring policy must be callable or a name, got {type(policy).__name__}")
    return policy


# =============================================================================
# Built-in policies
# =============================================================================


@register_scoring_function(InbuiltScoringFunction.ALL_OR_NOTHING)
def all_or_nothing(
    question_type: "QuestionType",
    worth: float,
    n_correct: int,
    n_decoys: int,
    selected_correct: int,
    selected_wrong: int,
) -> float:
    """Full worth when no option was answered wrongly, otherwise nothing."""
    return worth if selected_wrong == 0 else 0


@register_scoring_function(InbuiltScoringFunction.PER_OPTION)
def per_option(
    question_type: "QuestionType",
    worth: float,
    n_correct: int,
    n_decoys: int,
    selected_correct: int,
    selected_wrong: int,
) -> float:
    """
    Partial credit proportional to the share of options answered correctly.

    Checking a correct option and leaving a decoy unchecked both count as a
    correct outcome. A question without options scores its full worth.
    """
    total = selected_correct + selected_wrong
    if total == 0:
        return worth
    if selected_wrong == 0:
        return worth
    return worth * selected_correct / total
