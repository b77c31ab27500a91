"""
Exceptions raised by the quiz bank.

Construction and load failures are fatal. Evaluating a question that was
never rendered is not an error and has no exception here.
"""


class QuizBankError(Exception):
    """Base class for all quiz bank errors."""
    pass


class QuestionConstructionError(QuizBankError, ValueError):
    """Raised when a question violates one of its construction invariants."""
    pass


class QuestionBankLoadError(QuizBankError):
    """Raised when a persisted question pool cannot be loaded."""
    pass


class UnknownScoringFunctionError(QuizBankError, KeyError):
    """Raised when a scoring policy name has no registered function."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message
        return str(self.args[0]) if self.args else ""
