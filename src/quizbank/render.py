"""
Renderers: turn questions into displayable markup.

- HtmlRenderer: the quiz page markup (container, prompt, option form,
  feedback placeholder) and its post-evaluation feedback variant
- RichRenderer: the same question as a rich Panel for terminal use

Options are reshuffled on every render.
"""

from __future__ import annotations

import random
from html import escape
from typing import Iterable, Protocol

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .question import OptionOutcome, Question, QuestionType
from .scoring import ScoringPolicy


class Renderer(Protocol):
    """Protocol for question renderers."""

    def render(self, question: Question, number_label: str | None = None):
        """Render one question, optionally with its number label."""
        ...


# =============================================================================
# HTML
# =============================================================================


class HtmlRenderer:
    """
    HTML quiz markup.

    Each option is an ``<input>`` named after the question's display id whose
    value is the option text, so a submitted form can be read back with
    FormDataReader. render() wraps one question's options in their own
    ``<form>``; render_session() puts every question inside a single page
    form so one submission carries all of them. Prompt, media and
    explanation are inserted as markup.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def render(self, question: Question, number_label: str | None = None) -> str:
        return self._container(question, number_label, state="Unanswered", outcomes=None)

    def render_session(self, entries: Iterable, form_id: str = "quiz", method: str = "post") -> str:
        """All (question, number_label) entries inside one submittable form."""
        body = "".join(
            self._container(question, label, state="Unanswered", outcomes=None, own_form=False)
            for question, label in entries
        )
        return (
            f"<form id='{escape(form_id, quote=True)}' method='{escape(method, quote=True)}'>"
            f"{body}</form>"
        )

    def render_feedback(
        self,
        question: Question,
        selections: Iterable[str] | None,
        scoring: ScoringPolicy,
    ) -> str:
        """Markup after evaluation: Correct/Wrong classes and the explanation."""
        if selections is None or not question.question_type.answerable:
            return self._container(question, None, state="Unanswered", outcomes=None, reveal=True)

        result = question.evaluate(selections, scoring)
        outcomes = question.grade_options(selections)
        state = "Correct" if result.fully_correct else "Wrong"
        return self._container(question, None, state=state, outcomes=outcomes, reveal=True)

    # ------------------------------------------------------------------

    def _container(
        self,
        question: Question,
        number_label: str | None,
        state: str,
        outcomes: list[OptionOutcome] | None,
        reveal: bool = False,
        own_form: bool = True,
    ) -> str:
        tag = question.question_type.tag
        out = f"<div class='QuestionBox {state} Q{tag}' id='Q{question.display_id}'>"

        if number_label:
            out += f"<div class='QuestionNumber'>{escape(number_label)})</div>"

        out += "<div class='Question'>" + question.prompt
        if question.media:
            out += "<br>" + question.media
        out += "</div>"

        out += self._answers(question, outcomes, own_form)

        explanation = question.explanation if reveal and question.explanation else ""
        out += f"<div class='Explanation'>{explanation}</div>"
        return out + "</div>"

    def _answers(
        self,
        question: Question,
        outcomes: list[OptionOutcome] | None,
        own_form: bool = True,
    ) -> str:
        if not question.question_type.answerable:
            return ""

        input_type = "radio" if question.question_type is QuestionType.SINGLE_ANSWER else "checkbox"
        name = escape(question.display_id, quote=True)

        if outcomes is None:
            rows = [(text, "Unanswered", False) for text in question.shuffled_options(self.rng)]
        else:
            rows = [(o.text, _label_state(o), o.marked) for o in outcomes]

        out = f"<div class='Answers' id='A{question.display_id}'>"
        if own_form:
            out += "<form>"
        for text, label_state, checked in rows:
            checked_attr = " checked" if checked else ""
            out += (
                f"<label class='{label_state}'>"
                f"<input type='{input_type}' name='{name}' value='{escape(text, quote=True)}'{checked_attr}> "
                f"<span class='AnswerText'>{escape(text)}</span><br></label>"
            )
        if own_form:
            out += "</form>"
        return out + "</div>"


def _label_state(outcome: OptionOutcome) -> str:
    # an unmarked decoy stays neutral
    if outcome.marked:
        return "Correct" if outcome.correct else "Wrong"
    return "" if outcome.correct else "Wrong"


# =============================================================================
# Terminal
# =============================================================================


class RichRenderer:
    """Questions as rich panels with a numbered option table."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def render(self, question: Question, number_label: str | None = None) -> Panel:
        qtype = question.question_type
        title = f"[bold cyan]{question.display_id}[/bold cyan]"
        if number_label:
            title = f"[bold cyan]{number_label})[/bold cyan] {title}"

        body: list = [Text(question.prompt)]
        if question.media:
            body.append(Text(question.media, style="dim"))

        if qtype.answerable:
            table = Table(box=box.MINIMAL, show_header=False)
            table.add_column("Index", style="cyan", justify="right", width=4)
            table.add_column("Option", style="white")
            for i, option in enumerate(question.shuffled_options(self.rng)):
                table.add_row(f"[{i + 1}]", Text(option))
            body.append(table)

            if qtype is QuestionType.SINGLE_ANSWER:
                body.append(Text("Select one option.", style="dim"))
            else:
                body.append(Text("Select all options that apply.", style="dim"))

        return Panel(
            Group(*body),
            title=title,
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        )
