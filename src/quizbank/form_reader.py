"""
Form readers: where submitted selections come from.

Evaluation only needs ``read_selections(question_id) -> set[str] | None``.
None means the question's form could not be found (never rendered, or
already removed) and makes the question score as not applicable.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence


class FormReader(Protocol):
    """Protocol for anything that can report a question's marked options."""

    def read_selections(self, question_id: str) -> set[str] | None:
        """Return the option texts marked for ``question_id``, or None if absent."""
        ...


class DictFormReader:
    """In-memory selections keyed by question display id."""

    def __init__(self, selections: Mapping[str, Iterable[str]] | None = None):
        self._selections: dict[str, set[str]] = {
            question_id: set(marked) for question_id, marked in (selections or {}).items()
        }

    def select(self, question_id: str, *options: str) -> None:
        """Mark options for a question (replaces earlier marks)."""
        self._selections[question_id] = set(options)

    def clear(self, question_id: str) -> None:
        self._selections.pop(question_id, None)

    def read_selections(self, question_id: str) -> set[str] | None:
        marked = self._selections.get(question_id)
        return set(marked) if marked is not None else None


class FormDataReader:
    """
    Selections from a submitted HTML form.

    HtmlRenderer.render_session() puts every question of a session in one
    page form. Its inputs are named after the question's display id and carry
    the option text as their value, so the parsed submission of that form,
    e.g. ``urllib.parse.parse_qs(body)``, maps display ids to marked texts.

    Browsers send nothing for a group with no checked input, so the set of
    rendered ids tells "nothing checked" (empty set) apart from "not on the
    page" (None).
    """

    def __init__(self, form: Mapping[str, Sequence[str] | str], rendered_ids: Iterable[str]):
        self._form = form
        self._rendered = set(rendered_ids)

    def read_selections(self, question_id: str) -> set[str] | None:
        if question_id not in self._rendered:
            return None
        values = self._form.get(question_id, ())
        if isinstance(values, str):
            values = (values,)
        return set(values)
