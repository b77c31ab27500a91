"""
Unit tests for form readers.
"""

from urllib.parse import parse_qs

from src.quizbank import DictFormReader, FormDataReader


class TestDictFormReader:
    """In-memory selections."""

    def test_read(self):
        reader = DictFormReader({"SA0": ["Paris"]})

        assert reader.read_selections("SA0") == {"Paris"}

    def test_absent(self):
        assert DictFormReader().read_selections("SA0") is None

    def test_empty_selection_is_not_absent(self):
        reader = DictFormReader({"MA1": []})

        assert reader.read_selections("MA1") == set()

    def test_select_replaces(self):
        reader = DictFormReader({"MA1": ["A"]})
        reader.select("MA1", "B", "C")

        assert reader.read_selections("MA1") == {"B", "C"}

    def test_clear(self):
        reader = DictFormReader({"MA1": ["A"]})
        reader.clear("MA1")

        assert reader.read_selections("MA1") is None

    def test_returned_set_is_a_copy(self):
        reader = DictFormReader({"MA1": ["A"]})
        reader.read_selections("MA1").add("B")

        assert reader.read_selections("MA1") == {"A"}


class TestFormDataReader:
    """Submitted HTML form data."""

    def test_multiple_values(self):
        reader = FormDataReader(parse_qs("MA1=A&MA1=E"), ["MA1"])

        assert reader.read_selections("MA1") == {"A", "E"}

    def test_rendered_but_nothing_checked(self):
        reader = FormDataReader(parse_qs("MA1=A"), ["MA1", "SA2"])

        assert reader.read_selections("SA2") == set()

    def test_not_rendered(self):
        reader = FormDataReader(parse_qs("MA1=A"), ["MA1"])

        assert reader.read_selections("SA2") is None

    def test_single_string_value(self):
        reader = FormDataReader({"SA0": "Paris"}, ["SA0"])

        assert reader.read_selections("SA0") == {"Paris"}

    def test_encoded_text(self):
        reader = FormDataReader(parse_qs("SA0=New+York%20City"), ["SA0"])

        assert reader.read_selections("SA0") == {"New York City"}
