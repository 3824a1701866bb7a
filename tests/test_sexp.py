"""Test suite for the s-expression reader."""

import pytest

from mailstream.search import sexp
from mailstream.search.errors import IncompleteRecord, MalformedRecord
from mailstream.search.sexp import Symbol


class TestRead:
    """Reading complete forms."""

    def test_reads_plist(self):
        """Keywords, strings and integers."""
        value, end = sexp.read('(:docid 7 :subject "Hello")')
        assert value == [":docid", 7, ":subject", "Hello"]
        assert isinstance(value[0], Symbol)
        assert value[0].is_keyword
        assert end == len('(:docid 7 :subject "Hello")')

    def test_reads_nested_lists(self):
        """Nested lists such as contacts and dates."""
        value, _ = sexp.read('(:from ((:name "A" :email "a@x")) :date (1 2 0))')
        assert value[1] == [[":name", "A", ":email", "a@x"]]
        assert value[3] == [1, 2, 0]

    def test_string_escapes(self):
        """Escaped quotes, backslashes and newlines."""
        value, _ = sexp.read(r'("say \"hi\" \\ now\nplease")')
        assert value == ['say "hi" \\ now\nplease']

    def test_nil_t_and_floats(self):
        """Special symbols and floats."""
        value, _ = sexp.read("(nil t 1.5 -3 foo)")
        assert value == [None, True, 1.5, -3, "foo"]

    def test_returns_end_position(self):
        """Reading stops right after the form."""
        text = '(:a 1)\n(:b 2)'
        value, end = sexp.read(text)
        assert value == [":a", 1]
        assert text[end:] == "\n(:b 2)"
        value, _ = sexp.read(text, end)
        assert value == [":b", 2]

    def test_skips_leading_whitespace(self):
        """Whitespace before a form is ignored."""
        value, _ = sexp.read("  \n (1)")
        assert value == [1]


class TestIncomplete:
    """Truncated input raises IncompleteRecord."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "(",
            "(:subject",
            '(:subject "unterminated',
            '(:subject "escape at end\\',
            "(:docid 12",
            "(:from ((:name \"A\")",
        ],
    )
    def test_truncated(self, text: str):
        """Every prefix of a record is incomplete, never malformed."""
        with pytest.raises(IncompleteRecord):
            sexp.read(text)


class TestMalformed:
    """Invalid syntax raises MalformedRecord."""

    def test_unexpected_close(self):
        """A closing paren with nothing open."""
        with pytest.raises(MalformedRecord):
            sexp.read(") (1)")
