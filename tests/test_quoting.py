"""Tests for basis.quoting module."""

from __future__ import annotations

import pytest

from basis.quoting import quote, split_quoted, to_string


class TestToString:
    """Tests for to_string and quote."""

    def test_plain_arguments_joined_by_spaces(self) -> None:
        assert to_string(["tool", "-v", "input.txt"]) == "tool -v input.txt"

    def test_argument_with_space_is_quoted(self) -> None:
        assert to_string(["tool", "a b"]) == 'tool "a b"'

    def test_empty_argument_is_quoted(self) -> None:
        assert to_string(["tool", ""]) == 'tool ""'

    def test_double_quote_is_escaped(self) -> None:
        assert quote('c"d') == '"c\\"d"'

    def test_single_quote_triggers_quoting(self) -> None:
        assert quote("it's") == '"it\'s"'

    def test_backslash_without_whitespace_is_left_alone(self) -> None:
        assert quote("C:\\dir") == "C:\\dir"

    def test_empty_list(self) -> None:
        assert to_string([]) == ""


class TestSplitQuoted:
    """Tests for split_quoted."""

    def test_runs_of_whitespace_separate_arguments(self) -> None:
        assert split_quoted("  a \t b   c ") == ["a", "b", "c"]

    def test_double_quoted_run_is_one_argument(self) -> None:
        assert split_quoted('tool "a b" c') == ["tool", "a b", "c"]

    def test_single_quoted_run_is_one_argument(self) -> None:
        assert split_quoted("tool 'a \"b\"' c") == ["tool", 'a "b"', "c"]

    def test_escaped_quotes_inside_quotes(self) -> None:
        assert split_quoted('"say \\"hi\\""') == ['say "hi"']
        assert split_quoted("'it\\'s'") == ["it's"]

    def test_empty_quotes_give_empty_argument(self) -> None:
        assert split_quoted('a "" b') == ["a", "", "b"]

    def test_quotes_adjoining_text_are_concatenated(self) -> None:
        assert split_quoted('--name="a b"') == ["--name=a b"]

    def test_backslash_outside_quotes_is_literal(self) -> None:
        assert split_quoted("a\\b c") == ["a\\b", "c"]

    def test_empty_string(self) -> None:
        assert split_quoted("") == []
        assert split_quoted("   ") == []

    def test_unterminated_quote_raises(self) -> None:
        with pytest.raises(ValueError, match="Unterminated"):
            split_quoted('tool "a b')


class TestRoundTrip:
    """split_quoted(to_string(args)) gives back args."""

    @pytest.mark.parametrize(
        "args",
        [
            ["a b", 'c"d', "", "plain"],
            ["it's", "x'y z", "\\"],
            ["trailing\\", "back\\slash and space", 'quote at end"'],
            ["\ttab", "new\nline", "  "],
        ],
    )
    def test_round_trip(self, args: list[str]) -> None:
        assert split_quoted(to_string(args)) == args
