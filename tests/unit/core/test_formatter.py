"""Unit tests for the template formatter.

Tests cover:
- Token expansion and literal passthrough
- Brace escapes, including unmatched braces
- Empty and None templates
- Purity (no table mutation, repeatable output)
- Custom token behavior inside templates
"""

import pytest

from dateformat.core.formatter import format_date
from dateformat.core.tokens import TokenTable, build_default_tokens
from dateformat.types.aliases import TokenMapping
from dateformat.types.instant import Instant


@pytest.fixture
def tokens() -> TokenMapping:
    return build_default_tokens()


@pytest.mark.unit
class TestFormatDate:
    """Test suite for format_date."""

    def test_iso_date(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "Y-m-d", tokens) == "2024-01-15"

    def test_escaped_literal_text(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        """Test that brace contents pass through untouched."""
        result = format_date(reference_instant, "{literal text} Y-m-d", tokens)
        assert result == "literal text 2024-01-15"

    def test_mixed_template(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        result = format_date(reference_instant, "l, F jS Y {at} g:ia", tokens)
        assert result == "Monday, January 15th 2024 at 3:04am"

    def test_unknown_characters_pass_through(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "Y/m/d (Q)", tokens) == "2024/01/15 (Q)"

    def test_spaces_always_literal(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "  Y  ", tokens) == "  2024  "

    def test_spaces_inside_escape(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "{Day of year:} z", tokens) == "Day of year: 14"

    def test_unmatched_open_brace_makes_rest_literal(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        result = format_date(reference_instant, "Y-m-d {unclosed Y", tokens)
        assert result == "2024-01-15 unclosed Y"

    def test_stray_close_brace_is_dropped(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "}Y}", tokens) == "2024"

    def test_braces_never_in_output(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "{{Y}}", tokens) == "Y"

    def test_none_template(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, None, tokens) == ""

    def test_empty_template(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "", tokens) == ""

    def test_numbers_are_stringified(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        assert format_date(reference_instant, "U", tokens) == "1705287845000"

    def test_integral_float_from_custom_token(self, reference_instant: Instant) -> None:
        result = format_date(reference_instant, "Q", {"Q": lambda instant: 15.0})
        assert result == "15"

    def test_repeatable(self, reference_instant: Instant, tokens: TokenMapping) -> None:
        """Test that identical inputs produce identical output."""
        template = "c {and} r U"
        first = format_date(reference_instant, template, tokens)
        second = format_date(reference_instant, template, tokens)
        assert first == second

    def test_does_not_mutate_tokens(self, reference_instant: Instant) -> None:
        table = TokenTable()
        before = dict(table.snapshot())
        _ = format_date(reference_instant, "{x} Y-m-d H:i:s Q", table.snapshot())
        assert dict(table.snapshot()) == before

    def test_custom_token_error_propagates(self, reference_instant: Instant) -> None:
        def broken(instant: Instant) -> str:
            raise RuntimeError("token failed")

        with pytest.raises(RuntimeError, match="token failed"):
            _ = format_date(reference_instant, "Q", {"Q": broken})

    def test_escaped_token_is_not_called(self, reference_instant: Instant) -> None:
        def broken(instant: Instant) -> str:
            raise RuntimeError("should not be called")

        assert format_date(reference_instant, "{Q}", {"Q": broken}) == "Q"
