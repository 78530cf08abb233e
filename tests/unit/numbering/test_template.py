"""Tests for number format template rendering."""

from datetime import UTC, datetime

from numbergen.core.modules.numbering.template import MAX_WIDTH, render

NOW = datetime(2025, 3, 7, 12, 0, tzinfo=UTC)


class TestCounterPlaceholder:
    """Tests for {COUNTER} and {COUNTER:N}."""

    def test_explicit_width_pads(self):
        """Test that {COUNTER:N} zero-pads to N digits."""
        assert render("{COUNTER:5}", 42, 0, NOW) == "00042"

    def test_explicit_width_never_truncates(self):
        """Test that a counter wider than N is rendered in full."""
        assert render("{COUNTER:5}", 123456, 0, NOW) == "123456"

    def test_default_padding_fallback(self):
        """Test that {COUNTER} uses the configured padding."""
        assert render("{COUNTER}", 7, 3, NOW) == "007"

    def test_zero_padding(self):
        """Test that padding 0 renders the bare number."""
        assert render("{COUNTER}", 7, 0, NOW) == "7"

    def test_explicit_width_overrides_padding(self):
        """Test that an explicit width wins over the configured padding."""
        assert render("{COUNTER:2}-{COUNTER}", 7, 4, NOW) == "07-0007"


class TestDatePlaceholders:
    """Tests for {YEAR}, {YY}, {MONTH} and {DAY}."""

    def test_year(self):
        assert render("{YEAR}", 1, 0, NOW) == "2025"

    def test_two_digit_year(self):
        assert render("{YY}", 1, 0, NOW) == "25"

    def test_two_digit_year_keeps_leading_zero(self):
        """Test that 2005 renders as '05', not '5'."""
        assert render("{YY}", 1, 0, datetime(2005, 1, 1, tzinfo=UTC)) == "05"

    def test_month_and_day_are_two_digits(self):
        assert render("{MONTH}/{DAY}", 1, 0, NOW) == "03/07"

    def test_default_invoice_format(self):
        """Test the default invoice template end to end."""
        assert render("INV-{YEAR}{MONTH}-{COUNTER:4}", 12, 4, NOW) == "INV-202503-0012"


class TestVestigialPlaceholders:
    """Tests for {PREFIX} and {SUFFIX}."""

    def test_prefix_and_suffix_render_empty(self):
        assert render("{PREFIX}WO-{COUNTER:3}{SUFFIX}", 5, 0, NOW) == "WO-005"


class TestLeniency:
    """Unknown or malformed placeholders are kept as literal text (current behavior)."""

    def test_unknown_placeholder_left_verbatim(self):
        assert render("ORDER-{UNKNOWN}-{COUNTER:3}", 5, 0, NOW) == "ORDER-{UNKNOWN}-005"

    def test_non_numeric_width_left_verbatim(self):
        assert render("{COUNTER:abc}", 5, 2, NOW) == "{COUNTER:abc}"

    def test_empty_width_left_verbatim(self):
        assert render("{COUNTER:}", 5, 2, NOW) == "{COUNTER:}"

    def test_width_on_other_placeholder_left_verbatim(self):
        """Test that only COUNTER accepts a width."""
        assert render("{YEAR:2}", 5, 0, NOW) == "{YEAR:2}"

    def test_lowercase_placeholder_left_verbatim(self):
        assert render("{year}-{counter}", 5, 0, NOW) == "{year}-{counter}"

    def test_unbalanced_braces_left_verbatim(self):
        assert render("{COUNTER-{YEAR", 5, 0, NOW) == "{COUNTER-{YEAR"

    def test_literal_only_template(self):
        assert render("STATIC", 5, 0, NOW) == "STATIC"

    def test_empty_template(self):
        assert render("", 5, 0, NOW) == ""

    def test_width_above_limit_left_verbatim(self):
        """Test that a counter width beyond MAX_WIDTH is kept as text instead of padded."""
        assert render(f"A-{{COUNTER:{MAX_WIDTH + 1}}}", 5, 0, NOW) == f"A-{{COUNTER:{MAX_WIDTH + 1}}}"

    def test_huge_width_left_verbatim(self):
        template = "X-{COUNTER:99999999999999999999}"
        assert render(template, 5, 0, NOW) == template

    def test_width_at_limit_pads(self):
        assert render(f"{{COUNTER:{MAX_WIDTH}}}", 5, 0, NOW) == "5".zfill(MAX_WIDTH)

    def test_padding_above_limit_left_verbatim(self):
        assert render("N-{COUNTER}", 5, 10**9, NOW) == "N-{COUNTER}"


class TestPurity:
    """Tests that rendering has no hidden state."""

    def test_repeated_calls_are_identical(self):
        results = {render("WO-{YEAR}-{COUNTER:5}", 9, 5, NOW) for _ in range(5)}
        assert results == {"WO-2025-00009"}

    def test_defaults_to_current_time(self):
        """Test that omitting `now` renders the current year."""
        assert render("{YEAR}", 1, 0) == str(datetime.now(UTC).year)
