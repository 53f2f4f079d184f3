"""Tests for period keys."""

import pytest
from datetime import date

from finledger.periods import ALL, Period, matches_period, period_key, period_of


class TestPeriodKey:
    """Tests for period_key and period_of."""

    def test_period_key_label(self):
        """Test the month/year label format."""
        assert period_key(date(2025, 10, 1)) == "Oct 2025"
        assert period_key(date(2024, 1, 31)) == "Jan 2024"
        assert period_key(date(2024, 9, 15)) == "Sep 2024"

    def test_same_month_same_key(self):
        """Test that days of one month share a key."""
        assert period_key(date(2025, 10, 1)) == period_key(date(2025, 10, 31))

    def test_different_year_different_key(self):
        """Test that the same month in another year is a different key."""
        assert period_key(date(2025, 10, 1)) != period_key(date(2024, 10, 1))

    def test_period_of(self):
        """Test the underlying (year, month) pair."""
        assert period_of(date(2025, 11, 3)) == Period(2025, 11)


class TestPeriod:
    """Tests for the Period value type."""

    def test_orders_chronologically(self):
        """Test sorting by (year, month), not by label."""
        periods = [Period(2025, 10), Period(2024, 11), Period(2025, 2)]
        assert sorted(periods) == [Period(2024, 11), Period(2025, 2), Period(2025, 10)]
        # Label order would get this wrong
        assert sorted(p.label for p in periods) == ["Feb 2025", "Nov 2024", "Oct 2025"]

    def test_parse_round_trips_label(self):
        """Test parsing a label back into a period."""
        for month in range(1, 13):
            period = Period(2025, month)
            assert Period.parse(period.label) == period

    def test_parse_is_case_insensitive(self):
        """Test month names are matched case-insensitively."""
        assert Period.parse("oct 2025") == Period(2025, 10)

    @pytest.mark.parametrize("label", ["", "Oct", "October 2025", "Oct 25", "2025 Oct", "Foo 2025"])
    def test_parse_rejects_bad_labels(self, label):
        """Test that unrecognised labels raise ValueError."""
        with pytest.raises(ValueError):
            Period.parse(label)

    def test_month_out_of_range(self):
        """Test that month must be 1-12."""
        with pytest.raises(ValueError):
            Period(2025, 13)

    def test_str_is_label(self):
        """Test str() gives the label."""
        assert str(Period(2025, 10)) == "Oct 2025"


class TestMatchesPeriod:
    """Tests for the period filter predicate."""

    def test_all_matches_everything(self):
        """Test the ALL sentinel."""
        assert matches_period(date(1999, 1, 1), ALL)

    def test_exact_match(self):
        """Test matching by period key."""
        assert matches_period(date(2025, 10, 5), "Oct 2025")
        assert not matches_period(date(2025, 11, 5), "Oct 2025")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
