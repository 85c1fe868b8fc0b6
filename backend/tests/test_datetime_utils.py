"""
Tests for datetime formatting helpers and the credit eligibility rule
"""

from datetime import datetime

import pytest

from cpf_registry.core.constants import CreditEligibility
from cpf_registry.domain.eligibility import compute_credit_eligibility
from cpf_registry.utils.formatting import (
    format_datetime,
    parse_datetime,
    utc_now,
    whole_months_between,
)


class TestFormatAndParse:
    """Test suite for format_datetime / parse_datetime"""

    def test_format_datetime(self):
        assert format_datetime(datetime(2024, 1, 15, 10, 30, 0)) == "2024-01-15 10:30:00"

    def test_format_datetime_custom_format(self):
        assert format_datetime(datetime(2024, 1, 15), "%Y-%m-%d") == "2024-01-15"

    def test_format_none_is_empty(self):
        assert format_datetime(None) == ""

    def test_parse_datetime(self):
        assert parse_datetime("2024-01-15 10:30:00") == datetime(2024, 1, 15, 10, 30, 0)

    @pytest.mark.parametrize("value", [
        None,
        "",
        "2024-02-30 10:00:00",
        "2024-1-5 1:2:3",
        "2024-01-15 10:30",
    ])
    def test_parse_rejects_malformed(self, value):
        """Test: Invalid calendar dates and unpadded fields parse to None"""
        assert parse_datetime(value) is None

    def test_utc_now_is_naive(self):
        """Test: utc_now matches the naive timestamps stored by the backends"""
        assert utc_now().tzinfo is None


class TestWholeMonthsBetween:
    """Test suite for whole_months_between"""

    @pytest.mark.parametrize("start,end,expected", [
        (datetime(2024, 1, 1), datetime(2024, 7, 1), 6),
        (datetime(2024, 1, 1), datetime(2024, 6, 30, 23, 59, 59), 5),
        (datetime(2024, 1, 15, 10, 30), datetime(2024, 7, 15, 10, 29, 59), 5),
        (datetime(2024, 1, 15, 10, 30), datetime(2024, 7, 15, 10, 30), 6),
        (datetime(2023, 11, 20), datetime(2024, 2, 20), 3),
        (datetime(2022, 3, 1), datetime(2024, 3, 1), 24),
        (datetime(2024, 1, 31), datetime(2024, 2, 29), 0),
        (datetime(2024, 1, 31), datetime(2024, 3, 31), 2),
    ])
    def test_month_counts(self, start, end, expected):
        assert whole_months_between(start, end) == expected

    def test_end_before_start_is_zero(self):
        assert whole_months_between(datetime(2024, 7, 1), datetime(2024, 1, 1)) == 0


class TestCreditEligibility:
    """Test suite for compute_credit_eligibility"""

    def test_six_whole_months_is_eligible(self):
        """Test: Exactly 6 months and 0 days after enrollment is eligible"""
        result = compute_credit_eligibility("2024-01-01 00:00:00", datetime(2024, 7, 1, 0, 0, 0))
        assert result == CreditEligibility.ELIGIBLE

    def test_five_months_twenty_nine_days_is_not_eligible(self):
        """Test: 5 months and 29 days after enrollment is not eligible"""
        result = compute_credit_eligibility("2024-01-01 00:00:00", datetime(2024, 6, 30, 0, 0, 0))
        assert result == CreditEligibility.NOT_ELIGIBLE

    def test_years_count_towards_months(self):
        result = compute_credit_eligibility("2022-12-25 08:00:00", datetime(2024, 1, 1))
        assert result == CreditEligibility.ELIGIBLE

    def test_custom_threshold(self):
        result = compute_credit_eligibility(
            "2024-01-01 00:00:00",
            datetime(2024, 3, 1),
            minimum_months=2
        )
        assert result == CreditEligibility.ELIGIBLE

    def test_zero_threshold_is_honoured(self):
        """Test: An explicit threshold of 0 makes a same-day enrollment eligible"""
        result = compute_credit_eligibility(
            "2024-01-01 00:00:00",
            datetime(2024, 1, 1),
            minimum_months=0
        )
        assert result == CreditEligibility.ELIGIBLE

    def test_invalid_enrollment_date_raises(self):
        with pytest.raises(ValueError):
            compute_credit_eligibility("not-a-date", datetime(2024, 1, 1))
