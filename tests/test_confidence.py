"""Tests for the weighted confidence model."""

import pytest

from recon_matcher.config import resolve_settings
from recon_matcher.matching.confidence import (
    AMOUNT_WEIGHT,
    DATE_WEIGHT,
    DESCRIPTION_WEIGHT,
    REFERENCE_WEIGHT,
    calculate_match_confidence,
    days_between,
    score_breakdown,
)


@pytest.fixture
def settings():
    return resolve_settings()


class TestFactors:
    def test_identical_transactions_score_one(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "250.00", desc="Client payment", ref="INV-1")
        book = make_txn("K1", "2023-06-15", "250.00", desc="Client payment", ref="INV-1")
        assert calculate_match_confidence(bank, book, settings) == pytest.approx(1.0)

    def test_amount_has_no_partial_credit(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "250.00")
        book = make_txn("K1", "2023-06-15", "250.01")
        breakdown = score_breakdown(bank, book, settings)
        assert breakdown.scores["amount"] == 0.0
        # amount and date only: (0 + 0.3) / 0.7
        assert breakdown.confidence == pytest.approx(DATE_WEIGHT / (AMOUNT_WEIGHT + DATE_WEIGHT))

    def test_date_decays_linearly(self, make_txn):
        settings = resolve_settings({"date_tolerance": 2})
        bank = make_txn("B1", "2023-06-15", "100.00")
        book = make_txn("K1", "2023-06-16", "100.00")
        breakdown = score_breakdown(bank, book, settings)
        assert breakdown.scores["date"] == pytest.approx(DATE_WEIGHT * 0.5)

    def test_date_outside_tolerance_scores_zero(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "100.00")
        book = make_txn("K1", "2023-06-20", "100.00")
        breakdown = score_breakdown(bank, book, settings)
        assert breakdown.scores["date"] == 0.0
        assert breakdown.weights["date"] == DATE_WEIGHT

    def test_time_of_day_counts_in_difference(self, make_txn):
        bank = make_txn("B1", "2023-06-15 00:00", "100.00")
        book = make_txn("K1", "2023-06-15 12:00", "100.00")
        assert days_between(bank, book) == pytest.approx(0.5)

    def test_zero_tolerance_rewards_identical_timestamp(self, make_txn):
        settings = resolve_settings({"date_tolerance": 0})
        bank = make_txn("B1", "2023-06-15", "100.00")
        same = make_txn("K1", "2023-06-15", "100.00")
        later = make_txn("K2", "2023-06-16", "100.00")
        assert score_breakdown(bank, same, settings).scores["date"] == pytest.approx(DATE_WEIGHT)
        assert score_breakdown(bank, later, settings).scores["date"] == 0.0

    def test_description_requires_both_sides(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "100.00", desc="Rent")
        book = make_txn("K1", "2023-06-15", "100.00", desc="")
        breakdown = score_breakdown(bank, book, settings)
        assert "description" not in breakdown.weights

    def test_description_is_case_insensitive(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "100.00", desc="ACME Corp")
        book = make_txn("K1", "2023-06-15", "100.00", desc="acme corp")
        breakdown = score_breakdown(bank, book, settings)
        assert breakdown.scores["description"] == pytest.approx(DESCRIPTION_WEIGHT)

    def test_reference_requires_both_sides(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "100.00", ref="REF1")
        book = make_txn("K1", "2023-06-15", "100.00")
        assert "reference" not in score_breakdown(bank, book, settings).weights

    def test_reference_similarity(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "100.00", ref="chk-1001")
        book = make_txn("K1", "2023-06-15", "100.00", ref="CHK-1001")
        breakdown = score_breakdown(bank, book, settings)
        assert breakdown.scores["reference"] == pytest.approx(REFERENCE_WEIGHT)


class TestNormalisation:
    def test_disabled_factors_leave_the_normaliser(self, make_txn):
        settings = resolve_settings({"match_by_date": False})
        bank = make_txn("B1", "2023-06-01", "100.00")
        book = make_txn("K1", "2023-06-28", "100.00")
        # Only the amount factor remains
        assert calculate_match_confidence(bank, book, settings) == pytest.approx(1.0)

    def test_no_enabled_factors_scores_zero(self, make_txn):
        settings = resolve_settings(
            {
                "match_by_amount": False,
                "match_by_date": False,
                "match_by_description": False,
                "match_by_reference": False,
            }
        )
        bank = make_txn("B1", "2023-06-15", "100.00", desc="x", ref="y")
        book = make_txn("K1", "2023-06-15", "100.00", desc="x", ref="y")
        assert calculate_match_confidence(bank, book, settings) == 0.0

    def test_office_supplies_boundary_score(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "-350", desc="Office Supplies")
        book = make_txn("K1", "2023-06-18", "-350", desc="Office Supplies Purchase")
        confidence = calculate_match_confidence(bank, book, settings)
        assert confidence == pytest.approx((0.4 + 0.0 + 0.16) / 0.9)
        assert confidence < settings.fuzzy_threshold

    def test_describe_lists_factors(self, make_txn, settings):
        bank = make_txn("B1", "2023-06-15", "100.00")
        book = make_txn("K1", "2023-06-15", "100.00")
        text = score_breakdown(bank, book, settings).describe()
        assert text.startswith("confidence=1.000")
        assert "amount=" in text
        assert "date=" in text
