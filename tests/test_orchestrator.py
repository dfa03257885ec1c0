"""Tests for the reconcile() entry point and settings resolution."""

import copy
from decimal import Decimal

import pytest

from recon_matcher import reconcile
from recon_matcher.config import ReconciliationSettings, resolve_settings
from recon_matcher.models import MatchMethod, ReconciliationData, ReconciliationStatus
from recon_matcher.utils.exceptions import ConfigurationError


@pytest.fixture
def build_data(account, june_period):
    def _build(bank, book, settings=None) -> ReconciliationData:
        return ReconciliationData(
            account=account,
            period=june_period,
            bank_transactions=bank,
            book_transactions=book,
            settings=settings,
        )

    return _build


class TestReconcile:
    def test_single_exact_match(self, make_txn, build_data):
        data = build_data(
            [make_txn("b1", "2023-06-15", "5000", ref="REF1")],
            [make_txn("k1", "2023-06-15", "5000", ref="REF1")],
        )

        results = reconcile(data)

        assert len(results.matched) == 1
        assert results.matched[0].confidence == 1.0
        assert results.matched[0].match_method == MatchMethod.EXACT
        assert results.unmatched_bank == []
        assert results.unmatched_book == []
        assert results.summary.match_percentage == 100.0
        assert results.summary.status == ReconciliationStatus.BALANCED
        assert results.summary.matched_amount == Decimal("5000")

    def test_empty_ledgers(self, build_data):
        results = reconcile(build_data([], []))

        assert results.matched == []
        assert results.unmatched_bank == []
        assert results.unmatched_book == []
        assert results.summary.status == ReconciliationStatus.BALANCED
        assert results.summary.match_percentage == 100

    def test_boundary_pair_is_unmatched_with_defaults(self, make_txn, build_data):
        data = build_data(
            [make_txn("b1", "2023-06-15", "-350", desc="Office Supplies")],
            [make_txn("k1", "2023-06-18", "-350", desc="Office Supplies Purchase")],
            settings={"dateTolerance": 3},
        )

        results = reconcile(data)

        assert results.matched == []
        assert [t.id for t in results.unmatched_bank] == ["b1"]
        assert [t.id for t in results.unmatched_book] == ["k1"]
        assert results.summary.discrepancy == Decimal("0")
        assert results.summary.match_percentage == 0.0

    def test_settings_override_is_shallow(self, make_txn, build_data):
        data = build_data(
            [make_txn("b1", "2023-06-15", "-350", desc="Office Supplies")],
            [make_txn("k1", "2023-06-18", "-350", desc="Office Supplies Purchase")],
            settings={"fuzzy_threshold": 0.6},
        )

        results = reconcile(data)

        assert len(results.fuzzy_matches) == 1
        assert results.exact_matches == []

    def test_does_not_mutate_input(self, make_txn, build_data):
        bank = [
            make_txn("b1", "2023-06-15", "5000", ref="REF1"),
            make_txn("b2", "2023-06-19", "-20", desc="Card fee"),
        ]
        book = [make_txn("k1", "2023-06-15", "5000", ref="REF1")]
        data = build_data(bank, book, settings={"fuzzyMatching": False})
        snapshot = copy.deepcopy(data)

        reconcile(data)

        assert data == snapshot
        assert data.bank_transactions is bank

    def test_mixed_run_partition(self, make_txn, build_data):
        bank = [
            make_txn("b1", "2023-06-01", "1500.00", desc="Invoice 2041 ACME", ref="INV-2041"),
            make_txn("b2", "2023-06-07", "-45.00", desc="Fuel station"),
            make_txn("b3", "2023-06-11", "-9.95", desc="Account fee"),
        ]
        book = [
            make_txn("k1", "2023-06-01", "1500.00", desc="ACME invoice", ref="INV-2041"),
            make_txn("k2", "2023-06-08", "-45.00", desc="Fuel"),
        ]

        results = reconcile(build_data(bank, book))

        ids = {m.bank_transaction.id: m.book_transaction.id for m in results.matched}
        assert ids == {"b1": "k1", "b2": "k2"}
        assert [t.id for t in results.unmatched_bank] == ["b3"]
        assert results.unmatched_book == []
        assert results.summary.unmatched_bank_amount == Decimal("-9.95")
        assert results.summary.discrepancy == Decimal("-9.95")
        assert results.summary.status == ReconciliationStatus.UNBALANCED
        assert results.summary.match_percentage == pytest.approx(2 / 3 * 100)


class TestResolveSettings:
    def test_defaults(self):
        settings = resolve_settings()
        assert settings.fuzzy_matching is True
        assert settings.fuzzy_threshold == 0.7
        assert settings.match_by_amount is True
        assert settings.match_by_description is True
        assert settings.match_by_reference is True
        assert settings.match_by_date is True
        assert settings.date_tolerance == 3
        assert settings.auto_match_exact is True

    def test_partial_mapping_keeps_other_defaults(self):
        settings = resolve_settings({"fuzzyThreshold": 0.9, "match_by_date": False})
        assert settings.fuzzy_threshold == 0.9
        assert settings.match_by_date is False
        assert settings.date_tolerance == 3
        assert settings.fuzzy_matching is True

    def test_none_values_fall_back_to_defaults(self):
        assert resolve_settings({"dateTolerance": None}).date_tolerance == 3

    def test_settings_instance_only_overrides_explicit_fields(self):
        settings = resolve_settings(ReconciliationSettings(date_tolerance=5))
        assert settings.date_tolerance == 5
        assert settings.fuzzy_threshold == 0.7

    def test_unknown_keys_are_ignored(self):
        assert resolve_settings({"colour": "blue"}) == resolve_settings()

    @pytest.mark.parametrize(
        "overrides",
        [{"fuzzy_threshold": 1.5}, {"fuzzyThreshold": -0.1}, {"date_tolerance": -1}],
    )
    def test_out_of_range_values_raise(self, overrides):
        with pytest.raises(ConfigurationError):
            resolve_settings(overrides)
