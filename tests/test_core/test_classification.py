"""Tests for per-product status rules."""

from datetime import date, datetime, timedelta, timezone

import pytest

from stock_manager.core.classification import (
    classify,
    is_expired,
    is_expiring_soon,
    is_low_stock,
    resolve_now,
    status_labels,
)
from stock_manager.schemas.inventory import DerivedStatus


class TestClassify:
    """Tests for the single-label classification."""

    def test_expired_takes_precedence_over_low_stock(self, make_product, now):
        product = make_product(quantity=8, expiry_date=now.date() - timedelta(days=730))
        assert classify(product, now, 30) is DerivedStatus.EXPIRED

    def test_expiring_soon_within_window(self, make_product, now):
        product = make_product(quantity=45, expiry_date=now.date() + timedelta(days=20))
        assert classify(product, now, 30) is DerivedStatus.EXPIRING_SOON

    def test_low_stock_when_expiry_is_far(self, make_product, now):
        product = make_product(quantity=5, expiry_date=now.date() + timedelta(days=200))
        assert classify(product, now, 30) is DerivedStatus.LOW_STOCK

    def test_good(self, make_product, now):
        product = make_product(quantity=50, expiry_date=now.date() + timedelta(days=200))
        assert classify(product, now, 30) is DerivedStatus.GOOD

    def test_expiring_soon_beats_low_stock(self, make_product, now):
        product = make_product(quantity=2, expiry_date=now.date() + timedelta(days=3))
        assert classify(product, now, 30) is DerivedStatus.EXPIRING_SOON

    def test_window_changes_outcome(self, make_product, now):
        product = make_product(quantity=50, expiry_date=now.date() + timedelta(days=20))
        assert classify(product, now, 10) is DerivedStatus.GOOD
        assert classify(product, now, 30) is DerivedStatus.EXPIRING_SOON

    def test_zero_window_never_expiring_soon(self, make_product, now):
        product = make_product(quantity=50, expiry_date=now.date() + timedelta(days=1))
        assert classify(product, now, 0) is DerivedStatus.GOOD

    def test_total_and_exclusive(self, make_product, now):
        for quantity in (0, 1, 9, 10, 11, 500):
            for offset in (-400, -1, 0, 1, 29, 30, 31, 365):
                product = make_product(quantity=quantity, expiry_date=now.date() + timedelta(days=offset))
                status = classify(product, now, 30)
                assert status in set(DerivedStatus)
                assert not (is_expired(product, now) and is_expiring_soon(product, now, 30))


class TestExpiryBoundaries:
    """An expiry date counts from the start of that day."""

    def test_expiring_today_is_expired_after_midnight(self, make_product, now):
        product = make_product(expiry_date=now.date())
        assert is_expired(product, now) is True
        assert is_expiring_soon(product, now, 30) is False

    def test_date_now_means_start_of_day(self, make_product, now):
        product = make_product(expiry_date=now.date())
        today = now.date()
        assert is_expired(product, today) is False
        assert is_expiring_soon(product, today, 30) is True

    def test_last_day_of_window(self, make_product, now):
        inside = make_product(expiry_date=now.date() + timedelta(days=30))
        outside = make_product(expiry_date=now.date() + timedelta(days=31))
        assert is_expiring_soon(inside, now, 30) is True
        assert is_expiring_soon(outside, now, 30) is False

    def test_timezone_aware_now(self, make_product):
        aware_now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
        product = make_product(expiry_date=date(2025, 5, 31))
        assert is_expired(product, aware_now) is True

    def test_resolve_now_defaults_to_current_time(self):
        before = datetime.now()
        resolved = resolve_now()
        assert before <= resolved <= datetime.now()


class TestLowStock:

    @pytest.mark.parametrize(
        "quantity,expected",
        [(0, True), (9, True), (10, False), (11, False)],
    )
    def test_threshold_is_strict(self, make_product, quantity, expected):
        assert is_low_stock(make_product(quantity=quantity)) is expected

    def test_custom_threshold(self, make_product):
        assert is_low_stock(make_product(quantity=15), threshold=20) is True


class TestStatusLabels:
    """Tests for the multi-label alert presentation."""

    def test_expired_and_low_stock(self, make_product, now):
        product = make_product(quantity=3, expiry_date=now.date() - timedelta(days=5))
        assert status_labels(product, now, 30) == [DerivedStatus.EXPIRED, DerivedStatus.LOW_STOCK]

    def test_expiring_soon_and_low_stock(self, make_product, now):
        product = make_product(quantity=3, expiry_date=now.date() + timedelta(days=10))
        assert status_labels(product, now, 30) == [
            DerivedStatus.EXPIRING_SOON,
            DerivedStatus.LOW_STOCK,
        ]

    def test_healthy_product_has_no_labels(self, make_product, now):
        product = make_product(quantity=50, expiry_date=now.date() + timedelta(days=100))
        assert status_labels(product, now, 30) == []
