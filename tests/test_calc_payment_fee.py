"""Tests for payment fee calculation."""

import pytest

from phoneorder.calc.payment_fee import (
    BANK_TRANSFER,
    CASH_ON_DELIVERY,
    COD_MAX_AMOUNT,
    CREDIT_CARD,
    DEFERRED,
    PAYMENT_METHODS,
    calculate_payment_fee,
)


class TestCashOnDelivery:
    @pytest.mark.parametrize(
        "total,expected",
        [
            (0, 330),
            (9999, 330),
            (10000, 440),
            (29999, 440),
            (30000, 660),
            (99999, 660),
            (100000, 1100),
            (299999, 1100),
        ],
    )
    def test_tier_boundaries(self, total, expected):
        result = calculate_payment_fee(CASH_ON_DELIVERY, total)
        assert result.fee == expected
        assert result.error is None

    def test_rejected_at_ceiling(self):
        result = calculate_payment_fee(CASH_ON_DELIVERY, 300000)
        assert result.fee == 0
        assert result.error

    def test_rejected_above_ceiling(self):
        result = calculate_payment_fee(CASH_ON_DELIVERY, 1_000_000)
        assert result.fee == 0
        assert result.error

    def test_fee_is_non_decreasing_below_ceiling(self):
        totals = [0, 5000, 9999, 10000, 29999, 30000, 99999, 100000, 299999]
        fees = [calculate_payment_fee(CASH_ON_DELIVERY, t).fee for t in totals]
        assert fees == sorted(fees)

    def test_negative_total_uses_first_tier(self):
        assert calculate_payment_fee(CASH_ON_DELIVERY, -500).fee == 330

    def test_ceiling_constant(self):
        assert COD_MAX_AMOUNT == 300000


class TestOtherMethods:
    @pytest.mark.parametrize("total", [0, 10000, 300000, 5_000_000])
    def test_deferred_is_flat(self, total):
        result = calculate_payment_fee(DEFERRED, total)
        assert result.fee == 250
        assert result.error is None

    @pytest.mark.parametrize("method", [CREDIT_CARD, BANK_TRANSFER])
    @pytest.mark.parametrize("total", [0, 9999, 300000])
    def test_free_methods(self, method, total):
        result = calculate_payment_fee(method, total)
        assert result.fee == 0
        assert result.error is None

    def test_unknown_method_falls_back_to_zero(self):
        result = calculate_payment_fee("barter", 500000)
        assert result.fee == 0
        assert result.error is None

    def test_exactly_four_methods(self):
        assert set(PAYMENT_METHODS) == {CASH_ON_DELIVERY, CREDIT_CARD, BANK_TRANSFER, DEFERRED}
