"""
Tests for stake_advisor.py

Run with: pytest tests/test_stake_advisor.py -v
"""

import math

import pytest

from bankroll.core.stake_advisor import (
    NO_EDGE,
    expected_value,
    kelly_fraction,
    percentage_of_bankroll,
    potential_return,
    settlement_profit,
    suggested_stake,
)
from bankroll.core.types import BankrollPolicy


class TestExpectedValue:
    """EV = p * odds * stake - stake."""

    @pytest.mark.parametrize("odds, prob, stake", [
        (2.0, 60, 100),
        (1.5, 70, 25),
        (3.4, 31, 12.5),
        (1.01, 99, 1000),
    ])
    def test_matches_closed_form(self, odds, prob, stake):
        assert expected_value(odds, prob, stake) == pytest.approx(
            stake * ((prob / 100) * odds - 1)
        )

    def test_positive_edge(self):
        assert expected_value(2.0, 60, 100) == pytest.approx(20.0)

    def test_negative_edge(self):
        assert expected_value(2.0, 40, 100) == pytest.approx(-20.0)

    def test_linear_in_stake(self):
        assert expected_value(2.2, 55, 200) == pytest.approx(2 * expected_value(2.2, 55, 100))

    def test_non_finite_input_is_zero(self):
        assert expected_value(float("nan"), 50, 100) == 0.0
        assert expected_value(2.0, float("inf"), 100) == 0.0

    def test_overflowing_result_is_zero(self):
        assert expected_value(1e200, 50, 1e200) == 0.0


class TestKellyFraction:
    """Full Kelly f* = (b*p - q) / b."""

    def test_value_bet(self):
        result = kelly_fraction(2.0, 60, 1000)
        assert result.fraction == pytest.approx(0.2)
        assert result.percentage == pytest.approx(20.0)
        assert result.is_value_bet is True
        assert result.recommended_stake == pytest.approx(200.0)

    def test_no_edge_clamps_to_zero(self):
        result = kelly_fraction(2.0, 40, 1000)
        assert result.fraction == pytest.approx(-0.2)
        assert result.is_value_bet is False
        assert result.percentage == 0.0
        assert result.recommended_stake == 0.0

    def test_break_even_is_not_value(self):
        result = kelly_fraction(2.0, 50, 1000)
        assert result.fraction == pytest.approx(0.0)
        assert result.is_value_bet is False
        assert result.recommended_stake == 0.0

    def test_longshot(self):
        # b = 4, p = 0.25, q = 0.75 -> (1 - 0.75) / 4 = 0.0625
        result = kelly_fraction(5.0, 25, 800)
        assert result.fraction == pytest.approx(0.0625)
        assert result.recommended_stake == pytest.approx(50.0)

    @pytest.mark.parametrize("odds", [1.0, 0.5, 0.0, -2.0])
    def test_invalid_odds_return_zero_result(self, odds):
        assert kelly_fraction(odds, 60, 1000) == NO_EDGE

    @pytest.mark.parametrize("prob", [0, 100, -5, 150])
    def test_probability_out_of_range_returns_zero_result(self, prob):
        assert kelly_fraction(2.0, prob, 1000) == NO_EDGE

    def test_non_finite_input(self):
        assert kelly_fraction(float("nan"), 60, 1000) == NO_EDGE
        assert kelly_fraction(2.0, 60, float("inf")) == NO_EDGE

    def test_negative_bankroll_never_gives_negative_stake(self):
        result = kelly_fraction(2.0, 60, -500)
        assert result.is_value_bet is True
        assert result.recommended_stake == 0.0

    def test_outputs_always_finite(self):
        for odds in (1.0, 1.01, 2.0, 50.0):
            for prob in (0.5, 50, 99.5):
                r = kelly_fraction(odds, prob, 1000)
                assert math.isfinite(r.fraction)
                assert math.isfinite(r.percentage)
                assert math.isfinite(r.recommended_stake)


class TestSuggestedStake:
    """Policy dispatch."""

    def test_fixed_ignores_bankroll_and_odds(self):
        policy = BankrollPolicy(method="fixed", fixed_amount=50)
        assert suggested_stake(policy, 1000) == 50
        assert suggested_stake(policy, 10, 3.5, 80) == 50
        assert suggested_stake(policy, 0) == 50

    def test_fixed_without_amount(self):
        assert suggested_stake(BankrollPolicy(method="fixed"), 1000) == 0.0

    def test_percentage(self):
        policy = BankrollPolicy(method="percentage", percentage=3)
        assert suggested_stake(policy, 1000) == pytest.approx(30.0)

    def test_percentage_without_value(self):
        assert suggested_stake(BankrollPolicy(method="percentage"), 1000) == 0.0

    def test_kelly_uses_kelly_stake(self):
        policy = BankrollPolicy(method="kelly")
        assert suggested_stake(policy, 1000, 2.0, 60) == pytest.approx(200.0)

    def test_kelly_needs_odds_and_probability(self):
        policy = BankrollPolicy(method="kelly")
        assert suggested_stake(policy, 1000) == 0.0
        assert suggested_stake(policy, 1000, odds=2.0) == 0.0
        assert suggested_stake(policy, 1000, probability_percent=60) == 0.0

    def test_kelly_no_edge(self):
        assert suggested_stake(BankrollPolicy(method="kelly"), 1000, 2.0, 40) == 0.0

    def test_unknown_method(self):
        assert suggested_stake(BankrollPolicy(method="martingale"), 1000, 2.0, 60) == 0.0


class TestReturnsAndProfit:

    def test_potential_return_includes_stake(self):
        assert potential_return(100, 2.5) == pytest.approx(250.0)

    @pytest.mark.parametrize("result, expected", [
        ("win", 150.0),
        ("loss", -100.0),
        ("void", 0.0),
        ("pending", 0.0),
        ("unknown", 0.0),
    ])
    def test_settlement_profit(self, result, expected):
        assert settlement_profit(result, 100, 2.5) == pytest.approx(expected)

    def test_percentage_of_bankroll(self):
        assert percentage_of_bankroll(30, 1000) == pytest.approx(3.0)

    def test_percentage_of_empty_bankroll(self):
        assert percentage_of_bankroll(30, 0) == 0.0
        assert percentage_of_bankroll(30, -100) == 0.0

    def test_overflowing_results_are_zero(self):
        assert potential_return(1e200, 1e200) == 0.0
        assert settlement_profit("win", 1e200, 1e200) == 0.0
        assert percentage_of_bankroll(1e308, 1e-10) == 0.0
        policy = BankrollPolicy(method="percentage", percentage=1e308)
        assert suggested_stake(policy, 1e10) == 0.0
