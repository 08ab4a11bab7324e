"""Tests for the entry schemas."""

import datetime

import pytest
from pydantic import ValidationError

from bankroll.schemas import BankrollPolicySettings, BetRecordCreate, ResultUpdate


def _payload(**overrides):
    data = {
        "date": "2024-05-12",
        "home_team": "Palmeiras",
        "away_team": "Botafogo",
        "league": "Serie A",
        "bet_type": "1x2",
        "odds": 2.10,
        "estimated_probability": 55,
        "stake_amount": 30.0,
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# BetRecordCreate
# ---------------------------------------------------------------------------

def test_valid_entry():
    entry = BetRecordCreate(**_payload())
    assert entry.date == datetime.date(2024, 5, 12)
    assert entry.result == "pending"
    assert entry.event == ""


def test_date_defaults_to_today():
    data = _payload()
    del data["date"]
    assert BetRecordCreate(**data).date == datetime.date.today()


def test_names_are_stripped():
    entry = BetRecordCreate(**_payload(home_team="  Palmeiras ", event="  Derby "))
    assert entry.home_team == "Palmeiras"
    assert entry.event == "Derby"


@pytest.mark.parametrize("field", ["home_team", "away_team", "league", "bet_type"])
def test_blank_names_rejected(field):
    with pytest.raises(ValidationError):
        BetRecordCreate(**_payload(**{field: "   "}))


@pytest.mark.parametrize("odds", [1.0, 0.5, -2])
def test_odds_must_exceed_one(odds):
    with pytest.raises(ValidationError):
        BetRecordCreate(**_payload(odds=odds))


@pytest.mark.parametrize("stake", [0, -10])
def test_stake_must_be_positive(stake):
    with pytest.raises(ValidationError):
        BetRecordCreate(**_payload(stake_amount=stake))


@pytest.mark.parametrize("prob", [0, 100, -1, 120])
def test_probability_exclusive_range(prob):
    with pytest.raises(ValidationError):
        BetRecordCreate(**_payload(estimated_probability=prob))


def test_unknown_result_rejected():
    with pytest.raises(ValidationError):
        BetRecordCreate(**_payload(result="push"))


def test_result_update():
    assert ResultUpdate(result="win").result == "win"
    with pytest.raises(ValidationError):
        ResultUpdate(result="won")


# ---------------------------------------------------------------------------
# BankrollPolicySettings
# ---------------------------------------------------------------------------

def test_fixed_requires_amount():
    with pytest.raises(ValidationError):
        BankrollPolicySettings(method="fixed", initial_bankroll=1000)
    s = BankrollPolicySettings(method="fixed", fixed_amount=50, initial_bankroll=1000)
    assert s.fixed_amount == 50


def test_percentage_requires_value():
    with pytest.raises(ValidationError):
        BankrollPolicySettings(method="percentage", initial_bankroll=1000)


@pytest.mark.parametrize("pct", [0, -3, 100.5])
def test_percentage_range(pct):
    with pytest.raises(ValidationError):
        BankrollPolicySettings(method="percentage", percentage=pct, initial_bankroll=1000)


def test_percentage_upper_bound_inclusive():
    s = BankrollPolicySettings(method="percentage", percentage=100, initial_bankroll=1000)
    assert s.percentage == 100


def test_kelly_needs_nothing_extra():
    s = BankrollPolicySettings(method="kelly", initial_bankroll=1000)
    assert s.fixed_amount is None and s.percentage is None


def test_unknown_method_rejected():
    with pytest.raises(ValidationError):
        BankrollPolicySettings(method="martingale", initial_bankroll=1000)


def test_negative_bankroll_rejected():
    with pytest.raises(ValidationError):
        BankrollPolicySettings(method="kelly", initial_bankroll=-1)


def test_to_policy():
    s = BankrollPolicySettings(method="percentage", percentage=3, initial_bankroll=1000)
    policy = s.to_policy()
    assert policy.method == "percentage"
    assert policy.initial_bankroll == 1000
    assert policy.current_bankroll == 1000
    assert s.to_policy(current_bankroll=1250).current_bankroll == 1250


@pytest.mark.parametrize("field", ["odds", "estimated_probability", "stake_amount"])
@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_numbers_rejected(field, value):
    with pytest.raises(ValidationError):
        BetRecordCreate(**_payload(**{field: value}))


@pytest.mark.parametrize("overrides", [
    {"method": "fixed", "fixed_amount": float("inf")},
    {"method": "percentage", "percentage": float("nan")},
    {"method": "kelly", "initial_bankroll": float("inf")},
])
def test_policy_non_finite_numbers_rejected(overrides):
    data = {"initial_bankroll": 1000}
    data.update(overrides)
    with pytest.raises(ValidationError):
        BankrollPolicySettings(**data)
