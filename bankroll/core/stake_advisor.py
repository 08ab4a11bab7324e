"""Stake sizing and bet valuation — the single source of truth for bet math.

All functions here are **pure**: no I/O, no logging, no state.  The form
layer calls them on every keystroke while a draft bet is being edited, so
none of them looks at the bet history.

The public surface covers the five questions asked about a candidate bet:

1. :func:`expected_value` — probability-weighted profit of the stake.
2. :func:`kelly_fraction` — full-Kelly assessment and recommended stake.
3. :func:`suggested_stake` — stake under the configured bankroll policy.
4. :func:`potential_return` — gross payout if the bet wins.
5. :func:`settlement_profit` — realised profit once the result is known.

Design decisions
----------------
* **Calculator, not validator.**  Range checks ("odds must be > 1",
  "probability between 1 and 99") live in :mod:`bankroll.schemas`.  Inside
  the core, malformed numbers degrade to a neutral result (``0.0`` or
  ``is_value_bet=False``) instead of raising, so every output is a finite
  float the presentation layer can render directly.
* **Full Kelly, floored at zero.**  A negative Kelly fraction means the
  bettor's own estimate says the bet has no edge.  The recommendation is
  then zero, never a negative (lay) position.
* **Odds ≤ 1.0 are invalid.**  With ``b = odds − 1 = 0`` the Kelly formula
  divides by zero; such input returns the zero result.
"""

from __future__ import annotations

import math
from typing import Final, Optional

from bankroll.core.types import (
    METHOD_FIXED,
    METHOD_KELLY,
    METHOD_PERCENTAGE,
    RESULT_LOSS,
    RESULT_WIN,
    BankrollPolicy,
    KellyResult,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Decimal odds at or below this value carry no profit and make
#: ``b = odds − 1`` non-positive.
MIN_VALID_ODDS: Final[float] = 1.0

#: Neutral Kelly result returned for degenerate input.
NO_EDGE: Final[KellyResult] = KellyResult()


def _finite(*values: float) -> bool:
    try:
        return all(math.isfinite(v) for v in values)
    except TypeError:
        return False


def _finite_or_zero(value: float) -> float:
    return value if _finite(value) else 0.0


# ---------------------------------------------------------------------------
# Valuation
# ---------------------------------------------------------------------------


def expected_value(odds: float, probability_percent: float, stake: float) -> float:
    """Expected profit of staking ``stake`` at ``odds``.

    ::

        EV  =  (p / 100) · odds · stake  −  stake

    Linear in ``stake``.  Positive EV means the probability-weighted payout
    exceeds the cost of the bet.

    Args:
        odds: Decimal odds.
        probability_percent: Bettor's win probability, in percent.
        stake: Amount risked.

    Returns:
        Expected profit in currency units, or 0.0 when the input or the
        result is not finite.

    Examples::

        expected_value(2.0, 60, 100)  →  20.0
        expected_value(2.0, 40, 100)  → -20.0
    """
    if not _finite(odds, probability_percent, stake):
        return 0.0
    return _finite_or_zero((probability_percent / 100.0) * odds * stake - stake)


def potential_return(stake: float, odds: float) -> float:
    """Gross return (stake included) if the bet wins."""
    if not _finite(stake, odds):
        return 0.0
    return _finite_or_zero(stake * odds)


def percentage_of_bankroll(stake: float, bankroll: float) -> float:
    """Stake as a percentage of ``bankroll``; 0.0 when the bankroll is not positive."""
    if not _finite(stake, bankroll) or bankroll <= 0.0:
        return 0.0
    return _finite_or_zero(stake / bankroll * 100.0)


def settlement_profit(result: str, stake: float, odds: float) -> float:
    """Realised profit for a settled bet.

    ``win`` pays ``stake · odds − stake``, ``loss`` costs the stake, and
    ``void``/``pending`` (or any unknown result) are worth nothing.

    Examples::

        settlement_profit("win", 100, 2.5)   →  150.0
        settlement_profit("loss", 100, 2.5)  → -100.0
        settlement_profit("void", 100, 2.5)  →    0.0
    """
    if not _finite(stake, odds):
        return 0.0
    if result == RESULT_WIN:
        return _finite_or_zero(stake * odds - stake)
    if result == RESULT_LOSS:
        return -stake
    return 0.0


# ---------------------------------------------------------------------------
# Kelly criterion
# ---------------------------------------------------------------------------


def kelly_fraction(odds: float, probability_percent: float, bankroll: float) -> KellyResult:
    """Full-Kelly assessment of a win/loss bet.

    The Kelly criterion maximises long-run logarithmic bankroll growth.  For
    a bet paying ``b`` per unit staked with win probability ``p``::

        f*  =  (b · p − q) / b        b = odds − 1,  q = 1 − p

    ``f* > 0`` means the bettor's estimate implies an edge over the price.

    Args:
        odds: Decimal odds.  Must exceed 1.0.
        probability_percent: Estimated win probability in ``(0, 100)``.
        bankroll: Bankroll the fraction is applied to.

    Returns:
        :class:`KellyResult` with the raw ``fraction``, the clamped
        ``percentage`` (``f* · 100``, floored at 0), ``is_value_bet`` and
        ``recommended_stake`` (``f* · bankroll``, floored at 0).  Degenerate
        input (odds ≤ 1.0, probability outside ``(0, 100)``, non-finite
        numbers) returns :data:`NO_EDGE`.

    Examples::

        kelly_fraction(2.0, 60, 1000)  →  fraction 0.2, 20%, value, stake 200
        kelly_fraction(2.0, 40, 1000)  →  fraction -0.2, 0%, no value, stake 0
    """
    if not _finite(odds, probability_percent, bankroll):
        return NO_EDGE
    if odds <= MIN_VALID_ODDS or not (0.0 < probability_percent < 100.0):
        return NO_EDGE

    b = odds - 1.0
    p = probability_percent / 100.0
    q = 1.0 - p

    fraction = (b * p - q) / b
    is_value_bet = fraction > 0.0
    stake = bankroll * fraction if is_value_bet else 0.0

    return KellyResult(
        fraction=fraction,
        percentage=max(0.0, fraction * 100.0),
        is_value_bet=is_value_bet,
        recommended_stake=max(0.0, stake),
    )


# ---------------------------------------------------------------------------
# Policy dispatch
# ---------------------------------------------------------------------------


def suggested_stake(
    policy: BankrollPolicy,
    bankroll: float,
    odds: Optional[float] = None,
    probability_percent: Optional[float] = None,
) -> float:
    """Stake recommended by ``policy`` for the current ``bankroll``.

    * ``fixed`` → ``policy.fixed_amount`` regardless of bankroll or odds.
    * ``percentage`` → ``bankroll · policy.percentage / 100``.
    * ``kelly`` → :func:`kelly_fraction` stake when both ``odds`` and
      ``probability_percent`` are supplied, otherwise 0.

    Missing policy parameters and unknown methods give 0.0.

    Examples::

        suggested_stake(BankrollPolicy("fixed", fixed_amount=50), 1000)      → 50.0
        suggested_stake(BankrollPolicy("percentage", percentage=3), 1000)    → 30.0
        suggested_stake(BankrollPolicy("kelly"), 1000, 2.0, 60)              → 200.0
    """
    method = policy.method

    if method == METHOD_FIXED:
        amount = policy.fixed_amount or 0.0
        return amount if _finite(amount) else 0.0

    if method == METHOD_PERCENTAGE:
        pct = policy.percentage or 0.0
        if not _finite(bankroll, pct):
            return 0.0
        return _finite_or_zero(bankroll * (pct / 100.0))

    if method == METHOD_KELLY:
        if odds and probability_percent:
            return kelly_fraction(odds, probability_percent, bankroll).recommended_stake
        return 0.0

    return 0.0
