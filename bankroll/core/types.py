"""Shared data shapes for the calculation core.

Everything here is a plain value object.  The collaborator layer (ledger,
history, presentation) builds and passes these around; the pure functions in
:mod:`~bankroll.core.stake_advisor` and :mod:`~bankroll.core.performance`
consume them without mutating anything.

Records are frozen.  A pending bet is "changed" by building a new instance
with :func:`dataclasses.replace`, which keeps the placement-time fields
(``expected_value``, ``potential_return``, ``percentage_of_bankroll``)
exactly as they were when the bet was logged.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Final, Optional

# ---------------------------------------------------------------------------
# Bet results
# ---------------------------------------------------------------------------

RESULT_PENDING: Final[str] = "pending"
RESULT_WIN: Final[str] = "win"
RESULT_LOSS: Final[str] = "loss"
RESULT_VOID: Final[str] = "void"

#: Display order used by the result distribution.
RESULTS: Final[tuple] = (RESULT_WIN, RESULT_LOSS, RESULT_VOID, RESULT_PENDING)

# ---------------------------------------------------------------------------
# Staking methods
# ---------------------------------------------------------------------------

METHOD_FIXED: Final[str] = "fixed"
METHOD_PERCENTAGE: Final[str] = "percentage"
METHOD_KELLY: Final[str] = "kelly"

STAKING_METHODS: Final[tuple] = (METHOD_FIXED, METHOD_PERCENTAGE, METHOD_KELLY)


@dataclass(frozen=True)
class BetRecord:
    """A single logged bet.

    Attributes:
        id: Opaque identifier assigned by the ledger.
        date: Placement date, ISO ``YYYY-MM-DD``.
        event: Display label, normally ``"<home> vs <away>"``.
        league: Competition name; also a profit-breakdown category.
        bet_type: Market (``"1x2"``, ``"over-under"``...); also a category.
        odds: Decimal odds (payout multiplier including the stake).
        estimated_probability: Bettor's own win probability, percent.
        stake_amount: Currency units risked.
        result: One of :data:`RESULTS`.
        net_profit: Realised profit; 0 while pending or void.
        bankroll_after: Running balance once this bet is settled.
        expected_value: EV at placement.  Never recomputed.
        potential_return: Gross return at placement.  Never recomputed.
        percentage_of_bankroll: Stake as % of the bankroll at placement.
    """

    id: str
    date: str
    event: str
    home_team: str
    away_team: str
    league: str
    bet_type: str
    odds: float
    estimated_probability: float
    stake_amount: float
    result: str = RESULT_PENDING
    net_profit: float = 0.0
    bankroll_after: float = 0.0
    expected_value: float = 0.0
    potential_return: float = 0.0
    percentage_of_bankroll: float = 0.0

    @property
    def is_settled(self) -> bool:
        return self.result != RESULT_PENDING

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class BankrollPolicy:
    """Stake-sizing configuration.

    ``fixed_amount`` is only meaningful for ``method="fixed"`` and
    ``percentage`` (0 < p <= 100) only for ``method="percentage"``.  Presence
    is checked at the boundary by :class:`~bankroll.schemas.BankrollPolicySettings`;
    the core falls back to a zero stake when a required value is missing.
    """

    method: str = METHOD_PERCENTAGE
    fixed_amount: Optional[float] = None
    percentage: Optional[float] = None
    initial_bankroll: float = 0.0
    current_bankroll: float = 0.0


@dataclass(frozen=True)
class KellyResult:
    """Kelly assessment of a single bet.

    ``fraction`` is the raw full-Kelly value and may be negative;
    ``percentage`` and ``recommended_stake`` are clamped at zero.
    """

    fraction: float = 0.0
    percentage: float = 0.0
    is_value_bet: bool = False
    recommended_stake: float = 0.0


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Aggregate statistics over the settled part of a bet history."""

    total_bets: int = 0
    total_staked: float = 0.0
    total_return: float = 0.0
    net_profit: float = 0.0
    roi: float = 0.0
    win_rate: float = 0.0
    average_odds: float = 0.0
    longest_win_streak: int = 0
    longest_loss_streak: int = 0
    profit_by_bet_type: Dict[str, float] = field(default_factory=dict)
    profit_by_league: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return asdict(self)
