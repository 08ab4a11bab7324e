"""Pure construction and settlement of :class:`BetRecord` values.

The running balance (``bankroll_after``) is a sequential fold over the
history: each record's balance is the previous record's balance plus its own
net profit, starting from the initial bankroll.  The ledger owns that fold;
this module only provides the arithmetic so it can be tested without any
state.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Iterable, List, Optional

from bankroll.core.stake_advisor import (
    expected_value,
    percentage_of_bankroll,
    potential_return,
    settlement_profit,
)
from bankroll.core.types import RESULT_PENDING, BetRecord


def event_label(home_team: str, away_team: str) -> str:
    """``"Home vs Away"`` label used when no event name is given."""
    return f"{home_team} vs {away_team}"


def create_record(
    *,
    date: str,
    home_team: str,
    away_team: str,
    league: str,
    bet_type: str,
    odds: float,
    estimated_probability: float,
    stake_amount: float,
    current_bankroll: float,
    result: str = RESULT_PENDING,
    event: str = "",
    record_id: Optional[str] = None,
) -> BetRecord:
    """Build a record, freezing its placement-time figures.

    ``expected_value``, ``potential_return`` and ``percentage_of_bankroll``
    are computed here against ``current_bankroll`` and never touched again.
    ``bankroll_after`` is ``current_bankroll`` plus the net profit of the
    entry result (0 for a pending bet).
    """
    net = settlement_profit(result, stake_amount, odds)
    return BetRecord(
        id=record_id or uuid.uuid4().hex,
        date=date,
        event=event.strip() or event_label(home_team, away_team),
        home_team=home_team,
        away_team=away_team,
        league=league,
        bet_type=bet_type,
        odds=odds,
        estimated_probability=estimated_probability,
        stake_amount=stake_amount,
        result=result,
        net_profit=net,
        bankroll_after=current_bankroll + net,
        expected_value=expected_value(odds, estimated_probability, stake_amount),
        potential_return=potential_return(stake_amount, odds),
        percentage_of_bankroll=percentage_of_bankroll(stake_amount, current_bankroll),
    )


def settle_record(record: BetRecord, result: str, balance_before: float) -> BetRecord:
    """Return ``record`` with a new ``result`` and the figures that follow from it."""
    net = settlement_profit(result, record.stake_amount, record.odds)
    return replace(
        record,
        result=result,
        net_profit=net,
        bankroll_after=balance_before + net,
    )


def running_balances(records: Iterable[BetRecord], initial_bankroll: float) -> List[BetRecord]:
    """Re-derive ``bankroll_after`` for every record, in order."""
    balance = initial_bankroll
    folded: List[BetRecord] = []
    for record in records:
        balance += record.net_profit
        if record.bankroll_after != balance:
            record = replace(record, bankroll_after=balance)
        folded.append(record)
    return folded


def current_bankroll(records: List[BetRecord], initial_bankroll: float) -> float:
    """Balance after the last record, or ``initial_bankroll`` for an empty history."""
    if not records:
        return initial_bankroll
    return records[-1].bankroll_after
