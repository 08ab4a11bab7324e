"""Portfolio-level performance aggregation.

:func:`aggregate` folds a bet history into a :class:`PerformanceSnapshot`.
It is a full recompute on every call: a personal bet history is at most a
few thousand records, and rebuilding from scratch rules out stale totals and
double counting after an edit or a delete.

Pure: no I/O, no logging, no state.  The caller re-invokes it after every
change to the record collection.  Records built outside the entry schema may
carry non-finite numbers; those count as 0 so every snapshot field stays
finite.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Tuple

from bankroll.core.types import (
    RESULT_LOSS,
    RESULT_PENDING,
    RESULT_WIN,
    BetRecord,
    PerformanceSnapshot,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _num(value: float) -> float:
    try:
        return value if math.isfinite(value) else 0.0
    except TypeError:
        return 0.0


def _safe_roi(profit: float, staked: float) -> float:
    return _num(profit / staked * 100.0) if staked > 0 else 0.0


def _win_rate(wins: int, total: int) -> float:
    return wins / total * 100.0 if total > 0 else 0.0


def _longest_streaks(results: Iterable[str]) -> Tuple[int, int]:
    """Longest run of wins and of losses, in order.

    A ``void`` neither extends nor breaks either run.
    """
    win_run = loss_run = 0
    max_win = max_loss = 0
    for result in results:
        if result == RESULT_WIN:
            win_run += 1
            loss_run = 0
            max_win = max(max_win, win_run)
        elif result == RESULT_LOSS:
            loss_run += 1
            win_run = 0
            max_loss = max(max_loss, loss_run)
    return max_win, max_loss


def _profit_by(bets: List[BetRecord], attr: str) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for b in bets:
        key = getattr(b, attr)
        totals[key] = _num(totals.get(key, 0.0) + _num(b.net_profit))
    return totals


# ---------------------------------------------------------------------------
# aggregate
# ---------------------------------------------------------------------------

def aggregate(records: Iterable[BetRecord]) -> PerformanceSnapshot:
    """
    Summarise the settled part of ``records``.

    ``records`` must be in chronological (insertion) order; streaks depend on
    it.  Pending bets are ignored.  With nothing settled the all-zero
    snapshot is returned.
    """
    settled = [b for b in records if b.result != RESULT_PENDING]

    if not settled:
        return PerformanceSnapshot()

    total = len(settled)
    wins = sum(1 for b in settled if b.result == RESULT_WIN)
    total_staked = _num(sum(_num(b.stake_amount) for b in settled))
    net_profit = _num(sum(_num(b.net_profit) for b in settled))
    longest_win, longest_loss = _longest_streaks(b.result for b in settled)

    return PerformanceSnapshot(
        total_bets=total,
        total_staked=total_staked,
        total_return=_num(total_staked + net_profit),
        net_profit=net_profit,
        roi=_safe_roi(net_profit, total_staked),
        win_rate=_win_rate(wins, total),
        average_odds=_num(sum(_num(b.odds) for b in settled) / total),
        longest_win_streak=longest_win,
        longest_loss_streak=longest_loss,
        profit_by_bet_type=_profit_by(settled, "bet_type"),
        profit_by_league=_profit_by(settled, "league"),
    )
