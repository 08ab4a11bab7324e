"""
In-memory bet ledger.

Owns the ordered record collection and the bankroll policy, and is the one
place where the running balance is folded.  Nothing is recomputed behind the
caller's back: after each change the caller asks for :meth:`BetLedger.snapshot`
(or reads :attr:`BetLedger.current_bankroll`) when it needs fresh numbers.

Implements:

    1. Bet entry — validates through :class:`~bankroll.schemas.BetRecordCreate`
       and freezes the placement-time figures against the current bankroll.
    2. Settlement — a pending bet may be settled once; settled bets are facts.
    3. Balance sync — ``current_bankroll`` is always the last running balance,
       or the initial bankroll for an empty history.
    4. Draft valuation — stake suggestion, Kelly and EV for a bet still being
       typed in, with no effect on the history.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional, Tuple, Union

from bankroll.config import default_policy
from bankroll.core.performance import aggregate
from bankroll.core.records import (
    create_record,
    current_bankroll,
    running_balances,
    settle_record,
)
from bankroll.core.stake_advisor import (
    expected_value,
    kelly_fraction,
    potential_return,
    suggested_stake,
)
from bankroll.core.types import RESULT_PENDING, BankrollPolicy, BetRecord, PerformanceSnapshot
from bankroll.schemas import BankrollPolicySettings, BetRecordCreate, ResultUpdate

logger = logging.getLogger(__name__)


class SettledBetError(ValueError):
    """Raised when a result change is attempted on an already settled bet."""


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StakeSuggestion:
    """Figures shown next to a draft bet."""

    suggested_stake: float
    kelly_percentage: float
    is_value_bet: bool
    expected_value: float = 0.0
    potential_return: float = 0.0


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class BetLedger:
    """
    Ordered bet history plus the bankroll policy it is measured against.

    Records are kept in insertion order, which is treated as chronological.
    """

    def __init__(
        self,
        policy: Optional[BankrollPolicy] = None,
        records: Optional[List[BetRecord]] = None,
    ):
        self._policy = policy or default_policy()
        self._records: List[BetRecord] = running_balances(
            records or [], self._policy.initial_bankroll
        )
        self._sync_bankroll()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def records(self) -> Tuple[BetRecord, ...]:
        return tuple(self._records)

    @property
    def policy(self) -> BankrollPolicy:
        return self._policy

    @property
    def current_bankroll(self) -> float:
        return self._policy.current_bankroll

    def get(self, record_id: str) -> Optional[BetRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def pending(self) -> List[BetRecord]:
        return [r for r in self._records if r.result == RESULT_PENDING]

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return None

    def _refold(self, start: int = 0) -> None:
        """Re-derive running balances from ``start`` onwards."""
        opening = (
            self._records[start - 1].bankroll_after
            if start > 0
            else self._policy.initial_bankroll
        )
        self._records[start:] = running_balances(self._records[start:], opening)
        self._sync_bankroll()

    def _sync_bankroll(self) -> None:
        balance = current_bankroll(self._records, self._policy.initial_bankroll)
        if balance != self._policy.current_bankroll:
            self._policy = replace(self._policy, current_bankroll=balance)

    # ------------------------------------------------------------------
    # Record management
    # ------------------------------------------------------------------

    def add_record(self, entry: Union[BetRecordCreate, Mapping]) -> BetRecord:
        """Validate ``entry``, build its record and append it to the history.

        Raises:
            pydantic.ValidationError: If a mapping fails the entry rules.
        """
        if not isinstance(entry, BetRecordCreate):
            entry = BetRecordCreate.model_validate(entry)

        record = create_record(
            date=entry.date.isoformat(),
            home_team=entry.home_team,
            away_team=entry.away_team,
            league=entry.league,
            bet_type=entry.bet_type,
            odds=entry.odds,
            estimated_probability=entry.estimated_probability,
            stake_amount=entry.stake_amount,
            current_bankroll=self.current_bankroll,
            result=entry.result,
            event=entry.event,
        )
        self._records.append(record)
        self._sync_bankroll()

        logger.info(
            "Bet logged: %s (%s @ %.2f, stake %.2f, %s)",
            record.id, record.event, record.odds, record.stake_amount, record.result,
        )
        return record

    def update_result(self, record_id: str, result: str) -> Optional[BetRecord]:
        """Settle a pending bet.

        Returns the updated record, or ``None`` when ``record_id`` is unknown.

        Raises:
            SettledBetError: If the bet already has a final result.
            pydantic.ValidationError: If ``result`` is not a recognised value.
        """
        result = ResultUpdate(result=result).result

        idx = self._index_of(record_id)
        if idx is None:
            logger.warning("update_result: no bet with id %s", record_id)
            return None

        record = self._records[idx]
        if record.is_settled:
            raise SettledBetError(
                f"Bet {record_id} is already settled as {record.result!r}."
            )

        opening = (
            self._records[idx - 1].bankroll_after
            if idx > 0
            else self._policy.initial_bankroll
        )
        self._records[idx] = settle_record(record, result, opening)
        self._refold(idx)

        logger.info(
            "Bet %s settled: %s (net %.2f, bankroll %.2f)",
            record_id, result, self._records[idx].net_profit, self.current_bankroll,
        )
        return self._records[idx]

    def delete_record(self, record_id: str) -> bool:
        """Remove a bet; later running balances are re-derived."""
        idx = self._index_of(record_id)
        if idx is None:
            logger.warning("delete_record: no bet with id %s", record_id)
            return False

        del self._records[idx]
        self._refold(idx)
        logger.info("Bet %s deleted; bankroll now %.2f", record_id, self.current_bankroll)
        return True

    def update_policy(self, settings: Union[BankrollPolicySettings, BankrollPolicy]) -> BankrollPolicy:
        """Replace the bankroll policy.

        ``current_bankroll`` stays derived from the history.  A new initial
        bankroll shifts every running balance.
        """
        if isinstance(settings, BankrollPolicySettings):
            settings = settings.to_policy()

        initial_changed = settings.initial_bankroll != self._policy.initial_bankroll
        self._policy = settings
        if initial_changed:
            self._refold(0)
        else:
            self._sync_bankroll()

        logger.info(
            "Bankroll policy updated: method=%s, initial=%.2f, current=%.2f",
            self._policy.method, self._policy.initial_bankroll, self.current_bankroll,
        )
        return self._policy

    # ------------------------------------------------------------------
    # Valuation
    # ------------------------------------------------------------------

    def suggest(self, odds: float, probability_percent: float) -> StakeSuggestion:
        """Policy stake and Kelly assessment for a candidate bet."""
        bankroll = self.current_bankroll
        kelly = kelly_fraction(odds, probability_percent, bankroll)
        return StakeSuggestion(
            suggested_stake=suggested_stake(self._policy, bankroll, odds, probability_percent),
            kelly_percentage=kelly.percentage,
            is_value_bet=kelly.is_value_bet,
        )

    def preview(self, odds: float, probability_percent: float, stake: float) -> StakeSuggestion:
        """:meth:`suggest` plus EV and potential return for a draft stake."""
        base = self.suggest(odds, probability_percent)
        return replace(
            base,
            expected_value=expected_value(odds, probability_percent, stake),
            potential_return=potential_return(stake, odds),
        )

    def snapshot(self) -> PerformanceSnapshot:
        """Performance statistics for the current history."""
        return aggregate(self._records)
