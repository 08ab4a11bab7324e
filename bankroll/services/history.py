"""
Bet history views for the presentation layer.

All functions take a sequence of records (normally ``BetLedger.records``)
and return plain data or pandas DataFrames ready for tables and charts.
Formatting (currency, locale, truncation of long names) stays with the
caller.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from bankroll.core.types import RESULTS, BetRecord

logger = logging.getLogger(__name__)

#: Filter value meaning "no filter".
ALL: str = "all"

_SEARCH_FIELDS = ("event", "home_team", "away_team", "league")

_RECORD_COLUMNS = [
    "id", "date", "event", "home_team", "away_team", "league", "bet_type",
    "odds", "estimated_probability", "stake_amount", "result", "net_profit",
    "bankroll_after", "expected_value", "potential_return", "percentage_of_bankroll",
]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def filter_records(
    records: Iterable[BetRecord],
    search: str = "",
    result: Optional[str] = None,
    league: Optional[str] = None,
) -> List[BetRecord]:
    """
    Records matching all active filters, in their original order.

    ``search`` is a case-insensitive substring over event, teams and league.
    ``result``/``league`` of ``None`` or ``"all"`` are ignored.
    """
    needle = search.strip().lower()

    def _matches(r: BetRecord) -> bool:
        if needle and not any(needle in getattr(r, f).lower() for f in _SEARCH_FIELDS):
            return False
        if result not in (None, ALL) and r.result != result:
            return False
        if league not in (None, ALL) and r.league != league:
            return False
        return True

    return [r for r in records if _matches(r)]


def unique_leagues(records: Iterable[BetRecord]) -> List[str]:
    """Distinct leagues in order of first appearance."""
    return list(dict.fromkeys(r.league for r in records))


# ---------------------------------------------------------------------------
# Chart series
# ---------------------------------------------------------------------------

def result_distribution(records: Iterable[BetRecord]) -> Dict[str, int]:
    """Count of bets per result, omitting results that never occur."""
    counts = {res: 0 for res in RESULTS}
    for r in records:
        if r.result in counts:
            counts[r.result] += 1
        else:
            logger.warning("Bet %s has unrecognised result %r", r.id, r.result)
    return {res: n for res, n in counts.items() if n > 0}


def top_categories(profit_map: Mapping[str, float], limit: int = 10) -> List[Tuple[str, float]]:
    """Categories ranked by profit, best first."""
    ranked = sorted(profit_map.items(), key=lambda kv: kv[1], reverse=True)
    return ranked[:limit] if limit > 0 else []


def bankroll_evolution(records: Sequence[BetRecord]) -> pd.DataFrame:
    """Running balance after each bet: columns ``bet`` (1-based), ``date``, ``bankroll``.

    Dates pandas cannot parse become ``NaT``; the balance row is kept.
    """
    return pd.DataFrame(
        {
            "bet": list(range(1, len(records) + 1)),
            "date": pd.to_datetime([r.date for r in records], errors="coerce"),
            "bankroll": [r.bankroll_after for r in records],
        }
    )


def records_frame(records: Iterable[BetRecord]) -> pd.DataFrame:
    """One row per record with every field as a column."""
    return pd.DataFrame([r.to_dict() for r in records], columns=_RECORD_COLUMNS)
