"""
Environment-driven defaults for Bankroll Edge.

Values come from the process environment, with a ``.env`` file in the
working directory loaded first.  Nothing here is read by the calculation
core; only the ledger uses :func:`default_policy` when it is created
without an explicit policy.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from bankroll.core.types import METHOD_PERCENTAGE, STAKING_METHODS, BankrollPolicy

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number); using %r", name, raw, default)
        return default


def default_policy() -> BankrollPolicy:
    """
    Build the starting :class:`BankrollPolicy` from the environment.

      STARTING_BANKROLL  - initial (and current) bankroll, default 1000
      STAKING_METHOD     - fixed | percentage | kelly, default percentage
      STAKE_PERCENTAGE   - percentage-method stake, default 3.0
      FIXED_STAKE        - fixed-method stake, default unset
    """
    bankroll = _float_env("STARTING_BANKROLL", 1000.0)

    method = os.getenv("STAKING_METHOD", METHOD_PERCENTAGE).strip().lower()
    if method not in STAKING_METHODS:
        logger.warning(
            "Unknown STAKING_METHOD=%r; falling back to %r", method, METHOD_PERCENTAGE
        )
        method = METHOD_PERCENTAGE

    return BankrollPolicy(
        method=method,
        fixed_amount=_float_env("FIXED_STAKE", None),
        percentage=_float_env("STAKE_PERCENTAGE", 3.0),
        initial_bankroll=bankroll,
        current_bankroll=bankroll,
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Root logging setup for scripts and notebooks embedding the library."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
