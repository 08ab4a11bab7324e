"""
Pydantic schemas for user-entered bets and bankroll settings.

The calculation core never validates; it degrades bad numbers to zero.
These schemas are where the entry rules live, so the collaborator layer can
reject a bad form before any record is built.
"""

from __future__ import annotations

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from bankroll.core.types import BankrollPolicy

ResultLiteral = Literal["pending", "win", "loss", "void"]
MethodLiteral = Literal["fixed", "percentage", "kelly"]


# ---------------------------------------------------------------------------
# Bet entry
# ---------------------------------------------------------------------------

class BetRecordCreate(BaseModel):
    """
    A new bet as entered on the bet form.

    Derived figures (EV, potential return, net profit, running balance,
    share of bankroll) are not accepted here; the ledger computes them.
    """

    date: datetime.date = Field(default_factory=datetime.date.today)
    home_team: str = Field(..., max_length=120)
    away_team: str = Field(..., max_length=120)
    league: str = Field(..., max_length=120, description='e.g. "Serie A"')
    bet_type: str = Field(..., max_length=60, description='e.g. "1x2", "over-under"')
    event: str = Field("", max_length=250, description="Filled from the teams when blank")

    odds: float = Field(..., gt=1.0, description="Decimal odds, must be above 1.00")
    estimated_probability: float = Field(
        ..., gt=0.0, lt=100.0, description="Own win probability in percent"
    )
    stake_amount: float = Field(..., gt=0.0)
    result: ResultLiteral = "pending"

    @field_validator("home_team", "away_team", "league", "bet_type")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("event")
    @classmethod
    def strip_event(cls, v: str) -> str:
        return v.strip()

    model_config = {
        "allow_inf_nan": False,
        "json_schema_extra": {
            "example": {
                "date": "2024-05-12",
                "home_team": "Palmeiras",
                "away_team": "Botafogo",
                "league": "Brasileirão Série A",
                "bet_type": "1x2",
                "odds": 2.10,
                "estimated_probability": 55,
                "stake_amount": 30.0,
            }
        }
    }


class ResultUpdate(BaseModel):
    """Settlement of a pending bet."""

    result: ResultLiteral


# ---------------------------------------------------------------------------
# Bankroll settings
# ---------------------------------------------------------------------------

class BankrollPolicySettings(BaseModel):
    """
    Bankroll management settings.

    ``fixed_amount`` is required for the fixed method and ``percentage``
    for the percentage method.  Kelly needs neither.
    """

    method: MethodLiteral = "percentage"
    fixed_amount: Optional[float] = Field(None, gt=0.0)
    percentage: Optional[float] = Field(None, gt=0.0, le=100.0)
    initial_bankroll: float = Field(..., ge=0.0)

    model_config = {"allow_inf_nan": False}

    @model_validator(mode="after")
    def check_method_parameters(self) -> "BankrollPolicySettings":
        if self.method == "fixed" and self.fixed_amount is None:
            raise ValueError("fixed_amount is required when method='fixed'")
        if self.method == "percentage" and self.percentage is None:
            raise ValueError("percentage is required when method='percentage'")
        return self

    def to_policy(self, current_bankroll: Optional[float] = None) -> BankrollPolicy:
        return BankrollPolicy(
            method=self.method,
            fixed_amount=self.fixed_amount,
            percentage=self.percentage,
            initial_bankroll=self.initial_bankroll,
            current_bankroll=(
                self.initial_bankroll if current_bankroll is None else current_bankroll
            ),
        )
