"""Bankroll Edge — stake sizing and bet performance tracking."""

__version__ = "1.0.0"
