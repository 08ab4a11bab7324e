"""Calculation core for Bankroll Edge.

This package contains the pure building blocks:

- ``types``         — record, policy and snapshot value objects
- ``stake_advisor`` — expected value, Kelly sizing, policy stakes, settlement
- ``performance``   — aggregate statistics over a bet history
- ``records``       — record construction and the running-balance fold

Nothing in this package imports from ``bankroll.services``.
All modules are side-effect-free and unit-testable in isolation.
"""
