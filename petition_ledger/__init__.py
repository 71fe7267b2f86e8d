"""
Petition Ledger - petition lifecycle and signature ledger

Creates petitions, admits signatures against them under temporal and
uniqueness constraints, tracks progress toward a numeric target, detects
milestone crossings and maintains per-identity reputation aggregates.

Ledger Truths:
- Every guard is evaluated before any write (all-or-nothing per call)
- One writer per petition at a time
- Time is supplied by the caller, never read from a local clock
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
