"""
Ledger Core

Validation and arithmetic core of a double-entry bookkeeping data model:
tolerance-aware multi-currency amounts, cost and price normalization for
postings, and the transaction validation pipeline. All monetary values use
Decimal.
"""

__version__ = "1.0.0"
