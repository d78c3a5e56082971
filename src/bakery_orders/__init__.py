"""
Bakery Orders - Order lifecycle and reproducible demo data.

This package models bakery orders moving through their lifecycle
(placed, confirmed, ready or problem, delivered or cancelled) with an
append-only history ledger, and generates a statistically realistic
demo dataset of past and upcoming orders from a single seed.
"""

__version__ = "0.1.0"
