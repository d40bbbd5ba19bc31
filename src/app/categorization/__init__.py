"""Transaction categorization utilities.

This module provides deterministic, local categorization of transactions based on
their description, merchant and MCC. It is intentionally rule-based (no network
calls) to keep ingestion fast and reproducible.
"""

from .rules import Category, categorize, parse_category

__all__ = ["Category", "categorize", "parse_category"]
