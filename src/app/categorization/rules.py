"""Deterministic transaction categorization.

Source files rarely carry a reliable category, so one is inferred from the
transaction description, merchant name and merchant category code (MCC) using a
static keyword table. Matching is a case-insensitive substring test against the
three fields joined with spaces.

The table is evaluated as an ordered rule list: longest keyword first, and
keywords of equal length in declaration order. Overlapping keywords therefore
resolve the same way on every run (e.g. "gas station" is tried before "gas").
"""

from __future__ import annotations

import enum


class Category(str, enum.Enum):
    """Spending categories assigned to every transaction."""

    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    UTILITIES = "UTILITIES"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    HEALTHCARE = "HEALTHCARE"
    COMMUNICATION = "COMMUNICATION"
    EDUCATION = "EDUCATION"
    TRAVEL = "TRAVEL"
    INCOME = "INCOME"
    OTHER = "OTHER"


_KEYWORDS: list[tuple[Category, tuple[str, ...]]] = [
    (Category.FOOD, ("grocery", "market", "supermarket", "food", "restaurant", "cafe", "coffee")),
    (
        Category.TRANSPORT,
        ("uber", "taxi", "bus", "train", "fuel", "gas station", "petrol", "subway", "transport"),
    ),
    (Category.UTILITIES, ("electric", "gas", "water", "utility", "power", "energy")),
    (
        Category.ENTERTAINMENT,
        ("cinema", "movie", "netflix", "theatre", "concert", "entertainment", "game"),
    ),
    (Category.SHOPPING, ("shop", "store", "mall", "clothes", "amazon", "ecommerce", "retail")),
    (Category.HEALTHCARE, ("pharmacy", "doctor", "hospital", "clinic", "medicine", "dentist")),
    (Category.COMMUNICATION, ("phone", "internet", "cell", "mobile", "telecom", "data")),
    (
        Category.EDUCATION,
        ("school", "university", "tuition", "course", "college", "education"),
    ),
    (Category.TRAVEL, ("flight", "airline", "hotel", "travel", "air", "booking", "airbnb")),
    (Category.INCOME, ("salary", "payroll", "deposit", "income", "bonus")),
]


def _build_rules() -> list[tuple[str, Category]]:
    declared = [
        (keyword.lower(), category)
        for category, keywords in _KEYWORDS
        for keyword in keywords
    ]
    # sorted() is stable, so equal-length keywords keep declaration order.
    return sorted(declared, key=lambda rule: -len(rule[0]))


# Ordering matters: earlier matches win.
RULES: list[tuple[str, Category]] = _build_rules()


def _combine(*fields: str | None) -> str:
    return " ".join(field or "" for field in fields).lower()


def categorize(
    description: str | None, merchant: str | None = None, mcc: str | None = None
) -> Category:
    """Infer a category from the free-text fields of a transaction.

    Args:
        description: Transaction description.
        merchant: Merchant name.
        mcc: Merchant category code.

    Returns:
        Category of the first matching keyword, or ``Category.OTHER``.
    """
    text = _combine(description, merchant, mcc)
    if not text.strip():
        return Category.OTHER

    for keyword, category in RULES:
        if keyword in text:
            return category

    return Category.OTHER


def parse_category(label: str | None) -> Category | None:
    """Resolve an explicit category label (enum name, any case).

    Returns None for empty or unrecognised labels so callers can fall back to
    keyword classification.
    """
    name = (label or "").strip().upper()
    if not name:
        return None
    try:
        return Category[name]
    except KeyError:
        return None
