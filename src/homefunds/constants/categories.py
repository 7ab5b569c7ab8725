"""
Static registry of expense categories and income sources.

Ids are what gets persisted on each record; name, icon and color are display
metadata only. Lookups never fail: an unknown id resolves to the generic
"other" entry of the same registry.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """Display metadata for a category or an income source."""

    id: str
    name: str
    icon: str
    color: str


FALLBACK_COLOR = "#6B7280"

# Expense categories
EXPENSE_CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo("food", "Food", "fast-food", "#F97316"),
    CategoryInfo("transport", "Transport", "car", "#3B82F6"),
    CategoryInfo("utilities", "Utilities", "flash", "#8B5CF6"),
    CategoryInfo("entertainment", "Entertainment", "game-controller", "#EC4899"),
    CategoryInfo("health", "Health", "medkit", "#10B981"),
    CategoryInfo("education", "Education", "school", "#6366F1"),
    CategoryInfo("home", "Home", "home", "#F59E0B"),
    CategoryInfo("clothing", "Clothing", "shirt", "#14B8A6"),
    CategoryInfo("other", "Other", "ellipsis-horizontal-circle", FALLBACK_COLOR),
)

# Income sources
INCOME_SOURCES: tuple[CategoryInfo, ...] = (
    CategoryInfo("salary", "Salary", "briefcase", "#10B981"),
    CategoryInfo("freelance", "Freelance", "laptop", "#3B82F6"),
    CategoryInfo("sale", "Sale", "pricetag", "#F59E0B"),
    CategoryInfo("gift", "Gift", "gift", "#EC4899"),
    CategoryInfo("investment", "Investment", "trending-up", "#8B5CF6"),
    CategoryInfo("other", "Other", "ellipsis-horizontal-circle", FALLBACK_COLOR),
)

_CATEGORY_INDEX = {c.id: c for c in EXPENSE_CATEGORIES}
_SOURCE_INDEX = {s.id: s for s in INCOME_SOURCES}

OTHER_CATEGORY = _CATEGORY_INDEX["other"]
OTHER_SOURCE = _SOURCE_INDEX["other"]


def get_category_by_id(category_id: str | None) -> CategoryInfo:
    """Return display metadata for an expense category, or the "other" entry."""

    if not category_id:
        return OTHER_CATEGORY
    return _CATEGORY_INDEX.get(category_id, OTHER_CATEGORY)


def get_source_by_id(source_id: str | None) -> CategoryInfo:
    """Return display metadata for an income source, or the "other" entry."""

    if not source_id:
        return OTHER_SOURCE
    return _SOURCE_INDEX.get(source_id, OTHER_SOURCE)


def is_known_category(category_id: str) -> bool:
    return category_id in _CATEGORY_INDEX


def is_known_source(source_id: str) -> bool:
    return source_id in _SOURCE_INDEX


__all__ = [
    "CategoryInfo",
    "EXPENSE_CATEGORIES",
    "FALLBACK_COLOR",
    "INCOME_SOURCES",
    "OTHER_CATEGORY",
    "OTHER_SOURCE",
    "get_category_by_id",
    "get_source_by_id",
    "is_known_category",
    "is_known_source",
]
