"""Shopping categories and the heuristics that assign them."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)

PRODUCE = "Produce"
PROTEINS = "Proteins"
DAIRY = "Dairy"
PANTRY = "Pantry"
OTHER = "Other"

# Aisle order used for display
CATEGORY_ORDER: tuple[str, ...] = (PRODUCE, PROTEINS, DAIRY, PANTRY, OTHER)

# Food database category tag → shopping category
DEFAULT_TAG_CATEGORIES: dict[str, str] = {
    "protein": PROTEINS,
    "dairy": DAIRY,
    "veg": PRODUCE,
    "fruit": PRODUCE,
    "grains": PANTRY,
    "nuts": PANTRY,
}

# Name keywords per category, checked in this order
DEFAULT_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    PROTEINS: [
        "chicken", "beef", "fish", "salmon", "tuna", "turkey", "pork", "egg",
        "tofu",
    ],
    DAIRY: ["milk", "yogurt", "cheese", "butter", "cream"],
    PRODUCE: [
        "tomato", "lettuce", "onion", "garlic", "pepper", "carrot", "broccoli",
        "spinach", "apple", "banana", "orange", "berry",
    ],
    PANTRY: ["rice", "pasta", "bread", "flour", "oil", "sugar", "salt", "oats"],
}


def canonical_category(value: object) -> str | None:
    """Map a configured category name onto :data:`CATEGORY_ORDER`, ignoring case.

    Returns None for anything outside the closed set.
    """
    if not isinstance(value, str):
        return None
    wanted = value.strip().casefold()
    for category in CATEGORY_ORDER:
        if category.casefold() == wanted:
            return category
    return None


def detect_category(
    name: str,
    source_category: str | None = None,
    *,
    keywords: Mapping[str, Sequence[str]] | None = None,
    tags: Mapping[str, str] | None = None,
) -> str:
    """Pick the shopping category for a food.

    Args:
        name: Food display name, any casing.
        source_category: The food's own classification tag, if known.
        keywords: Category → keyword list, in precedence order.
            Defaults to :data:`DEFAULT_CATEGORY_KEYWORDS`.
        tags: Tag → category table. Defaults to :data:`DEFAULT_TAG_CATEGORIES`.

    Returns:
        One of :data:`CATEGORY_ORDER`. An explicit tag wins over name
        keywords; unmatched foods fall back to ``"Other"``.
    """
    if tags is None:
        tags = DEFAULT_TAG_CATEGORIES
    if keywords is None:
        keywords = DEFAULT_CATEGORY_KEYWORDS

    if isinstance(source_category, str) and source_category:
        tagged = tags.get(source_category.lower())
        if tagged is not None:
            return tagged

    name_lower = name.lower()
    for category, words in keywords.items():
        if any(word in name_lower for word in words):
            return category

    return OTHER


def merge_keywords(
    custom: Mapping[str, Sequence[str]],
    base: Mapping[str, Sequence[str]] | None = None,
) -> dict[str, list[str]]:
    """Extend the keyword table with custom words, keeping category order.

    Category names match :data:`CATEGORY_ORDER` ignoring case; others are
    ignored. ``Other`` is never keyword-matched.
    """
    if base is None:
        base = DEFAULT_CATEGORY_KEYWORDS
    merged = {category: list(words) for category, words in base.items()}
    for name, words in custom.items():
        category = canonical_category(name)
        if category is None or category == OTHER:
            continue
        existing = merged.setdefault(category, [])
        existing.extend(w.lower() for w in words if w.lower() not in existing)
    return merged


def merge_tags(
    custom: Mapping[str, str],
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Override the tag table with custom ``tag = "Category"`` entries.

    Tags are lowercased. Entries naming a category outside
    :data:`CATEGORY_ORDER` are logged and dropped.
    """
    if base is None:
        base = DEFAULT_TAG_CATEGORIES
    merged = dict(base)
    for tag, value in custom.items():
        category = canonical_category(value)
        if category is None:
            logger.warning("Ignoring tag %r: unknown category %r", tag, value)
            continue
        merged[str(tag).lower()] = category
    return merged
