"""TOML configuration loader for the shopping list."""

from __future__ import annotations

import functools
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .aggregation.categories import (
    DEFAULT_CATEGORY_KEYWORDS,
    DEFAULT_TAG_CATEGORIES,
    detect_category,
    merge_keywords,
    merge_tags,
)
from .export import EMAIL_FOOTER, EMAIL_SUBJECT

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_DB_PATH = "~/.config/hannah/plans.db"


@dataclass
class ListConfig:
    debounce_seconds: float = 0.3
    copy_feedback_seconds: float = 2.0
    cta_threshold: int = 5


@dataclass
class CategoriesConfig:
    keywords: dict[str, list[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CATEGORY_KEYWORDS.items()}
    )
    tags: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TAG_CATEGORIES))

    def categorizer(self):
        """Return a ``(name, source_category) -> category`` function for these tables."""
        return functools.partial(detect_category, keywords=self.keywords, tags=self.tags)


@dataclass
class EmailConfig:
    subject: str = EMAIL_SUBJECT
    footer: str = EMAIL_FOOTER


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class ShoppingConfig:
    shopping: ListConfig = field(default_factory=ListConfig)
    categories: CategoriesConfig = field(default_factory=CategoriesConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def load_config(path: str | Path | None = None) -> ShoppingConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    ``HANNAH_DB_PATH`` and ``HANNAH_DEBOUNCE_SECONDS`` override the file.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    shp = raw.get("shopping", {})
    cat = raw.get("categories", {})
    eml = raw.get("email", {})
    dbs = raw.get("database", {})

    # Custom keywords extend the defaults; custom tags override them
    keywords = merge_keywords(cat.get("keywords", {}))
    tags = merge_tags(cat.get("tags", {}))

    debounce = shp.get("debounce_seconds", 0.3)
    env_debounce = os.environ.get("HANNAH_DEBOUNCE_SECONDS", "")
    if env_debounce:
        debounce = float(env_debounce)

    db_path = os.environ.get("HANNAH_DB_PATH", "") or dbs.get("path", DEFAULT_DB_PATH)

    return ShoppingConfig(
        shopping=ListConfig(
            debounce_seconds=float(debounce),
            copy_feedback_seconds=float(shp.get("copy_feedback_seconds", 2.0)),
            cta_threshold=int(shp.get("cta_threshold", 5)),
        ),
        categories=CategoriesConfig(keywords=keywords, tags=tags),
        email=EmailConfig(
            subject=eml.get("subject", EMAIL_SUBJECT),
            footer=eml.get("footer", EMAIL_FOOTER),
        ),
        database=DatabaseConfig(path=db_path),
    )
