"""
Category Scorer - Keyword-count ranking of candidate categories.

Each category scores one point per lexicon keyword found anywhere in the
query (case-insensitive literal match; repeated occurrences of the same
keyword still count once). Categories with no hits are dropped.

The ranking is never empty: a query that hits nothing is routed to the
default category.
"""

import logging
from typing import Dict, List, Optional

from support_chain.models.category import Category, DEFAULT_CATEGORY
from support_chain.services.catalog_manager import CatalogManager, get_catalog

logger = logging.getLogger(__name__)


def score_categories(query: str, catalog: Optional[CatalogManager] = None) -> Dict[Category, int]:
    """
    Count lexicon hits per category.

    Returns every category (zero scores included) in Category order.
    """
    catalog = catalog or get_catalog()
    scores: Dict[Category, int] = {category: 0 for category in Category}

    for category in catalog.profiles():
        scores[category] = sum(1 for pattern in catalog.keyword_patterns(category) if pattern.search(query))

    return scores


def rank_categories(query: str, catalog: Optional[CatalogManager] = None) -> List[Category]:
    """
    Categories with at least one hit, highest score first.

    Ties keep Category order (sorted() is stable and scores are built in
    that order).
    """
    scores = score_categories(query, catalog)

    ranked = [
        category
        for category, score in sorted(scores.items(), key=lambda item: item[1], reverse=True)
        if score > 0
    ]

    if not ranked:
        logger.debug("No keyword matched, falling back to default category")
        return [DEFAULT_CATEGORY]

    hits = {c.value: s for c, s in scores.items() if s}
    logger.debug(f"Category scores: {hits}")
    return ranked
