"""
Category Selector - Settle on one category from the ranked candidates.

The top-ranked candidate wins. An empty ranking falls back to the default
category, so the pipeline always has a category to act on.
"""

import logging
from typing import Optional, Sequence

from support_chain.models.category import Category, DEFAULT_CATEGORY

logger = logging.getLogger(__name__)


def choose_category(ranked: Optional[Sequence[Category]], query: str = "") -> Category:
    """
    Pick the category to act on: the top-ranked candidate.

    `query` is accepted so the selector can disambiguate between close
    candidates later; it does not influence the choice today.
    An empty ranking yields the default category.
    """
    if not ranked:
        logger.debug("No candidate categories, using default")
        return DEFAULT_CATEGORY
    return Category(ranked[0])
