"""
Catalog Manager for the support prompt chain.

Loads the category catalog (keyword lexicon, required-field schedule and reply
template per category) from YAML once, validates it, and serves it read-only.

Catalog Semantics:
- `name`: the Category value (e.g. 'Card Services'). Every Category appears exactly once.
- `keywords`: literal phrases used by the scorer.
- `required_fields`: schedule consumed by the field extractor.
- `template`: wording consumed by the response composer.
"""

import logging
import os
import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from support_chain.models.category import Category, CategoryProfile
from support_chain.services.chain_errors import CatalogError

load_dotenv()

# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "catalog" / "catalog.yaml"
CATALOG_PATH = Path(os.getenv("SUPPORT_CHAIN_CATALOG_PATH", str(DEFAULT_CATALOG_PATH)))

logger = logging.getLogger(__name__)


class CatalogManager:
    """
    Read-only view of the category catalog.

    Profiles are frozen pydantic models held in a MappingProxyType, so nothing
    handed out by the manager can be mutated by callers.

    Usage:
        catalog = CatalogManager("path/to/catalog.yaml")
        catalog.keywords(Category.CARD_SERVICES)
        catalog.required_fields(Category.LOAN_INQUIRY)
    """

    def __init__(self, catalog_path: str) -> None:
        self.catalog_path = Path(catalog_path)

        if not self.catalog_path.exists():
            raise CatalogError(
                f"Catalog file not found at {self.catalog_path}",
                catalog_path=str(self.catalog_path)
            )

        self._profiles: Mapping[Category, CategoryProfile] = self._build_profiles(self._load_catalog())
        self._keyword_patterns: Mapping[Category, Tuple[re.Pattern, ...]] = MappingProxyType({
            category: tuple(re.compile(re.escape(kw), re.IGNORECASE) for kw in profile.keywords)
            for category, profile in self._profiles.items()
        })
        logger.info(f"Loaded catalog with {len(self._profiles)} categories from {self.catalog_path}")

    def _load_catalog(self) -> Dict:
        """Load the catalog YAML file and check its top-level shape."""
        with open(self.catalog_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not isinstance(data.get('categories'), list):
            raise CatalogError("expected a top-level 'categories' list", catalog_path=str(self.catalog_path))

        return data

    def _build_profiles(self, data: Dict) -> Mapping[Category, CategoryProfile]:
        """
        Validate every entry into a CategoryProfile, keyed by Category.

        Profiles are stored in Category enumeration order regardless of the
        order they appear in the file.
        """
        by_category: Dict[Category, CategoryProfile] = {}

        for index, entry in enumerate(data['categories']):
            if not isinstance(entry, dict):
                raise CatalogError(f"categories[{index}] must be a mapping", catalog_path=str(self.catalog_path))

            name = entry.get('name')
            try:
                category = Category(name)
            except ValueError:
                raise CatalogError(f"unknown category '{name}'", catalog_path=str(self.catalog_path))

            if category in by_category:
                raise CatalogError(f"duplicate category '{name}'", catalog_path=str(self.catalog_path))

            fields = {k: v for k, v in entry.items() if k not in ('name', 'category')}
            try:
                by_category[category] = CategoryProfile(category=category, **fields)
            except ValidationError as e:
                first_error = e.errors()[0]
                field = ".".join(str(loc) for loc in first_error.get("loc", []))
                raise CatalogError(
                    f"{name}: {field}: {first_error.get('msg', 'invalid entry')}",
                    catalog_path=str(self.catalog_path)
                )

        missing = [c.value for c in Category if c not in by_category]
        if missing:
            raise CatalogError(f"missing categories: {missing}", catalog_path=str(self.catalog_path))

        return MappingProxyType({c: by_category[c] for c in Category})

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def profile(self, category: Category) -> CategoryProfile:
        return self._profiles[Category(category)]

    def keywords(self, category: Category) -> Tuple[str, ...]:
        return self.profile(category).keywords

    def keyword_patterns(self, category: Category) -> Tuple[re.Pattern, ...]:
        """Keywords compiled as case-insensitive literals, built once at load."""
        return self._keyword_patterns[Category(category)]

    def required_fields(self, category: Category) -> Tuple[str, ...]:
        return self.profile(category).required_fields

    def profiles(self) -> Mapping[Category, CategoryProfile]:
        """All profiles in Category order."""
        return self._profiles

    def list_categories(self) -> List[Dict]:
        """Catalog contents as plain dicts, for listing endpoints."""
        return [
            {
                "name": p.category.value,
                "keywords": list(p.keywords),
                "required_fields": list(p.required_fields),
            }
            for p in self._profiles.values()
        ]


# =============================================================================
# CATALOG SINGLETON (Loaded once)
# =============================================================================

_catalog: Optional[CatalogManager] = None


def get_catalog() -> CatalogManager:
    """
    Get or initialize the process-wide catalog manager.

    Catalog is loaded once and cached.
    """
    global _catalog
    if _catalog is None:
        _catalog = CatalogManager(str(CATALOG_PATH))
    return _catalog
