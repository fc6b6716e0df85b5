# support_chain/services/field_extractor.py
"""
Field Extractor - Best-effort structured field extraction.

Two passes:
1. Run every pattern matcher against the raw query to fill a scratch pool
   (amount, date, card_last4, ...). The pool is not category-aware.
2. Walk the chosen category's required-field schedule and copy each field's
   value out of the pool through FIELD_SOURCES.

Anything not matched is reported missing. Nothing here raises on string input.
"""

import logging
import re
from typing import Dict, List, Optional

from support_chain.models.category import Category
from support_chain.models.results import ExtractionResult
from support_chain.services.catalog_manager import CatalogManager, get_catalog

logger = logging.getLogger(__name__)

# =============================================================================
# PATTERN MATCHERS
# =============================================================================

# Grouped thousands first ("1,250.00"), then a plain run ("4321", "12.50").
AMOUNT_RE = re.compile(
    r"\$?\s?([0-9]{1,3}(?:[.,][0-9]{3})+(?:[.,][0-9]{2})?|[0-9]+(?:[.,][0-9]{2})?)(?![0-9])"
)
DATE_RE = re.compile(
    r"\b(\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{2,4}|\b(?:today|yesterday|tomorrow)\b)\b",
    re.IGNORECASE,
)
CARD_LAST4_RE = re.compile(r"(?<![0-9])([0-9]{4})(?![0-9])")
# Label is case-insensitive; the id is upper-case letters, digits and hyphens, never led by a hyphen.
TRANSACTION_ID_RE = re.compile(r"\b(?i:txn|transaction|ref|refno|id)[:#\s]*([A-Z0-9][A-Z0-9-]{3,29})")
EMAIL_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
PHONE_RE = re.compile(r"(\+?\d[\d ()-]{6,}\d)")
FULL_NAME_RE = re.compile(r"([A-Z][a-z]+\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
ACCOUNT_TYPE_RE = re.compile(r"(savings|checking|current|business|personal|credit)", re.IGNORECASE)
MERCHANT_RE = re.compile(r"\b(?:at|from)\s+([A-Za-z0-9 &'-]{3,30})")
WORD_TOKEN_RE = re.compile(r"\b[a-z0-9._%+-]+\b", re.IGNORECASE)

# Applied in order against the raw query; a later match overwrites an earlier one.
ISSUE_TYPE_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"lost|stolen"), "lost_or_stolen"),
    (re.compile(r"activate|activation"), "activate_card"),
    (re.compile(r"replace|new card|reissue"), "replace_card"),
    (re.compile(r"refund|overcharged|credit back"), "billing_dispute"),
)

SCRATCH_PATTERNS: dict[str, re.Pattern] = {
    "amount": AMOUNT_RE,
    "date": DATE_RE,
    "card_last4": CARD_LAST4_RE,
    "transaction_id": TRANSACTION_ID_RE,
    "email": EMAIL_RE,
    "phone": PHONE_RE,
    "full_name": FULL_NAME_RE,
    "account_type": ACCOUNT_TYPE_RE,
}

# =============================================================================
# SCHEDULE FIELD -> SCRATCH KEY
# =============================================================================

# Schedule fields absent from this map (id_type, loan_type, topic, ...) have no
# matcher and are always reported missing.
FIELD_SOURCES: dict[str, str] = {
    "amount": "amount",
    "requested_amount": "amount",
    "transaction_date": "date",
    "billing_date": "date",
    "reported_date": "date",
    "card_last4": "card_last4",
    "transaction_id": "transaction_id",
    "email_or_address": "email",
    "username_or_email": "email",
    "full_name": "full_name",
    "account_type": "account_type",
    "issue_type": "issue_type",
    "merchant": "merchant",
}

# Fields present in the schedule whenever the query has any word-shaped token,
# even if their scratch source is empty (value is then None).
LENIENT_FIELDS = frozenset({"username_or_email"})

# =============================================================================
# EXTRACTION
# =============================================================================

def _issue_type(query: str) -> Optional[str]:
    issue = None
    for pattern, value in ISSUE_TYPE_RULES:
        if pattern.search(query):
            issue = value
    return issue


def _merchant(query: str) -> Optional[str]:
    match = MERCHANT_RE.search(query)
    return match.group(1).strip() if match else None


def scan_fields(query: str, wants_merchant: bool = False) -> Dict[str, str]:
    """
    Run every pattern matcher and return the scratch pool.

    Only keys that matched are present. The merchant matcher is loose, so it
    only runs when the caller's schedule asks for a merchant.
    """
    scratch: Dict[str, str] = {}

    for key, pattern in SCRATCH_PATTERNS.items():
        match = pattern.search(query)
        if match:
            scratch[key] = match.group(1)

    issue = _issue_type(query)
    if issue:
        scratch["issue_type"] = issue

    if wants_merchant:
        merchant = _merchant(query)
        if merchant:
            scratch["merchant"] = merchant

    return scratch


def extract_fields(
    query: str,
    category: Category,
    catalog: Optional[CatalogManager] = None,
) -> ExtractionResult:
    """
    Extract the chosen category's required fields from the query.

    Args:
        query: Raw customer query
        category: Category chosen by the selector
        catalog: Catalog to read the schedule from (process catalog by default)

    Returns:
        ExtractionResult where found keys are a subset of the schedule and
        missing is the rest of the schedule, in schedule order.
    """
    catalog = catalog or get_catalog()
    schedule = catalog.required_fields(category)

    scratch = scan_fields(query, wants_merchant="merchant" in schedule)

    found: Dict[str, Optional[str]] = {}
    for field_name in schedule:
        source = FIELD_SOURCES.get(field_name)
        if source is None:
            continue

        value = scratch.get(source)
        if value is not None:
            found[field_name] = value
        elif field_name in LENIENT_FIELDS and WORD_TOKEN_RE.search(query):
            found[field_name] = None

    missing: List[str] = [f for f in schedule if f not in found]

    logger.debug(f"Extracted {sorted(found)} for {Category(category).value}, missing {missing}")
    return ExtractionResult(found=found, missing=missing)
