"""
Category Model - Canonical support-intent categories and their catalog profile.

This module defines the closed set of categories a support query can be
routed to, and the per-category data (lexicon, required fields, reply
template) that the pipeline stages look up by category.

Responsibilities:
- Define the allowed categories (enum, in ranking tie-break order)
- Define the shape of a category's catalog entry
- Enforce structural constraints via validation
- NO matching logic
- NO file access
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """
    Support-intent category a query is routed to.

    Member order is significant: equal keyword scores are ranked in this order.
    """
    ACCOUNT_OPENING = "Account Opening"
    BILLING_ISSUE = "Billing Issue"
    ACCOUNT_ACCESS = "Account Access"
    TRANSACTION_INQUIRY = "Transaction Inquiry"
    CARD_SERVICES = "Card Services"
    ACCOUNT_STATEMENT = "Account Statement"
    LOAN_INQUIRY = "Loan Inquiry"
    GENERAL_INFORMATION = "General Information"


DEFAULT_CATEGORY = Category.GENERAL_INFORMATION


class ResponseTemplate(BaseModel):
    """
    Reply wording for one category.

    `request` is used while required fields are missing and may contain a
    `{missing}` placeholder; `confirmation` is used once nothing is missing.
    """
    greeting: str = Field(..., min_length=1, description="Opening sentence of the reply")
    request: str = Field(..., min_length=1, description="Request for the missing fields")
    confirmation: str = Field(..., min_length=1, description="Next step when nothing is missing")

    model_config = ConfigDict(extra="forbid", frozen=True)


class CategoryProfile(BaseModel):
    """
    Everything the pipeline knows about one category.

    Keywords and required fields are tuples so a loaded profile cannot be
    mutated after process start.
    """
    category: Category
    keywords: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Literal phrases scored case-insensitively against the query"
    )
    required_fields: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Fields needed to service the request, in the order they are asked for"
    )
    template: ResponseTemplate

    @field_validator("keywords", "required_fields")
    @classmethod
    def no_blank_entries(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject empty strings; an empty keyword would match every query."""
        for entry in value:
            if not entry or not entry.strip():
                raise ValueError("entries must be non-empty strings")
        return value

    model_config = ConfigDict(extra="forbid", frozen=True)
