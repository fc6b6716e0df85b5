"""
Response Composer - Templated reply for the chosen category.

Reply layout:
    "{greeting} {request or confirmation} — Support Bot\n\n(Interpretation: {intent summary})"

The wording lives in the catalog next to the category's lexicon and schedule;
this module only decides which sentence applies and fills `{missing}`.
"""

import logging
from typing import Optional

from support_chain.models.category import Category
from support_chain.models.results import ExtractionResult
from support_chain.services.catalog_manager import CatalogManager, get_catalog

logger = logging.getLogger(__name__)

SIGNATURE = " — Support Bot"
INTERPRETATION_FOOTER = "\n\n(Interpretation: {summary})"


def compose_response(
    category: Category,
    extraction: ExtractionResult,
    intent_summary: str,
    catalog: Optional[CatalogManager] = None,
) -> str:
    """Render the reply; asks for missing fields if any, else confirms the next step."""
    catalog = catalog or get_catalog()
    template = catalog.profile(category).template

    missing = list(extraction.missing or [])
    if missing:
        body = template.request.replace("{missing}", ", ".join(missing))
    else:
        body = template.confirmation

    response = f"{template.greeting} {body}{SIGNATURE}"
    return response + INTERPRETATION_FOOTER.format(summary=intent_summary)
