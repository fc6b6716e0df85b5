"""
Prompt Chain Orchestrator

RESPONSIBILITIES:
1. Receive query (reject non-strings before anything runs)
2. Summarize intent
3. Rank candidate categories
4. Choose one category
5. Extract the category's required fields
6. Compose the reply
7. Return every stage output as one ordered result

Every stage is a pure function of the query and the read-only catalog, so
repeated calls with the same query return equal results.
"""

import logging
import time
from typing import Any, Dict, Optional

from support_chain.models.results import PipelineResult
from support_chain.services.catalog_manager import CatalogManager, get_catalog
from support_chain.services.category_scorer import rank_categories
from support_chain.services.category_selector import choose_category
from support_chain.services.chain_errors import InvalidInputTypeError
from support_chain.services.field_extractor import extract_fields
from support_chain.services.intent_summarizer import summarize_intent
from support_chain.services.response_composer import compose_response


# =============================================================================
# LOGGING
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# PIPELINE STAGE ENUM
# =============================================================================

class PipelineStage:
    """
    Explicit stage names, used in log lines.
    """
    RECEIVED = "received"
    INTENT_SUMMARIZED = "intent_summarized"
    CATEGORIES_RANKED = "categories_ranked"
    CATEGORY_CHOSEN = "category_chosen"
    FIELDS_EXTRACTED = "fields_extracted"
    RESPONSE_COMPOSED = "response_composed"
    COMPLETED = "completed"


# =============================================================================
# ORCHESTRATOR - THE MAIN FUNCTION
# =============================================================================

def run_prompt_chain(query: str, catalog: Optional[CatalogManager] = None) -> PipelineResult:
    """
    Run a customer query through the complete prompt chain.

    Pipeline steps:
    1. Summarize intent (independent of 2)
    2. Rank categories by keyword hits
    3. Choose the top category
    4. Extract required fields for it
    5. Compose the reply from 4 and 1

    Args:
        query: Customer query string (passed as-is, no cleanup)
        catalog: Catalog to use (process catalog by default)

    Returns:
        PipelineResult(intent_summary, ranked_categories, chosen_category,
        extraction, response)

    Raises:
        InvalidInputTypeError: query is not a str
    """
    if not isinstance(query, str):
        logger.error(f"Rejected query of type {type(query).__name__}")
        raise InvalidInputTypeError(query)

    start_time = time.monotonic()
    catalog = catalog or get_catalog()

    logger.info(f"Pipeline {PipelineStage.RECEIVED}: '{query[:100]}'")

    # -------------------------------------------------------------------------
    # STEP 1: Summarize intent
    # -------------------------------------------------------------------------
    logger.debug("Step 1: Summarizing intent...")
    intent_summary = summarize_intent(query)
    logger.debug(f"Stage {PipelineStage.INTENT_SUMMARIZED}: {intent_summary}")

    # -------------------------------------------------------------------------
    # STEP 2: Rank categories
    # -------------------------------------------------------------------------
    logger.debug("Step 2: Ranking categories...")
    ranked = rank_categories(query, catalog)
    logger.debug(f"Stage {PipelineStage.CATEGORIES_RANKED}: {[c.value for c in ranked]}")

    # -------------------------------------------------------------------------
    # STEP 3: Choose category
    # -------------------------------------------------------------------------
    logger.debug("Step 3: Choosing category...")
    chosen = choose_category(ranked, query)
    logger.debug(f"Stage {PipelineStage.CATEGORY_CHOSEN}: {chosen.value}")

    # -------------------------------------------------------------------------
    # STEP 4: Extract fields
    # -------------------------------------------------------------------------
    logger.debug("Step 4: Extracting fields...")
    extraction = extract_fields(query, chosen, catalog)
    logger.debug(f"Stage {PipelineStage.FIELDS_EXTRACTED}: missing={extraction.missing}")

    # -------------------------------------------------------------------------
    # STEP 5: Compose response
    # -------------------------------------------------------------------------
    logger.debug("Step 5: Composing response...")
    response = compose_response(chosen, extraction, intent_summary, catalog)
    logger.debug(f"Stage {PipelineStage.RESPONSE_COMPOSED}: {len(response)} chars")

    duration_ms = int((time.monotonic() - start_time) * 1000)
    logger.info(
        f"Pipeline {PipelineStage.COMPLETED} in {duration_ms}ms: "
        f"category={chosen.value}, missing={len(extraction.missing)}"
    )

    return PipelineResult(
        intent_summary=intent_summary,
        ranked_categories=ranked,
        chosen_category=chosen,
        extraction=extraction,
        response=response,
    )


# =============================================================================
# PUBLIC API - SIMPLE DICT WRAPPER
# =============================================================================

def run_prompt_chain_dict(query: str) -> Dict[str, Any]:
    """
    Run the chain and return a JSON-serializable dict.

    Convenience wrapper for run_prompt_chain() used by the HTTP layer.
    """
    return run_prompt_chain(query).to_dict()
