# support_chain/services/intent_summarizer.py
"""
Intent Summarizer - One-sentence paraphrase of what the customer wants.

Ordered trigger phrases are checked against the lowercased query and joined
into "Customer intends to ...". The first banking object named in the query is
appended as written. Queries with no trigger are quoted back.
"""

import logging
import re

logger = logging.getLogger(__name__)

# =============================================================================
# INTENT TRIGGERS
# =============================================================================

# Checked in order against the lowercased query; each fires at most once.
INTENT_TRIGGERS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"disput|unauthoriz|fraud|chargeback"),
     "dispute a potentially fraudulent or unauthorized transaction"),
    (re.compile(r"open account|create account|sign up|register|new account"),
     "open a new account"),
    (re.compile(r"password|forgot|reset|locked|can't access|cannot access|login|log in|sign in"),
     "regain account access or reset credentials"),
    (re.compile(r"bill|billing|invoice|overcharged|refund|fee"),
     "report a billing or charge issue"),
    (re.compile(r"statement|monthly statement|e-statement"),
     "request or enquire about account statements"),
    (re.compile(r"loan|mortgage|refinance|interest rate"),
     "inquire about loans or financing options"),
    (re.compile(r"card|lost card|stolen|activate card|replace card|block card"),
     "manage card services (lost/stolen/replace/activate)"),
)

OBJECT_RE = re.compile(
    r"\b(transaction|card|account|statement|loan|bill|payment|password|login)\b",
    re.IGNORECASE,
)

# =============================================================================
# SUMMARIZER
# =============================================================================

def summarize_intent(query: str) -> str:
    """
    Paraphrase what the customer wants in one sentence.

    Never fails: a query with no recognised trigger is quoted back verbatim.
    """
    lowered = (query or "").lower()

    verbs = [phrase for pattern, phrase in INTENT_TRIGGERS if pattern.search(lowered)]

    if not verbs:
        logger.debug("No intent trigger matched, quoting query")
        return f'Customer asks: "{(query or "").strip()}"'

    summary = f"Customer intends to {' and '.join(verbs)}."

    # The object is reported as the customer wrote it.
    match = OBJECT_RE.search(query)
    if match:
        summary += f" Mentioned: {match.group(0)}."

    return summary
