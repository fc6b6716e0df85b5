"""
Result types returned by the prompt chain stages.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from support_chain.models.category import Category


@dataclass(frozen=True)
class ExtractionResult:
    """
    Fields found in the query for the chosen category, and the ones still missing.

    `found` only holds schedule fields; a value may be None for fields that are
    considered present without a captured value (username_or_email).
    `missing` keeps the schedule order.
    """
    found: Dict[str, Optional[str]] = field(default_factory=dict)
    missing: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"found": dict(self.found), "missing": list(self.missing)}


class PipelineResult(NamedTuple):
    """Ordered output of one prompt chain run."""
    intent_summary: str
    ranked_categories: List[Category]
    chosen_category: Category
    extraction: ExtractionResult
    response: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "intent_summary": self.intent_summary,
            "ranked_categories": [c.value for c in self.ranked_categories],
            "chosen_category": self.chosen_category.value,
            "extraction": self.extraction.to_dict(),
            "response": self.response,
        }
