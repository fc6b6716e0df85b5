"""
Prompt Chain Errors - Centralized failure taxonomy.

The pipeline stages are total over string input and never raise.
These errors cover the two places where something can be wrong:
- the caller handed the entry point something that is not a query string
- the catalog loaded at process start is missing or malformed

Each error has:
- ERROR_CODE: Unique identifier for logging/monitoring
- message: Human-readable description
- to_dict(): Structured output for API responses
"""

from enum import Enum
from typing import Any, Dict, Optional


class ChainErrorCode(str, Enum):
    """Canonical error codes for prompt chain failures."""
    # Boundary errors
    INVALID_INPUT_TYPE = "INVALID_INPUT_TYPE"

    # Configuration errors
    INVALID_CATALOG = "INVALID_CATALOG"


class PromptChainError(Exception):
    """
    Base class for all prompt chain errors.

    These are HARD FAILURES - nothing is returned to the caller.
    """

    ERROR_CODE: ChainErrorCode = None  # Override in subclasses

    def __init__(
        self,
        message: str,
        value: Any = None,
        metadata: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize prompt chain error.

        Args:
            message: Human-readable error message
            value: The offending value, if any
            metadata: Additional context for debugging
        """
        self.message = message
        self.value = value
        self.metadata = metadata or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to structured dict for API responses.

        Returns:
            {
                "error_code": "INVALID_INPUT_TYPE",
                "error_type": "InvalidInputTypeError",
                "message": "query must be a string, got int",
                "value": "42",
                "metadata": {...}
            }
        """
        return {
            "error_code": self.ERROR_CODE.value if self.ERROR_CODE else "CHAIN_ERROR",
            "error_type": self.__class__.__name__,
            "message": self.message,
            "value": None if self.value is None else repr(self.value),
            "metadata": self.metadata
        }


# ============================================================================
# BOUNDARY ERRORS
# ============================================================================

class InvalidInputTypeError(PromptChainError, TypeError):
    """
    ERROR_CODE: INVALID_INPUT_TYPE

    Raised by the entry point when the query is not a string.
    No pipeline stage has run when this is raised.

    Example:
        run_prompt_chain(42), run_prompt_chain(None), run_prompt_chain({"q": "hi"})
    """
    ERROR_CODE = ChainErrorCode.INVALID_INPUT_TYPE

    def __init__(self, value: Any):
        super().__init__(
            message=f"query must be a string, got {type(value).__name__}",
            value=value,
            metadata={"received_type": type(value).__name__}
        )


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class CatalogError(PromptChainError):
    """
    ERROR_CODE: INVALID_CATALOG

    Raised when the category catalog cannot be loaded.

    Example:
        - Catalog file not found
        - A category has no keywords or no required fields
        - A category is missing or unknown
    """
    ERROR_CODE = ChainErrorCode.INVALID_CATALOG

    def __init__(self, message: str, catalog_path: Optional[str] = None):
        super().__init__(
            message=f"Invalid catalog: {message}",
            metadata={"catalog_path": catalog_path}
        )


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def format_error_response(error: PromptChainError) -> Dict[str, Any]:
    """
    Format a PromptChainError for API response.

    Example:
        {
            "success": false,
            "error": {
                "error_code": "INVALID_INPUT_TYPE",
                "error_type": "InvalidInputTypeError",
                "message": "query must be a string, got int",
                ...
            }
        }
    """
    return {
        "success": False,
        "error": error.to_dict()
    }
