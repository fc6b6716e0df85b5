"""
Support Chain FastAPI Application - Customer support query triage.

This is the HTTP entry point for the support prompt chain.
It delegates query processing to the chain orchestrator.

DESIGN PRINCIPLE:
- main.py is a THIN HTTP LAYER
- All business logic lives in chain_orchestrator
- main.py only handles: HTTP concerns, request validation, response formatting
"""

import logging
import colorlog
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from support_chain.services.chain_orchestrator import run_prompt_chain_dict
from support_chain.services.catalog_manager import get_catalog
from support_chain.services.chain_errors import PromptChainError, format_error_response

# Load environment variables
load_dotenv()

# =============================================================================
# CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Configure logging

def setup_global_color_logging():
    # Configure root logger
    logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    # Create console handler
    handler = logging.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(levelname)-8s%(reset)s %(name)s: %(message)s",
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red',
        }
    ))
    root_logger.addHandler(handler)

setup_global_color_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# LIFESPAN (Startup/Shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog on startup so a bad catalog fails fast."""
    logger.info("Starting Support Chain API...")

    catalog = get_catalog()
    logger.info(f"Catalog ready: {len(catalog.profiles())} categories")

    logger.info("Support Chain API started successfully")

    yield

    logger.info("Shutting down Support Chain API...")


# =============================================================================
# FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Support Chain API",
    description="Deterministic triage of customer support queries: intent, category, fields and reply",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class ChainRequest(BaseModel):
    """Request model for a customer query. Empty strings are valid queries."""
    query: str = Field(
        ...,
        max_length=5000,
        description="Customer support query",
        json_schema_extra={"example": "I lost my debit card ending 4321, please block it"}
    )

    model_config = ConfigDict(strict=True)


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "support-chain-api"}


@app.post(
    "/chain",
    tags=["Chain"],
    summary="Run the support prompt chain",
    description="Summarize intent, rank and choose a category, extract fields and compose a reply",
)
async def run_chain(request: ChainRequest):
    """
    Run a customer query through the prompt chain.

    Delegates all processing to the orchestrator.
    """
    logger.info(f"Received query: {request.query[:100]}")

    try:
        result = run_prompt_chain_dict(request.query)
    except PromptChainError as e:
        logger.warning(f"Prompt chain rejected request: {e}")
        return JSONResponse(
            content=format_error_response(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return JSONResponse(content=result)


@app.get("/catalog/categories", tags=["Catalog"])
async def list_categories():
    """List every category with its keywords and required fields."""
    return {"categories": get_catalog().list_categories()}


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))

    uvicorn.run(app, host=host, port=port)
