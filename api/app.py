"""
Hashtree FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import APIError, api_error_handler, generic_error_handler, hashtree_error_handler
from api.routes import algorithms, health, proof, tree, verify
from core.schemas.errors import HashTreeException


# Configure logging from HASHTREE_LOG_LEVEL, defaulting to INFO
def _resolve_log_level() -> int:
    raw = os.getenv("HASHTREE_LOG_LEVEL")
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Hashtree API",
        description="""
HTTP API for building Merkle trees and checking inclusion proofs.

## Endpoints

- **POST /tree** - Build a padded tree and return its root
- **POST /proof** - Generate an inclusion proof for one leaf
- **POST /verify** - Verify an inclusion proof against a root
- **GET /algorithms** - List supported hash algorithms
- **GET /health** - Health check

## Tree Options

Every POST body accepts `algorithm`, `pad_strategy`, `combine_method`
and `commutative`. Omitted options fall back to the server configuration
(`hashtree.json` and `HASHTREE_*` environment variables).
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(HashTreeException, hashtree_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(algorithms.router)
    app.include_router(tree.router)
    app.include_router(proof.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
