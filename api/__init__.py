"""
Hashtree HTTP API (FastAPI)

HTTP surface over the Merkle tree core:
- GET /health - Health check
- GET /algorithms - Supported hash algorithms
- POST /tree - Build a tree and return its root
- POST /proof - Generate an inclusion proof
- POST /verify - Verify an inclusion proof

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
