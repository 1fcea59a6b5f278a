"""
Mflix API — Application Package Initializer
============================================

What: Marks the `mflix_api` directory as a Python package.
Who:  Used by uvicorn (`mflix_api.main:app`), pytest, and the route modules.

Architecture Note:
    The backend is layered the same way for every collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← path params, status codes, envelopes
    ├─────────────────────────────────────┤
    │         Services (Data Access)      │  ← id parsing, one MongoDB call, not-found
    ├─────────────────────────────────────┤
    │           Schemas (Pydantic)        │  ← request bodies, response envelope
    ├─────────────────────────────────────┤
    │        Database (pymongo async)     │  ← client lifecycle, collection names
    └─────────────────────────────────────┘

    Collections served: movies, theaters, comments (MongoDB `sample_mflix`).
"""

__version__ = "1.0.0"
