"""
Listing API — Application Package
=================================

What:  Marketplace listing resource served over HTTP as JSON.
How:   Layered the same way throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Listing, Photo)      │  ← Shaping, checks, uploads
    ├─────────────────────────────────────┤
    │  Models & Schemas │ Object Storage  │  ← SQLAlchemy + Pydantic │ S3 / disk
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
