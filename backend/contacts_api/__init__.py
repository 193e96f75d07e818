"""
Contacts API - Application Package
===================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, request parsing
    ├─────────────────────────────────────┤
    │   Services (validator, repository)  │  ← Ok / Err results
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic models
    ├─────────────────────────────────────┤
    │       Database (Persistence)        │  ← shared AsyncMongoClient
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
