"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer to decouple the API
representation of a hotel from the way it is persisted.
"""
