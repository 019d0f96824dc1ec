"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer to decouple the wire
representation from how records are persisted.
"""
