"""
Pydantic schema definitions for API payloads.

Each resource defines the rule table for its request body as a
Pydantic model.  Schemas are separated from the storage layer so that
validation never depends on how rows are persisted.
"""
