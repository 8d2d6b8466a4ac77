"""
Pydantic schema definitions for API payloads.

Schemas are kept separate from the stored MongoDB documents so the
wire representation can be validated independently of persistence.
"""
