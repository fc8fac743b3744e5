"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

Note: the shorten request is not declared as a FastAPI body model. Bad input
must produce `{"error": "invalid url"}` with status 200 rather than a 422,
so the endpoint reads the body itself (JSON or form-encoded).
"""

from pydantic import BaseModel, Field


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    original_url: str = Field(..., description="The original long URL")
    short_url: int = Field(..., description="The numeric short code")


class ErrorResponse(BaseModel):
    """Response model for rejected input and unknown codes."""
    error: str = Field(..., description="Human readable error message")
