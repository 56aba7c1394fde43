"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

The shorten request takes the URL as a plain string: validation and
normalization belong to URLValidator so every rejection gets its own
error kind instead of a generic 422.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    url: str = Field(..., min_length=1, description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    short_code: str = Field(..., description="The generated short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The normalized original URL")


class URLInfoResponse(ShortenResponse):
    """Response model for short URL lookups."""
    created_at: datetime


class DomainMetricsItem(BaseModel):
    domain: str
    shorten_count: int


class TopDomainsResponse(BaseModel):
    """Response model for the domain ranking endpoint."""
    top_domains: List[DomainMetricsItem]
    limit: int


class ErrorDetail(BaseModel):
    """Body of the `detail` field of error responses."""
    error: str = Field(..., description="Stable machine readable error kind")
    message: str


class ErrorResponse(BaseModel):
    """Error response body, as raised through HTTPException."""
    detail: ErrorDetail
