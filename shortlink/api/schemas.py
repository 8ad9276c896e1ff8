"""
API Request and Response Schemas

This module defines the Pydantic models for the /shorten endpoint.
Wire names are camelCase (url, shortCode, success, shortUrl); Python
attributes are snake_case.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    # Optional here so a missing url is reported as "URL is required"
    # rather than a schema error
    url: Optional[str] = Field(default=None, description="The long URL to shorten")
    short_code: Optional[str] = Field(
        default=None,
        alias="shortCode",
        description="Custom short code; generated when omitted or empty"
    )


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True)
    short_url: str = Field(..., alias="shortUrl", description="The complete short URL")
