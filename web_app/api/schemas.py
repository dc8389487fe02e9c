"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    original_url: str = Field(..., description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"original_url": "https://example.com/very/long/path/to/resource?b=2&a=1"},
            ]
        }
    }


class URLRecordResponse(BaseModel):
    """A stored short URL record."""

    original_url: str = Field(..., description="The canonical original URL")
    short_url: str = Field(..., description="The complete short URL")
    expiry: datetime = Field(..., description="Time after which the link stops redirecting")
    click_count: int = Field(..., description="Number of successful redirects")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "original_url": "https://example.com/very/long/path?a=1&b=2",
                    "short_url": "http://tiny.io/r/3kTMd9",
                    "expiry": "2024-01-08T12:00:00Z",
                    "click_count": 0,
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: Optional[str] = Field(None, description="Error message")
