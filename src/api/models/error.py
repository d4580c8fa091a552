"""
Standard error response models.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Error code, e.g. validation_error or store_error")
    message: str = Field(..., description="Human-readable error message")
    request_id: Optional[str] = Field(None, description="Request ID for tracing")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Offending fields, error id or validation errors"
    )
