"""
Shared Schemas
"""
from typing import Dict, Optional

from pydantic import BaseModel


class StatusMessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    kind: str
    message: str
    reason: Optional[str] = None
    fields: Optional[Dict[str, str]] = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""

    error: ErrorDetail
