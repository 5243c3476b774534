"""
Pydantic Schemas for Request/Response Validation

Request bodies are deliberately lenient: missing or blank fields reach the
order service, which trims and validates them and raises ValidationError
with a readable reason.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from torc.models import Order, PopularityItem


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class SessionRequest(BaseModel):
    """Body of session create/switch calls."""
    model_config = ConfigDict(populate_by_name=True)

    session_name: str = Field(default="", alias="sessionName", examples=["friday-shift"])


class OrderCreate(BaseModel):
    """Request schema for submitting a drink order."""
    model_config = ConfigDict(populate_by_name=True)

    drink: str = Field(default="", examples=["Latte"])
    customer_name: str = Field(default="", alias="customerName", examples=["Ada"])
    instructions: str = Field(default="", examples=["oat milk"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class MenuResponse(BaseModel):
    menu: List[str]


class SessionResponse(BaseModel):
    """Response after creating or switching a session."""
    model_config = ConfigDict(populate_by_name=True)

    session_name: str = Field(..., alias="sessionName")
    status: str


class CurrentSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_name: str = Field(..., alias="sessionName")


class SessionListResponse(BaseModel):
    """Admin view of all sessions and the active one."""
    model_config = ConfigDict(populate_by_name=True)

    sessions: List[str]
    selected_session: str = Field(..., alias="selectedSession")


class OrderListResponse(BaseModel):
    orders: List[Order]


class SessionOrdersResponse(BaseModel):
    """Admin order listing, tagged with the session it was read from."""
    model_config = ConfigDict(populate_by_name=True)

    session_name: str = Field(..., alias="sessionName")
    orders: List[Order]


class PopularityResponse(BaseModel):
    """Drink popularity, sorted by count desc then drink name asc."""
    items: List[PopularityItem]


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    model_config = ConfigDict(populate_by_name=True)

    status: str
    version: str
    active_session: str = Field(..., alias="activeSession")
    sessions_root: str = Field(..., alias="sessionsRoot")
    timestamp: datetime
