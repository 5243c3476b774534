"""
Admin API

Operator surface served on its own port: browse and select sessions,
read any session's orders and view drink popularity.

Endpoints:
    - GET  /api/sessions: All sessions and the selected one
    - POST /api/session/create: Create (or reuse) a session and select it
    - POST /api/session/switch: Select an existing session
    - GET  /api/orders?sessionName=: Orders of a named or the selected session
    - GET  /api/popular: Drink popularity
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query

from torc.core.config import get_settings
from torc.http import register_error_handlers
from torc.schemas import (
    ErrorResponse,
    PopularityResponse,
    SessionListResponse,
    SessionOrdersResponse,
    SessionRequest,
    SessionResponse,
)
from torc.services import OrderService, get_order_service

settings = get_settings()
logger = logging.getLogger(__name__)

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(prefix="/api", tags=["Admin"])


@router.get("/sessions", response_model=SessionListResponse)
def list_sessions(service: OrderService = Depends(get_order_service)) -> SessionListResponse:
    return SessionListResponse(
        sessions=service.list_sessions(),
        selected_session=service.active_session(),
    )


@router.post("/session/create", response_model=SessionResponse, responses=ERRORS)
def create_session(
    body: SessionRequest,
    service: OrderService = Depends(get_order_service),
) -> SessionResponse:
    name = service.create_session(body.session_name)
    return SessionResponse(session_name=name, status="created")


@router.post("/session/switch", response_model=SessionResponse, responses=ERRORS)
def switch_session(
    body: SessionRequest,
    service: OrderService = Depends(get_order_service),
) -> SessionResponse:
    name = service.switch_session(body.session_name)
    return SessionResponse(session_name=name, status="switched")


@router.get("/orders", response_model=SessionOrdersResponse, responses=ERRORS)
def list_orders(
    session_name: Optional[str] = Query(None, alias="sessionName"),
    service: OrderService = Depends(get_order_service),
) -> SessionOrdersResponse:
    """Orders of ``sessionName``, falling back to the selected session."""
    name = (session_name or "").strip() or service.active_session()
    orders = service.list_orders(name or None)
    return SessionOrdersResponse(session_name=name, orders=orders)


@router.get("/popular", response_model=PopularityResponse, responses=ERRORS)
def popular_drinks(service: OrderService = Depends(get_order_service)) -> PopularityResponse:
    return PopularityResponse(items=service.popularity_snapshot())


admin_app = FastAPI(
    title=f"{settings.app_name} Admin",
    version=settings.app_version,
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)
admin_app.include_router(router)
register_error_handlers(admin_app)
