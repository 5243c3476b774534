"""
FastAPI Application Entry Point

Public drink-ordering API used by the ordering UI.

Endpoints:
    - GET  /menu: Current drink menu
    - POST /session/create: Create (or reuse) a session and select it
    - POST /session/switch: Select an existing session
    - GET  /session/current: Currently selected session
    - POST /order: Submit an order to the selected session
    - GET  /orders: Orders of the selected session
    - GET  /popular: Drink popularity
    - GET  /health: System health check

Handlers are plain ``def`` functions: FastAPI runs each request on a
worker thread, and the ordering core is safe under that concurrency.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from torc.core.config import get_settings, setup_logging
from torc.http import register_error_handlers
from torc.models import Order
from torc.schemas import (
    CurrentSessionResponse,
    ErrorResponse,
    HealthResponse,
    MenuResponse,
    OrderCreate,
    OrderListResponse,
    PopularityResponse,
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


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup."""
    setup_logging()
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Data directory: {settings.data_path.resolve()}")
    logger.info(f"   Menu file: {settings.menu_path}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("   Active session: <none> (select one via /session/create)")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down public API")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Session-scoped drink ordering with live popularity stats.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# =============================================================================
# HEALTH & MENU
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(service: OrderService = Depends(get_order_service)) -> HealthResponse:
    """Report whether the sessions root is usable."""
    status = "operational"
    root = service.store.root
    if root.exists() and not root.is_dir():
        status = "degraded"
        logger.error(f"Sessions root {root} is not a directory")

    return HealthResponse(
        status=status,
        version=settings.app_version,
        active_session=service.active_session(),
        sessions_root=str(root),
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/menu", response_model=MenuResponse, tags=["Menu"])
def get_menu(service: OrderService = Depends(get_order_service)) -> MenuResponse:
    return MenuResponse(menu=service.current_menu())


# =============================================================================
# SESSION ENDPOINTS
# =============================================================================

@app.post("/session/create", response_model=SessionResponse, responses=ERRORS, tags=["Sessions"])
def create_session(
    body: SessionRequest,
    service: OrderService = Depends(get_order_service),
) -> SessionResponse:
    """Create a session (idempotent) and make it the active one."""
    name = service.create_session(body.session_name)
    return SessionResponse(session_name=name, status="created")


@app.post("/session/switch", response_model=SessionResponse, responses=ERRORS, tags=["Sessions"])
def switch_session(
    body: SessionRequest,
    service: OrderService = Depends(get_order_service),
) -> SessionResponse:
    name = service.switch_session(body.session_name)
    return SessionResponse(session_name=name, status="switched")


@app.get("/session/current", response_model=CurrentSessionResponse, tags=["Sessions"])
def current_session(
    service: OrderService = Depends(get_order_service),
) -> CurrentSessionResponse:
    return CurrentSessionResponse(session_name=service.active_session())


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@app.post(
    "/order",
    response_model=Order,
    status_code=201,
    responses=ERRORS,
    tags=["Orders"],
    summary="Submit Order",
)
def create_order(
    body: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """
    Submit a drink order to the active session.

    The order is written before the popularity count is updated; a failed
    count update is logged and does not fail the request.
    """
    return service.submit_order(body.drink, body.customer_name, body.instructions)


@app.get("/orders", response_model=OrderListResponse, responses=ERRORS, tags=["Orders"])
def list_orders(service: OrderService = Depends(get_order_service)) -> OrderListResponse:
    """Orders of the active session, in storage order."""
    return OrderListResponse(orders=service.list_orders())


@app.get("/popular", response_model=PopularityResponse, responses=ERRORS, tags=["Stats"])
def popular_drinks(service: OrderService = Depends(get_order_service)) -> PopularityResponse:
    return PopularityResponse(items=service.popularity_snapshot())
