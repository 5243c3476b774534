"""
Process entry point: runs the public and admin APIs side by side.

    torc-server            # public on :8080, admin on :9090

Both applications share one OrderService (and so one active session),
which is why they run in a single process. The admin API runs on a
daemon thread; a failure there is logged and the public API keeps
serving.
"""

import logging
import threading

import uvicorn

from torc.core.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


def run_admin_server() -> None:
    settings = get_settings()
    config = uvicorn.Config(
        "torc.admin:admin_app",
        host=settings.admin_host,
        port=settings.admin_port,
        log_config=None,
    )
    try:
        uvicorn.Server(config).run()
    except Exception:
        logger.exception("Admin server failed to start")


def main() -> None:
    setup_logging()
    settings = get_settings()

    logger.info(f"Admin API on {settings.admin_host}:{settings.admin_port}")
    threading.Thread(target=run_admin_server, name="admin-api", daemon=True).start()

    logger.info(f"Public API on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "torc.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
