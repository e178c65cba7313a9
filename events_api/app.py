"""
FastAPI application entry point for the events backend.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from events_api.config import HOST, PORT, Settings, get_settings
from events_api.dependencies import build_event_store, build_mailer
from events_api.errors import register_error_handlers
from events_api.mailer import Mailer
from events_api.routes import router
from events_api.store import EventStore

logger = logging.getLogger(__name__)


def check_store_connection(store: EventStore) -> Optional[int]:
    """
    Count the events collection once and log the outcome. Never raises, so a
    failed check does not keep the server from starting.
    """
    try:
        count = store.count_events()
    except Exception:
        logger.exception("[firestore] Firestore connection failed")
        return None
    logger.info("[firestore] Firestore connected, events count: %d", count)
    return count


@asynccontextmanager
async def lifespan(app: FastAPI):
    await run_in_threadpool(check_store_connection, app.state.event_store)
    yield


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[EventStore] = None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Events Backend", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.authorized_emails = frozenset(settings.authorized_emails)
    app.state.event_store = store if store is not None else build_event_store(settings)
    app.state.mailer = mailer if mailer is not None else build_mailer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(router)
    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    app = create_app()
    logger.info("Server running on http://localhost:%d", PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
