# airbrb_client/main.py

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from airbrb_client.config import ALLOWED_ORIGINS
from airbrb_client.logging_config import setup_logging
from airbrb_client.middleware import RequestIDMiddleware
from airbrb_client.routes.health import router as health_router
from airbrb_client.routes.metrics import router as metrics_router
from airbrb_client.routes.notifications import router as notifications_router
from airbrb_client.routes.session import router as session_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="AirBrB Client",
    description="Local session, booking reconciliation and notification inbox for AirBrB",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(session_router, tags=["Session"])
app.include_router(notifications_router, tags=["Notifications"])


@app.on_event("startup")
def startup_event() -> None:
    """Open client storage and resume a stored session."""
    from airbrb_client.db.engine import engine
    from airbrb_client.db.store import KeyValueStore
    from airbrb_client.services.client import AirbrbClient

    logger.info("AirBrB client starting up...")

    store = KeyValueStore(engine)
    store.create_tables()
    app.state.client = AirbrbClient(store)
    app.state.client.start()

    logger.info("AirBrB client initialized")


@app.on_event("shutdown")
def shutdown_event() -> None:
    client = getattr(app.state, "client", None)
    if client is not None:
        client.close()


def run() -> None:
    uvicorn.run("airbrb_client.main:app", host="127.0.0.1", port=8000)


if __name__ == "__main__":
    run()
