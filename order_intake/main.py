"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from order_intake.core.logging import setup_logging
from order_intake.db.database import init_db
from order_intake.api import health, orders
from order_intake.api.webhooks import whatsapp


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    yield


app = FastAPI(
    title="Order Intake",
    description="Parses WhatsApp order summaries into structured orders",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(whatsapp.router, prefix="/webhooks", tags=["webhooks"])
app.include_router(orders.router, tags=["orders"])


@app.get("/")
async def root():
    """Service banner."""
    return {
        "message": "Order Intake API",
        "version": "0.1.0",
    }


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from order_intake.core.config import settings

    uvicorn.run(app, host=settings.host, port=settings.port)
