"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from pdf_unlock_bot.adapters.inbound.http.routes import router
from pdf_unlock_bot.infrastructure.config.settings import settings
from pdf_unlock_bot.infrastructure.logging.logger import logger
from pdf_unlock_bot.infrastructure.wiring.container import container

# Load environment variables from .env file
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register update delivery on startup; release temporary files on shutdown."""
    settings.validate_runtime()

    await container.cleanup.sweep_stale(settings.stale_file_max_age_seconds)

    if settings.use_webhook:
        webhook_url = f"{settings.webhook_url.rstrip('/')}{settings.webhook_path}"
        await container.transport.set_webhook(webhook_url, settings.webhook_secret_token)
        logger.info(
            "Bot running via webhook. Listening for updates at %s/bot<token>",
            settings.webhook_url.rstrip("/"),
        )
    else:
        logger.warning("WEBHOOK_URL not provided. Bot running in polling mode.")
        container.poller.start()

    logger.info("HTTP server listening on port %s", settings.port)
    try:
        yield
    finally:
        logger.info("Shutting down gracefully...")
        await container.poller.stop()
        released = await container.cleanup.release_sessions()
        logger.info("Released %d session file(s)", released)
        await container.transport.close()
        await container.idempotency_store.close()


app = FastAPI(
    title="PDF Unlock Bot",
    description="Telegram bot that removes passwords from PDF files",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(router)


def run() -> None:
    """Run the bot behind uvicorn."""
    settings.validate_runtime()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
