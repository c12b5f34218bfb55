"""Minimal HTTP health endpoint served next to the bot."""

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from config import HEALTH_HOST, HEALTH_PORT

HEALTH_MESSAGE = "Movie Bot is running..."

app = FastAPI(title="Movie Trailer Bot", docs_url=None, redoc_url=None, openapi_url=None)


@app.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return HEALTH_MESSAGE


def build_server(host: str = HEALTH_HOST, port: int = HEALTH_PORT) -> uvicorn.Server:
    """Uvicorn server for the health app; caller awaits server.serve()."""
    config = uvicorn.Config(app=app, host=host, port=port, use_colors=False, log_level="info")
    return uvicorn.Server(config)
