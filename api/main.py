# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-01-31
# Description: main.py
# -----------------------------------------------------------------------------
import logging
import os

from fastapi import FastAPI

from api.routers import chat, health, records

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="Registry RAG API")
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(records.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("REGISTRY_API_HOST", "127.0.0.1"),
        port=int(os.getenv("REGISTRY_API_PORT", "8000")),
    )
