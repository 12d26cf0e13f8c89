# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: main.py
# -----------------------------------------------------------------------------
import logging

from fastapi import FastAPI

from api.routers import chat, feedback, health, sources

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="Knowledge ChatBot API")
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(sources.router)
app.include_router(feedback.router)


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("KB_API_HOST", "127.0.0.1"),
        port=int(os.getenv("KB_API_PORT", "8000")),
        log_level="info",
        reload=False,
    )
