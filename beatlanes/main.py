"""FastAPI application - serves the analysis API."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beatlanes.api.songs import router as songs_router
from beatlanes.api.upload import router as upload_router
from beatlanes.api.websocket import router as ws_router

app = FastAPI(title="Beatlanes", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload_router, prefix="/api")
app.include_router(songs_router, prefix="/api")
app.include_router(ws_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    from beatlanes.config import settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    uvicorn.run(
        "beatlanes.main:app",
        host=settings.host,
        port=settings.port,
    )
