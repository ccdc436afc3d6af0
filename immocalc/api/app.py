"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from immocalc.api.routes import projection
from immocalc.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="immocalc",
    description="Real estate investment projection engine",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projection.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
