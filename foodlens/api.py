# -*- coding: utf-8 -*-
"""
FoodLens API

Food photo analysis and name-based nutrition lookup backed by Gemini.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .analysis.api import router as analysis_router
from .config import settings

app = FastAPI(
    title="FoodLens",
    description="AI food detector: photo analysis and food search",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run("foodlens.api:app", host=settings.host, port=settings.port, reload=False)
