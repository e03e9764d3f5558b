"""
Entry point for the Stratum Analysis Engine API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from config import SERVICE_VERSION, settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    log.info(
        "Stratum Analysis Engine starting (max_concurrent_analyses=%d, timeout=%ss)",
        settings.max_concurrent_analyses,
        settings.analysis_timeout_seconds,
    )
    yield
    log.info("Stratum Analysis Engine stopped")


app = FastAPI(
    title="Stratum Analysis Engine",
    description="Clustering, forecasting, scenario simulation and causal reasoning over numeric observations.",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        access_log=True,
    )
