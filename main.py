"""
Entry point for the Incident Correlation Engine API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI

from api.routes import router
from config import Settings, settings
from engine.analyzer import Engine

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    engine_config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.engine = Engine(engine_config)
        log.info(
            "Engine ready (spike_threshold=%.2f, ewma_alpha=%.2f, regression_quiet_minutes=%d)",
            engine_config.spike_threshold,
            engine_config.ewma_alpha,
            engine_config.regression_quiet_minutes,
        )
        try:
            yield
        finally:
            log.info("Engine shutting down with %d issue group(s)", len(app.state.engine))

    app = FastAPI(
        title="Incident Correlation Engine",
        description="Deterministic issue grouping, spike/regression detection and commit correlation.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(router, prefix="/api/v1")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
