"""
Shared utilities and dependencies for API route modules.

The engine instance lives on ``app.state`` and is handed to route handlers
through :func:`get_engine`, so handlers never reach for a module-level
singleton and tests can pass their own engine directly.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from engine.analyzer import Engine


def get_engine(request: Request) -> Engine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="engine not initialised")
    return engine
