"""
Health check route reporting engine liveness and the size of the issue-group table.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.routes.common import get_engine
from api.routes.exception import handle_exceptions
from engine.analyzer import Engine

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health(engine: Engine = Depends(get_engine)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "groups": len(engine),
    }
