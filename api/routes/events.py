"""
Event ingestion route: runs one inbound event through the engine and returns the incident summary when a trigger fires.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse

from api.routes.common import get_engine
from api.routes.exception import handle_exceptions
from engine.analyzer import Engine
from engine.errors import ParseError

router = APIRouter(tags=["Events"])


@router.post(
    "/events",
    summary="Ingest an error/alert event and return an incident summary if one is triggered",
    responses={204: {"description": "Event recorded, no incident triggered"}},
)
@handle_exceptions
async def ingest_event(
    payload: Any = Body(...),
    engine: Engine = Depends(get_engine),
) -> Response:
    if not isinstance(payload, dict):
        raise ParseError("json parse: expected a JSON object")
    # no awaits between here and the return: calls into the engine stay serialized
    summary = engine.process(payload)
    if summary is None:
        return Response(status_code=204)
    return JSONResponse(content=summary.model_dump(mode="json", exclude_none=True))
