"""
Read-only views over the engine's issue groups.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.responses import GroupSnapshot
from api.routes.common import get_engine
from api.routes.exception import handle_exceptions
from engine.analyzer import Engine

router = APIRouter(tags=["Groups"])


@router.get("/groups", summary="List issue groups ordered by fingerprint")
@handle_exceptions
async def list_groups(engine: Engine = Depends(get_engine)) -> List[GroupSnapshot]:
    return engine.groups()


@router.get("/groups/{fingerprint}", summary="Fetch a single issue group")
@handle_exceptions
async def get_group(fingerprint: str, engine: Engine = Depends(get_engine)) -> GroupSnapshot:
    group = engine.group(fingerprint)
    if group is None:
        raise HTTPException(status_code=404, detail=f"unknown fingerprint {fingerprint}")
    return group
