"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and
translates failures into responses:

* :class:`engine.errors.EngineError` (rejected input) becomes a ``422``
  carrying the structured error record ``{error, message, field?}``.
* :class:`fastapi.HTTPException` is propagated untouched.
* Anything else becomes an ``HTTPException(status_code=500)``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from api.responses import to_error_output
from engine.errors import EngineError

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def _rejected(exc: EngineError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=to_error_output(exc).model_dump(exclude_none=True),
    )


def handle_exceptions(func: F) -> F:
    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except EngineError as exc:
                return _rejected(exc)
            except Exception as exc:
                log.exception("Unhandled error in %s", func.__name__)
                raise HTTPException(status_code=500, detail=str(exc)) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except EngineError as exc:
            return _rejected(exc)
        except Exception as exc:
            log.exception("Unhandled error in %s", func.__name__)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return cast(F, sync_wrapper)
