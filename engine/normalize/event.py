"""
Validation and canonicalization of inbound events, the only place malformed input is rejected.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from api.requests import InboundChangeWindow, InboundCorrelationHints, InboundEvent
from config import DEFAULT_LOW_PRIORITY_PATHS
from engine.enums import Severity
from engine.errors import SchemaError, ValidationError
from engine.models import ChangeWindow, CommitInfo, CorrelationHints, Event, Frame
from engine.normalize.paths import normalize_path
from engine.normalize.timestamps import parse_rfc3339

_REQUIRED_TEXT_FIELDS = ("source", "service", "environment", "exception_type", "message")


def coerce_inbound(raw: Union[InboundEvent, Mapping[str, Any]]) -> InboundEvent:
    if isinstance(raw, InboundEvent):
        return raw
    try:
        return InboundEvent.model_validate(raw)
    except PydanticValidationError as exc:
        raise SchemaError(exc) from exc


def _timestamp(value: str, field: str) -> datetime:
    try:
        return parse_rfc3339(value)
    except ValueError as exc:
        raise ValidationError(field, f"invalid RFC3339: {exc}") from exc


def _risk_score(value: Optional[float]) -> Optional[float]:
    if value is None or not 0.0 <= value <= 100.0:
        return None
    return value


def _change_window(raw: InboundChangeWindow) -> ChangeWindow:
    deploy_time = _timestamp(raw.deploy_time, "change_window.deploy_time")
    commits = []
    for commit in raw.commits:
        ts = None
        if commit.timestamp is not None:
            ts = _timestamp(commit.timestamp, "change_window.commits[].timestamp")
        commits.append(
            CommitInfo(
                id=commit.id,
                timestamp=ts,
                files=tuple(normalize_path(f) for f in commit.files),
                risk_score=_risk_score(commit.risk_score),
            )
        )
    return ChangeWindow(deploy_time=deploy_time, commits=tuple(commits))


def _hints(raw: Optional[InboundCorrelationHints]) -> CorrelationHints:
    if raw is None:
        return CorrelationHints()
    low_priority = tuple(p.lower() for p in raw.low_priority_paths) or DEFAULT_LOW_PRIORITY_PATHS
    return CorrelationHints(
        critical_paths=tuple(p.lower() for p in raw.critical_paths),
        low_priority_paths=low_priority,
    )


def normalize(raw: Union[InboundEvent, Mapping[str, Any]]) -> Event:
    inbound = coerce_inbound(raw)

    timestamp = _timestamp(inbound.timestamp, "timestamp")

    severity = Severity.from_label(inbound.severity)
    if severity is None:
        raise ValidationError("severity", "expected warning|error|critical")

    for name in _REQUIRED_TEXT_FIELDS:
        if not getattr(inbound, name):
            raise ValidationError(name, "must not be empty")
    if not inbound.stacktrace:
        raise ValidationError("stacktrace", "must have at least one frame")

    frames = tuple(
        Frame(file=normalize_path(f.file), function=f.function or "")
        for f in inbound.stacktrace
    )
    change_window = _change_window(inbound.change_window) if inbound.change_window else None

    return Event(
        source=inbound.source.lower(),
        service=inbound.service.lower(),
        environment=inbound.environment.lower(),
        timestamp=timestamp,
        severity=severity,
        exception_type=inbound.exception_type,
        message=inbound.message,
        frames=frames,
        tags=dict(inbound.tags),
        links=dict(inbound.links),
        change_window=change_window,
        correlation_hints=_hints(inbound.correlation_hints),
        api_route=inbound.api_route,
        request_url=inbound.request_url,
    )
