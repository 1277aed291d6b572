"""
Response models for incident summaries, issue group snapshots and error records.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from engine.enums import Severity, TriggerReason
from engine.errors import EngineError, ValidationError


class StackFrameOutput(BaseModel):

    file: str
    function: str = ""
    line: Optional[int] = None


class IssueGroupSummary(BaseModel):

    fingerprint: str
    exception_type: str
    message: str
    count: int
    spike_factor: float


class SuspectedCause(BaseModel):

    commit_id: str
    score: float
    evidence: List[str] = Field(default_factory=list)


class IncidentSummary(BaseModel):

    incident_id: str
    title: str
    service: str
    environment: str
    severity: Severity
    priority_score: int = Field(ge=0, le=100)
    trigger: TriggerReason
    start_time: str
    last_seen: str
    peak_time: Optional[str] = None
    top_symptoms: List[IssueGroupSummary] = Field(default_factory=list)
    suspected_causes: List[SuspectedCause] = Field(default_factory=list)
    recommended_first_actions: List[str] = Field(default_factory=list)
    stacktrace: List[StackFrameOutput] = Field(default_factory=list)
    links: Dict[str, str] = Field(default_factory=dict)
    api_route: Optional[str] = None
    request_url: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class GroupSnapshot(BaseModel):

    fingerprint: str
    exception_type: str
    message: str
    service: str
    environment: str
    total_count: int
    first_seen: str
    last_seen: str
    baseline: float
    quiet_minutes: int
    peak_time: Optional[str] = None
    buckets: Dict[str, int] = Field(default_factory=dict)


class ErrorOutput(BaseModel):

    error: bool = True
    message: str
    field: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


def to_error_output(exc: Exception) -> ErrorOutput:
    if isinstance(exc, ValidationError):
        return ErrorOutput(message=exc.reason, field=exc.field)
    if isinstance(exc, EngineError):
        return ErrorOutput(message=exc.reason)
    return ErrorOutput(message=f"internal: {exc}")
