from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class InboundFrame(BaseModel):
    file: str
    function: Optional[str] = None
    line: Optional[int] = None


class InboundCommit(BaseModel):
    id: str
    timestamp: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    risk_score: Optional[float] = None


class InboundChangeWindow(BaseModel):
    deploy_time: str
    commits: List[InboundCommit] = Field(default_factory=list)


class InboundCorrelationHints(BaseModel):
    critical_paths: List[str] = Field(default_factory=list)
    low_priority_paths: List[str] = Field(default_factory=list)


class InboundEvent(BaseModel):
    model_config = {"extra": "ignore"}

    source: str
    service: str
    environment: str
    timestamp: str
    severity: str
    exception_type: str
    message: str
    stacktrace: List[InboundFrame]
    tags: Dict[str, str] = Field(default_factory=dict)
    links: Dict[str, str] = Field(default_factory=dict)
    change_window: Optional[InboundChangeWindow] = None
    correlation_hints: Optional[InboundCorrelationHints] = None
    api_route: Optional[str] = None
    request_url: Optional[str] = None
