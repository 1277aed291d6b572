"""
Canonical internal models: normalized events, change windows, and the per-fingerprint issue group state.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

from config import DEFAULT_LOW_PRIORITY_PATHS
from engine.enums import Severity


@dataclass(frozen=True)
class Frame:
    # path-normalized, line number stripped
    file: str
    function: str = ""


@dataclass(frozen=True)
class CommitInfo:
    id: str
    timestamp: Optional[datetime] = None
    files: Tuple[str, ...] = ()
    risk_score: Optional[float] = None


@dataclass(frozen=True)
class ChangeWindow:
    deploy_time: datetime
    commits: Tuple[CommitInfo, ...] = ()


@dataclass(frozen=True)
class CorrelationHints:
    critical_paths: Tuple[str, ...] = ()
    low_priority_paths: Tuple[str, ...] = DEFAULT_LOW_PRIORITY_PATHS


@dataclass(frozen=True)
class Event:
    source: str
    service: str
    environment: str
    timestamp: datetime
    severity: Severity
    exception_type: str
    message: str
    frames: Tuple[Frame, ...]
    tags: Dict[str, str] = field(default_factory=dict)
    links: Dict[str, str] = field(default_factory=dict)
    change_window: Optional[ChangeWindow] = None
    correlation_hints: CorrelationHints = field(default_factory=CorrelationHints)
    api_route: Optional[str] = None
    request_url: Optional[str] = None


@dataclass
class StatsState:
    first_seen: datetime
    last_seen: datetime
    # counts keyed by minute bucket ("YYYY-MM-DDTHH:MM")
    buckets: Dict[str, int] = field(default_factory=dict)
    total_count: int = 0
    baseline: float = 0.0
    quiet_minutes: int = 0

    @classmethod
    def seeded(cls, ts: datetime) -> StatsState:
        return cls(first_seen=ts, last_seen=ts)


@dataclass
class IssueGroup:
    fingerprint: str
    exception_type: str
    message: str
    service: str
    environment: str
    stats: StatsState
