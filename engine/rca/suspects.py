"""
Ranking of candidate root-cause commits from a deploy change window.

Each commit is scored independently as a weighted combination of stack-frame
file overlap, time proximity of the incident to the deploy and an optional
risk score, plus a fixed critical-path boost and a docs/tests-only penalty.
Commits touching only low-priority paths with no stack overlap are never
surfaced. Output is sorted by score descending, then commit id ascending.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from api.responses import SuspectedCause
from config import CRITICAL_PATH_BOOST, LOW_PRIORITY_PENALTY, Settings
from engine.models import ChangeWindow, CommitInfo, CorrelationHints, Frame
from engine.rca.hints import low_priority_only, touches_paths


def overlap_count(commit_files: Sequence[str], frame_files: Sequence[str]) -> int:
    return sum(
        1
        for cf in commit_files
        if any(ff.endswith(cf.lower()) or cf.lower().endswith(ff) for ff in frame_files)
    )


def hours_after_deploy(event_time: datetime, deploy_time: datetime) -> float:
    # whole minutes, truncated toward zero
    minutes = int((event_time - deploy_time).total_seconds() / 60)
    return minutes / 60.0


def score_time_proximity(hours: float, max_hours: float) -> float:
    if hours <= 0.0 or hours > max_hours:
        return 0.0
    return 1.0 - hours / max_hours


def _format_risk(risk: float) -> str:
    return f"{risk:g}"


def score_commit(
    commit: CommitInfo,
    frame_files: Sequence[str],
    hours: float,
    hints: CorrelationHints,
    config: Settings,
) -> Optional[SuspectedCause]:
    evidence: List[str] = []
    files = commit.files

    overlap = overlap_count(files, frame_files)
    file_score = overlap / len(files) if files else 0.0
    if overlap > 0:
        evidence.append(f"{overlap}/{len(files)} changed files overlap stack frames")

    time_score = score_time_proximity(hours, config.correlation_max_hours)
    if time_score > 0.0:
        evidence.append(f"{hours:.1f}h after deploy")

    risk_score = 0.0
    if commit.risk_score is not None:
        risk_score = min(commit.risk_score / 100.0, 1.0)
        if config.correlation_risk_weight > 0.0:
            evidence.append(f"risk score {_format_risk(commit.risk_score)}")

    critical_boost = CRITICAL_PATH_BOOST if touches_paths(files, hints.critical_paths) else 0.0
    if critical_boost > 0.0:
        evidence.append("touches critical path")

    is_low_priority = low_priority_only(files, hints.low_priority_paths)
    if is_low_priority and overlap == 0:
        return None
    penalty = LOW_PRIORITY_PENALTY if is_low_priority else 0.0
    if penalty < 0.0:
        evidence.append("docs/tests only")

    total = max(
        0.0,
        config.correlation_file_weight * file_score
        + config.correlation_time_weight * time_score
        + config.correlation_risk_weight * risk_score
        + critical_boost
        + penalty,
    )
    if total <= 0.0:
        return None
    return SuspectedCause(commit_id=commit.id, score=round(total, 3), evidence=evidence)


def rank(
    frames: Sequence[Frame],
    change_window: ChangeWindow,
    event_time: datetime,
    hints: CorrelationHints,
    config: Settings,
) -> List[SuspectedCause]:
    frame_files = [f.file for f in frames]
    hours = hours_after_deploy(event_time, change_window.deploy_time)

    suspects = [
        s
        for s in (score_commit(c, frame_files, hours, hints, config) for c in change_window.commits)
        if s is not None
    ]
    suspects.sort(key=lambda s: (-s.score, s.commit_id))
    return suspects
