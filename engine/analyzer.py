"""
Incident correlation engine: normalizes events, groups them by fingerprint, updates streaming stats, applies trigger rules and assembles incident summaries.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from api.requests import InboundEvent, InboundFrame
from api.responses import (
    GroupSnapshot,
    IncidentSummary,
    IssueGroupSummary,
    StackFrameOutput,
    SuspectedCause,
)
from config import (
    MINUTE_BUCKET_FORMAT,
    PRIORITY_SCORE_MAX,
    RECOMMENDED_ACTIONS,
    SPIKE_BONUS_CAP,
    Settings,
)
from engine import baseline, dedup, rca
from engine.enums import TriggerReason
from engine.errors import EngineError
from engine.models import Event, IssueGroup
from engine.normalize import coerce_inbound, normalize
from engine.registry import GroupRegistry, snapshot

log = logging.getLogger(__name__)

RawEvent = Union[InboundEvent, Mapping[str, Any]]


def _priority_score(event: Event, trigger: TriggerReason, spike_factor: float) -> int:
    spike_bonus = int(min(SPIKE_BONUS_CAP, max(0.0, (spike_factor - 1.0) * 2.0)))
    return min(PRIORITY_SCORE_MAX, event.severity.score() + trigger.bonus() + spike_bonus)


def _recommended_actions(trigger: TriggerReason, suspects: List[SuspectedCause]) -> List[str]:
    actions = list(RECOMMENDED_ACTIONS[trigger.value])
    if suspects:
        actions.append(f"Review top suspect commit: {suspects[0].commit_id}")
    return actions


def _output_frames(raw_frames: Sequence[InboundFrame]) -> List[StackFrameOutput]:
    return [
        StackFrameOutput(file=f.file, function=f.function or "", line=f.line)
        for f in raw_frames
    ]


class Engine:
    """In-memory incident correlation engine.

    One instance owns its configuration and its issue-group table. Calls to
    :meth:`process` must be serialized by the caller; scale out by sharding
    events across independent instances by fingerprint.
    """

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config or Settings()
        self._groups = GroupRegistry()

    def process(self, raw: RawEvent) -> Optional[IncidentSummary]:
        """Process one inbound event.

        Returns the incident summary when a trigger rule fires, ``None``
        otherwise. Raises :class:`EngineError` for invalid input, in which case
        no state has been touched.
        """
        try:
            inbound = coerce_inbound(raw)
            event = normalize(inbound)
        except EngineError as exc:
            log.debug("Rejected event: %s", exc)
            raise

        fingerprint = dedup.compute(event, self.config.fingerprint_max_frames)
        group = self._groups.get_or_create(fingerprint, event)

        is_new = group.stats.total_count == 0
        spike_factor, is_regression = baseline.record(group.stats, event.timestamp, self.config)

        trigger = self._trigger(event, is_new, is_regression, spike_factor)
        if trigger is None:
            return None

        summary = self._assemble(event, group, spike_factor, trigger, inbound.stacktrace)
        log.info(
            "Incident %s triggered (%s) for %s count=%d spike=%.2f",
            summary.incident_id, trigger.value, fingerprint, group.stats.total_count, spike_factor,
        )
        return summary

    def _trigger(
        self,
        event: Event,
        is_new: bool,
        is_regression: bool,
        spike_factor: float,
    ) -> Optional[TriggerReason]:
        production = self.config.is_production(event.environment)
        if self.config.is_deploy(event.exception_type):
            return TriggerReason.deploy
        if is_new and production:
            return TriggerReason.new_issue
        if is_regression and production:
            return TriggerReason.regression
        if spike_factor >= self.config.spike_threshold:
            return TriggerReason.spike
        return None

    def _assemble(
        self,
        event: Event,
        group: IssueGroup,
        spike_factor: float,
        trigger: TriggerReason,
        raw_frames: Sequence[InboundFrame],
    ) -> IncidentSummary:
        stats = group.stats

        suspects: List[SuspectedCause] = []
        if event.change_window is not None:
            suspects = rca.rank(
                event.frames,
                event.change_window,
                event.timestamp,
                event.correlation_hints,
                self.config,
            )

        peak = baseline.peak_bucket(stats)

        return IncidentSummary(
            incident_id=dedup.incident_id(
                group.fingerprint, stats.first_seen.strftime(MINUTE_BUCKET_FORMAT)
            ),
            title=f"{trigger.label}: {group.exception_type} in {group.service}/{group.environment}",
            service=group.service,
            environment=group.environment,
            severity=event.severity,
            priority_score=_priority_score(event, trigger, spike_factor),
            trigger=trigger,
            start_time=stats.first_seen.isoformat(),
            last_seen=stats.last_seen.isoformat(),
            peak_time=f"{peak}:00Z" if peak else None,
            top_symptoms=[
                IssueGroupSummary(
                    fingerprint=group.fingerprint,
                    exception_type=group.exception_type,
                    message=group.message,
                    count=stats.total_count,
                    spike_factor=round(spike_factor, 2),
                )
            ],
            suspected_causes=suspects,
            recommended_first_actions=_recommended_actions(trigger, suspects),
            stacktrace=_output_frames(raw_frames),
            links=dict(event.links),
            api_route=event.api_route,
            request_url=event.request_url,
        )

    def groups(self) -> List[GroupSnapshot]:
        return self._groups.snapshots()

    def group(self, fingerprint: str) -> Optional[GroupSnapshot]:
        found = self._groups.get(fingerprint)
        return snapshot(found) if found is not None else None

    def __len__(self) -> int:
        return len(self._groups)
