"""
Registry of issue groups keyed by fingerprint.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from api.responses import GroupSnapshot
from engine.baseline import peak_bucket
from engine.models import Event, IssueGroup, StatsState

log = logging.getLogger(__name__)


def snapshot(group: IssueGroup) -> GroupSnapshot:
    stats = group.stats
    peak = peak_bucket(stats)
    return GroupSnapshot(
        fingerprint=group.fingerprint,
        exception_type=group.exception_type,
        message=group.message,
        service=group.service,
        environment=group.environment,
        total_count=stats.total_count,
        first_seen=stats.first_seen.isoformat(),
        last_seen=stats.last_seen.isoformat(),
        baseline=stats.baseline,
        quiet_minutes=stats.quiet_minutes,
        peak_time=f"{peak}:00Z" if peak else None,
        buckets=dict(sorted(stats.buckets.items())),
    )


class GroupRegistry:
    """Single-owner map of fingerprint to issue group. Groups are never evicted."""

    def __init__(self) -> None:
        self._groups: Dict[str, IssueGroup] = {}

    def get_or_create(self, fingerprint: str, event: Event) -> IssueGroup:
        group = self._groups.get(fingerprint)
        if group is None:
            group = IssueGroup(
                fingerprint=fingerprint,
                exception_type=event.exception_type,
                message=event.message,
                service=event.service,
                environment=event.environment,
                stats=StatsState.seeded(event.timestamp),
            )
            self._groups[fingerprint] = group
            log.debug("New issue group %s (%s in %s/%s)", fingerprint, event.exception_type,
                      event.service, event.environment)
        return group

    def get(self, fingerprint: str) -> Optional[IssueGroup]:
        return self._groups.get(fingerprint)

    def snapshots(self) -> List[GroupSnapshot]:
        return [snapshot(self._groups[fp]) for fp in sorted(self._groups)]

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._groups))

    def __len__(self) -> int:
        return len(self._groups)
