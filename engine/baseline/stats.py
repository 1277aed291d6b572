"""
Streaming per-fingerprint statistics: minute bucketing, EWMA baseline, spike factor and quiet-window regression detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from config import MINUTE_BUCKET_FORMAT, Settings
from engine.models import StatsState


def minute_bucket(ts: datetime) -> str:
    return ts.strftime(MINUTE_BUCKET_FORMAT)


def _elapsed_minutes(ts: datetime, since: datetime) -> int:
    # whole minutes, truncated; out-of-order timestamps read as zero
    return max(0, int((ts - since).total_seconds() // 60))


def record(stats: StatsState, ts: datetime, config: Settings) -> Tuple[float, bool]:
    """Record one occurrence at ``ts`` and return ``(spike_factor, is_regression)``.

    The baseline is only refreshed when ``ts`` opens a new minute bucket, and it
    averages the *other* buckets, so a burst in the current minute never
    inflates its own reference rate.
    """
    bucket = minute_bucket(ts)

    elapsed = _elapsed_minutes(ts, stats.last_seen)
    is_regression = stats.total_count > 0 and elapsed >= config.regression_quiet_minutes

    if elapsed > 0:
        stats.quiet_minutes = elapsed

    current_count = stats.buckets.get(bucket, 0) + 1
    stats.buckets[bucket] = current_count

    stats.total_count += 1
    stats.last_seen = ts

    if current_count == 1 and len(stats.buckets) > 1:
        previous = np.fromiter(
            (count for key, count in stats.buckets.items() if key != bucket),
            dtype=float,
        )
        prev_avg = float(np.mean(previous))
        alpha = config.ewma_alpha
        stats.baseline = alpha * prev_avg + (1.0 - alpha) * stats.baseline

    if stats.baseline > 0.0:
        spike_factor = current_count / stats.baseline
    elif stats.total_count > 1:
        spike_factor = float(current_count)
    else:
        spike_factor = 1.0

    return spike_factor, is_regression


def peak_bucket(stats: StatsState) -> Optional[str]:
    if not stats.buckets:
        return None
    # earliest bucket wins ties; keys sort chronologically
    return min(stats.buckets, key=lambda key: (-stats.buckets[key], key))
