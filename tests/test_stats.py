"""
Tests for streaming per-group statistics: buckets, EWMA baseline, spike factor and regression detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta, timezone

import pytest

from engine.baseline import minute_bucket, peak_bucket, record
from engine.models import StatsState


def ts(minute: int, second: int = 0) -> datetime:
    return datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc) + timedelta(minutes=minute, seconds=second)


def test_minute_bucket_format():
    assert minute_bucket(datetime(2025, 6, 1, 14, 5, 30, tzinfo=timezone.utc)) == "2025-06-01T14:05"


def test_first_event_spike_factor_is_one(config):
    stats = StatsState.seeded(ts(0))
    spike, regression = record(stats, ts(0), config)
    assert spike == 1.0
    assert regression is False
    assert stats.total_count == 1
    assert stats.baseline == 0.0


def test_second_event_same_bucket_uses_count_without_baseline(config):
    stats = StatsState.seeded(ts(0))
    record(stats, ts(0), config)
    spike, _ = record(stats, ts(0, 30), config)
    assert spike == 2.0


def test_total_count_matches_bucket_sum(config):
    stats = StatsState.seeded(ts(0))
    for m in (0, 0, 1, 3, 3, 3, 7):
        record(stats, ts(m), config)
    assert stats.total_count == sum(stats.buckets.values()) == 7
    assert stats.last_seen == ts(7)


def test_baseline_updates_only_on_bucket_transition(config):
    stats = StatsState.seeded(ts(0))
    record(stats, ts(0), config)
    record(stats, ts(1), config)
    assert stats.baseline == pytest.approx(0.3)
    # more occurrences in the same bucket leave the baseline alone
    record(stats, ts(1, 10), config)
    record(stats, ts(1, 20), config)
    assert stats.baseline == pytest.approx(0.3)
    # next bucket averages the other buckets: (1 + 3) / 2 = 2
    record(stats, ts(2), config)
    assert stats.baseline == pytest.approx(0.3 * 2.0 + 0.7 * 0.3)


def test_spike_detected_with_burst(config):
    stats = StatsState.seeded(ts(0))
    for m in range(5):
        record(stats, ts(m), config)

    last_spike = 0.0
    for _ in range(10):
        last_spike, _ = record(stats, ts(5), config)

    assert last_spike >= config.spike_threshold


def test_regression_detected_after_quiet_window(config):
    stats = StatsState.seeded(ts(0))
    record(stats, ts(0), config)
    _, regression = record(stats, ts(90), config)
    assert regression is True
    assert stats.quiet_minutes == 90


def test_regression_at_exact_threshold(config):
    stats = StatsState.seeded(ts(0))
    record(stats, ts(0), config)
    _, regression = record(stats, ts(60), config)
    assert regression is True


def test_no_regression_within_quiet_window(config):
    stats = StatsState.seeded(ts(0))
    record(stats, ts(0), config)
    _, regression = record(stats, ts(30), config)
    assert regression is False
    assert stats.quiet_minutes == 30


def test_first_event_never_regression_even_if_seeded_earlier(config):
    stats = StatsState.seeded(ts(0))
    _, regression = record(stats, ts(500), config)
    assert regression is False


def test_out_of_order_timestamp_reads_as_zero_quiet_minutes(config):
    stats = StatsState.seeded(ts(10))
    record(stats, ts(10), config)
    record(stats, ts(20), config)
    assert stats.quiet_minutes == 10
    _, regression = record(stats, ts(5), config)
    assert regression is False
    # zero elapsed minutes leave the previous reading in place
    assert stats.quiet_minutes == 10
    assert stats.total_count == 3


def test_peak_bucket_prefers_earliest_on_ties(config):
    stats = StatsState.seeded(ts(0))
    assert peak_bucket(stats) is None
    for m in (3, 3, 1, 1, 2):
        record(stats, ts(m), config)
    assert peak_bucket(stats) == "2025-01-15T10:01"
    record(stats, ts(3), config)
    assert peak_bucket(stats) == "2025-01-15T10:03"
