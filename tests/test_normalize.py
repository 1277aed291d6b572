"""
Tests for inbound event validation and canonicalization.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timezone

import pytest

from config import DEFAULT_LOW_PRIORITY_PATHS
from engine.enums import Severity
from engine.errors import SchemaError, ValidationError
from engine.normalize import normalize, normalize_path, parse_rfc3339


def test_normalize_path_basics():
    assert normalize_path("src\\auth\\jwt.go") == "src/auth/jwt.go"
    assert normalize_path("./src//utils/index.ts") == "src/utils/index.ts"
    assert normalize_path("SRC/App.tsx") == "src/app.tsx"
    assert normalize_path(".\\src\\\\x.py") == "src/x.py"


def test_parse_rfc3339_converts_offsets_to_utc():
    assert parse_rfc3339("2025-01-15T10:30:00Z") == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_rfc3339("2025-01-15T12:30:00+02:00") == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_rfc3339("2025-01-15t10:30:00.123456789z").microsecond == 123456


@pytest.mark.parametrize("value", ["not-a-date", "2025-01-15", "2025-01-15T10:30:00", "2025-13-01T00:00:00Z", ""])
def test_parse_rfc3339_rejects_incomplete_or_invalid(value):
    with pytest.raises(ValueError):
        parse_rfc3339(value)


@pytest.mark.parametrize("value", ["9999-12-31T23:59:59-01:00", "0001-01-01T00:30:00+01:00"])
def test_parse_rfc3339_rejects_values_outside_utc_range(value):
    with pytest.raises(ValueError, match="out of range"):
        parse_rfc3339(value)


def test_out_of_range_timestamp_is_validation_error(make_event):
    with pytest.raises(ValidationError) as info:
        normalize(make_event(timestamp="9999-12-31T23:59:59-01:00"))
    assert info.value.field == "timestamp"
    assert info.value.reason.startswith("invalid RFC3339")


def test_normalize_valid_event(make_event):
    event = normalize(make_event(service="API", environment="Prod", source="Sentry"))
    assert event.service == "api"
    assert event.environment == "prod"
    assert event.source == "sentry"
    assert event.severity == Severity.error
    assert event.exception_type == "TypeError"
    assert event.frames[0].file == "src/handler.ts"
    assert event.frames[0].function == "handleRequest"
    assert event.timestamp.tzinfo is not None


def test_normalize_strips_lines_and_defaults_missing_function(make_event):
    event = normalize(make_event(stacktrace=[{"file": "./SRC//A.ts", "line": 7}]))
    assert event.frames[0].file == "src/a.ts"
    assert event.frames[0].function == ""


@pytest.mark.parametrize(
    "label, expected",
    [
        ("warn", Severity.warning),
        ("WARNING", Severity.warning),
        ("err", Severity.error),
        ("Fatal", Severity.critical),
        ("crit", Severity.critical),
    ],
)
def test_severity_synonyms(make_event, label, expected):
    assert normalize(make_event(severity=label)).severity == expected


def test_unknown_severity_rejected(make_event):
    with pytest.raises(ValidationError) as exc:
        normalize(make_event(severity="info"))
    assert exc.value.field == "severity"
    assert exc.value.reason == "expected warning|error|critical"


@pytest.mark.parametrize("field", ["source", "service", "environment", "exception_type", "message"])
def test_empty_required_fields_rejected(make_event, field):
    with pytest.raises(ValidationError) as exc:
        normalize(make_event(**{field: ""}))
    assert exc.value.field == field
    assert field in str(exc.value)


def test_empty_stacktrace_rejected(make_event):
    with pytest.raises(ValidationError) as exc:
        normalize(make_event(stacktrace=[]))
    assert exc.value.field == "stacktrace"


def test_bad_timestamp_rejected_first(make_event):
    with pytest.raises(ValidationError) as exc:
        normalize(make_event(timestamp="not-a-date", severity="bogus"))
    assert exc.value.field == "timestamp"
    assert "invalid RFC3339" in exc.value.reason


def test_missing_required_key_is_schema_error(make_event):
    payload = make_event()
    del payload["message"]
    with pytest.raises(SchemaError):
        normalize(payload)


def test_unknown_fields_ignored(make_event):
    event = normalize(make_event(some_unknown_field="x", another=42))
    assert event.service == "api"


def test_change_window_paths_normalized_and_risk_out_of_range_dropped(make_event):
    event = normalize(
        make_event(
            change_window={
                "deploy_time": "2025-01-15T10:00:00Z",
                "commits": [
                    {"id": "a", "timestamp": "2025-01-15T09:50:00Z", "files": ["SRC\\Handler.ts"], "risk_score": 45},
                    {"id": "b", "files": ["./docs//x.md"], "risk_score": 140},
                    {"id": "c", "files": [], "risk_score": -1},
                ],
            }
        )
    )
    commits = event.change_window.commits
    assert commits[0].files == ("src/handler.ts",)
    assert commits[0].risk_score == 45
    assert commits[0].timestamp == datetime(2025, 1, 15, 9, 50, tzinfo=timezone.utc)
    assert commits[1].files == ("docs/x.md",)
    assert commits[1].risk_score is None
    assert commits[1].timestamp is None
    assert commits[2].risk_score is None


def test_change_window_bad_deploy_time(make_event):
    with pytest.raises(ValidationError) as exc:
        normalize(make_event(change_window={"deploy_time": "yesterday", "commits": []}))
    assert exc.value.field == "change_window.deploy_time"


def test_change_window_bad_commit_timestamp(make_event):
    with pytest.raises(ValidationError) as exc:
        normalize(
            make_event(
                change_window={
                    "deploy_time": "2025-01-15T10:00:00Z",
                    "commits": [{"id": "a", "timestamp": "nope", "files": []}],
                }
            )
        )
    assert exc.value.field == "change_window.commits[].timestamp"


def test_correlation_hints_defaults(make_event):
    assert normalize(make_event()).correlation_hints.critical_paths == ()
    assert normalize(make_event()).correlation_hints.low_priority_paths == DEFAULT_LOW_PRIORITY_PATHS


def test_correlation_hints_lowercased_and_empty_low_priority_defaulted(make_event):
    hints = normalize(
        make_event(correlation_hints={"critical_paths": ["SRC/Auth"], "low_priority_paths": []})
    ).correlation_hints
    assert hints.critical_paths == ("src/auth",)
    assert hints.low_priority_paths == DEFAULT_LOW_PRIORITY_PATHS

    hints = normalize(
        make_event(correlation_hints={"critical_paths": [], "low_priority_paths": ["Docs"]})
    ).correlation_hints
    assert hints.low_priority_paths == ("docs",)
