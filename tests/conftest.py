import copy
import os
import sys
from typing import Any, Callable, Dict

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config import Settings
from engine.analyzer import Engine


BASE_EVENT: Dict[str, Any] = {
    "source": "sentry",
    "service": "api",
    "environment": "prod",
    "timestamp": "2025-01-15T10:30:00Z",
    "severity": "error",
    "exception_type": "TypeError",
    "message": "Cannot read property 'id' of undefined",
    "stacktrace": [
        {"file": "src/handler.ts", "function": "handleRequest", "line": 42},
        {"file": "src/middleware/auth.ts", "function": "verifyToken", "line": 18},
    ],
}


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """Build an inbound event payload; keyword arguments replace top-level fields."""

    def _make(**overrides: Any) -> Dict[str, Any]:
        event = copy.deepcopy(BASE_EVENT)
        event.update(overrides)
        return event

    return _make


@pytest.fixture
def config() -> Settings:
    # explicit values so environment overrides never leak into tests
    return Settings(
        spike_threshold=3.0,
        ewma_alpha=0.3,
        regression_quiet_minutes=60,
        fingerprint_max_frames=5,
        correlation_time_weight=0.3,
        correlation_file_weight=0.7,
        correlation_risk_weight=0.0,
        correlation_max_hours=24.0,
        production_environments=["prod", "production"],
        deploy_exception_types=["GitPush"],
    )


@pytest.fixture
def engine(config: Settings) -> Engine:
    return Engine(config)
