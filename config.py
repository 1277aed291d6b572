"""
Constants and configuration for the Incident Correlation Engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings


INCIDENT_ENGINE_LOG_LEVEL = os.getenv("INCIDENT_ENGINE_LOG_LEVEL", "INFO").upper()
INCIDENT_ENGINE_HOST = os.getenv("INCIDENT_ENGINE_HOST", "0.0.0.0")
INCIDENT_ENGINE_PORT = int(os.getenv("INCIDENT_ENGINE_PORT", "4323"))

# minute bucket key layout shared by stats, peak time and incident ids
MINUTE_BUCKET_FORMAT = "%Y-%m-%dT%H:%M"

# paths treated as docs/tests when the event carries no correlation hints
DEFAULT_LOW_PRIORITY_PATHS: Tuple[str, ...] = (
    "docs/",
    "doc/",
    "tests/",
    "test/",
    "spec/",
    "__tests__/",
    ".md",
)

SEVERITY_SYNONYMS: Dict[str, str] = {
    "warning": "warning",
    "warn": "warning",
    "error": "error",
    "err": "error",
    "critical": "critical",
    "fatal": "critical",
    "crit": "critical",
}

SEVERITY_BASE_SCORES: Dict[str, int] = {
    "warning": 30,
    "error": 60,
    "critical": 90,
}

TRIGGER_BONUSES: Dict[str, int] = {
    "new_issue": 10,
    "regression": 15,
    "spike": 20,
    "deploy": 5,
}

TRIGGER_LABELS: Dict[str, str] = {
    "spike": "Spike",
    "new_issue": "New issue",
    "regression": "Regression",
    "deploy": "Deploy",
}

RECOMMENDED_ACTIONS: Dict[str, List[str]] = {
    "spike": [
        "Check dashboards for increased traffic or external dependency failures",
        "Review recent deploys that may have introduced the regression",
    ],
    "new_issue": [
        "Investigate the new exception type and its root cause",
        "Check if a recent deploy introduced this code path",
    ],
    "regression": [
        "Compare current stack trace with the previous occurrence",
        "Check if a recent change re-introduced a previously fixed bug",
    ],
    "deploy": [
        "Review the commit message and changed files for risk",
        "Monitor for errors correlated to this deploy",
    ],
}

CRITICAL_PATH_BOOST: float = 0.15
LOW_PRIORITY_PENALTY: float = -0.2
SPIKE_BONUS_CAP: float = 20.0
PRIORITY_SCORE_MAX: int = 100


class Settings(BaseSettings):
    # spike factor threshold: current-minute count / baseline
    spike_threshold: float = Field(default=3.0, gt=0.0)
    # EWMA smoothing factor; higher reacts faster
    ewma_alpha: float = Field(default=0.3, ge=0.0, le=1.0)
    regression_quiet_minutes: int = Field(default=60, ge=0)
    fingerprint_max_frames: int = Field(default=5, ge=0)

    # correlation scoring
    correlation_time_weight: float = Field(default=0.3, ge=0.0)
    correlation_file_weight: float = Field(default=0.7, ge=0.0)
    correlation_risk_weight: float = Field(default=0.0, ge=0.0)
    correlation_max_hours: float = Field(default=24.0, gt=0.0)

    # trigger gating; environments are compared after case folding
    production_environments: List[str] = ["prod", "production"]
    deploy_exception_types: List[str] = ["GitPush"]

    log_level: str = INCIDENT_ENGINE_LOG_LEVEL
    host: str = INCIDENT_ENGINE_HOST
    port: int = INCIDENT_ENGINE_PORT

    model_config = {
        "env_prefix": "INCIDENT_ENGINE_",
        "extra": "ignore",
    }

    def is_production(self, environment: str) -> bool:
        return environment in {e.lower() for e in self.production_environments}

    def is_deploy(self, exception_type: str) -> bool:
        return exception_type in self.deploy_exception_types


settings = Settings()
