"""
Enumerations for event severity and incident trigger reasons.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from config import SEVERITY_BASE_SCORES, SEVERITY_SYNONYMS, TRIGGER_BONUSES, TRIGGER_LABELS


class Severity(str, Enum):
    warning = "warning"
    error = "error"
    critical = "critical"

    @classmethod
    def from_label(cls, label: str) -> Optional[Severity]:
        canonical = SEVERITY_SYNONYMS.get((label or "").lower())
        return cls(canonical) if canonical else None

    def score(self) -> int:
        return SEVERITY_BASE_SCORES[self.value]


class TriggerReason(str, Enum):
    spike = "spike"
    new_issue = "new_issue"
    regression = "regression"
    deploy = "deploy"

    @property
    def label(self) -> str:
        return TRIGGER_LABELS[self.value]

    def bonus(self) -> int:
        return TRIGGER_BONUSES[self.value]
