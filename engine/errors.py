"""
Structured error types raised while turning inbound payloads into incidents.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional


class EngineError(Exception):
    field: Optional[str] = None

    @property
    def reason(self) -> str:
        return str(self)


class ValidationError(EngineError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"validation: {field}: {reason}")
        self.field = field
        self._reason = reason

    @property
    def reason(self) -> str:
        return self._reason


class ParseError(EngineError):
    def __init__(self, message: str) -> None:
        super().__init__(f"parse: {message}")
        self._reason = message

    @property
    def reason(self) -> str:
        return self._reason


class SchemaError(EngineError):
    """Wraps a structural decoding failure of the inbound payload."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"json: {cause}")
        self.cause = cause
