"""
Normalization of raw inbound events into canonical events, including path and timestamp canonicalization.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.normalize.event import coerce_inbound, normalize
from engine.normalize.paths import normalize_path
from engine.normalize.timestamps import parse_rfc3339

__all__ = ["coerce_inbound", "normalize", "normalize_path", "parse_rfc3339"]
