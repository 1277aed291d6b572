"""
Path normalization shared by stack frames and commit file lists, so overlap comparisons stay symmetric.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    unified = _REPEATED_SLASHES.sub("/", (path or "").replace("\\", "/"))
    if unified.startswith("./"):
        unified = unified[2:]
    return unified.lower()
