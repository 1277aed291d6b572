"""
Path hint matching for correlation: critical-path boosts and docs/tests-only downweighting.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Sequence


def path_matches_hint(path: str, hint: str) -> bool:
    """Prefix, path segment, or substring match (e.g. ``".md"``), case-insensitive."""
    path = path.lower()
    hint = hint.lower().rstrip("/")
    if not hint:
        return False
    return (
        path.startswith(hint)
        or path.startswith(f"{hint}/")
        or any(seg == hint or seg.endswith(hint) for seg in path.split("/"))
        or hint in path
    )


def touches_paths(files: Sequence[str], hints: Sequence[str]) -> bool:
    if not hints:
        return False
    return any(path_matches_hint(f, h) for f in files for h in hints)


def low_priority_only(files: Sequence[str], hints: Sequence[str]) -> bool:
    if not files or not hints:
        return False
    return all(any(path_matches_hint(f, h) for h in hints) for f in files)
