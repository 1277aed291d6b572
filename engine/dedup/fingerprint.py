"""
Stable fingerprint computation for grouping events into issue groups.

The fingerprint is a pure function of the exception type, service, environment
and the first ``max_frames`` normalized frames. It uses BLAKE2b so that the
value is identical across processes, platforms and interpreter restarts
(unlike the builtin ``hash``).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import hashlib

from engine.models import Event

FINGERPRINT_HEX_LENGTH = 32


def compute(event: Event, max_frames: int) -> str:
    hasher = hashlib.blake2b(digest_size=FINGERPRINT_HEX_LENGTH // 2)
    hasher.update(event.exception_type.encode())
    hasher.update(b"|")
    hasher.update(event.service.encode())
    hasher.update(b"|")
    hasher.update(event.environment.encode())

    for frame in event.frames[:max_frames]:
        hasher.update(b"|")
        hasher.update(frame.file.encode())
        hasher.update(b":")
        hasher.update(frame.function.encode())

    return hasher.hexdigest()


def incident_id(fingerprint: str, first_seen_minute: str) -> str:
    # independent of trigger type so recurring triggers share an id root
    digest = hashlib.blake2b(f"{fingerprint}|{first_seen_minute}".encode()).hexdigest()
    return f"inc-{digest[:16]}"
