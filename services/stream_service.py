"""
Line-delimited JSON transport around the engine: one event per input line, zero or one record per output line.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import json
import logging
from typing import Iterable, Iterator, Optional, TextIO

from api.responses import to_error_output
from engine.analyzer import Engine
from engine.errors import EngineError, ParseError

log = logging.getLogger(__name__)


def process_line(engine: Engine, line: str) -> Optional[str]:
    """Run one input line through ``engine`` and return the output line, if any.

    Blank lines and valid events that trigger nothing yield ``None``.
    """
    text = line.strip()
    if not text:
        return None

    try:
        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"json parse: {exc}") from exc
        if not isinstance(payload, dict):
            raise ParseError("json parse: expected a JSON object")
        summary = engine.process(payload)
    except EngineError as exc:
        log.debug("Input rejected: %s", exc)
        return to_error_output(exc).to_json()

    return summary.to_json() if summary is not None else None


def process_lines(engine: Engine, lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        out = process_line(engine, line)
        if out is not None:
            yield out


def pump(engine: Engine, source: TextIO, sink: TextIO) -> int:
    written = 0
    for out in process_lines(engine, source):
        sink.write(out + "\n")
        sink.flush()
        written += 1
    return written
