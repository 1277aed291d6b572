#!/usr/bin/env python3

"""
JSON-lines runner for the Incident Correlation Engine.

Reads one inbound event per line from stdin and writes one incident summary or
error record per line to stdout. Valid events that trigger nothing produce no
output. Logs go to stderr so stdout stays a clean data channel.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from config import Settings, settings
from engine.analyzer import Engine
from services.stream_service import pump

log = logging.getLogger("incident_engine")

# flag name -> settings attribute
_OVERRIDES = {
    "spike_threshold": float,
    "ewma_alpha": float,
    "regression_quiet_minutes": int,
    "fingerprint_max_frames": int,
    "correlation_time_weight": float,
    "correlation_file_weight": float,
    "correlation_risk_weight": float,
    "correlation_max_hours": float,
}


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Incident correlation engine (stdin/stdout JSON lines)")
    for name, kind in _OVERRIDES.items():
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            type=kind,
            default=None,
            help=f"Override {name} (default {getattr(settings, name)})",
        )
    parser.add_argument(
        "--production-env",
        action="append",
        default=None,
        help="Environment treated as production; repeatable",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level for stderr")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {
        name: getattr(args, name)
        for name in _OVERRIDES
        if getattr(args, name) is not None
    }
    if args.production_env:
        overrides["production_environments"] = args.production_env
    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    engine = Engine(build_settings(args))
    try:
        written = pump(engine, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        return 130
    except OSError as exc:
        log.error("read error: %s", exc)
        return 1
    log.info("Processed input: %d output line(s), %d issue group(s)", written, len(engine))
    return 0


if __name__ == "__main__":
    sys.exit(main())
