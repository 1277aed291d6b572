"""
Root cause attribution: ranking commits from a change window as suspected causes of an incident.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.rca.hints import low_priority_only, path_matches_hint, touches_paths
from engine.rca.suspects import rank

__all__ = ["low_priority_only", "path_matches_hint", "rank", "touches_paths"]
