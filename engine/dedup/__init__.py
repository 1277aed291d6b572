"""
Deduplication of inbound events into issue groups via stable fingerprints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.dedup.fingerprint import compute, incident_id

__all__ = ["compute", "incident_id"]
