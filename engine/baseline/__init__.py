"""
Streaming baseline statistics for issue groups: minute-bucketed counts, an EWMA baseline of per-minute rates, spike factors and regression detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.baseline.stats import minute_bucket, peak_bucket, record

__all__ = ["minute_bucket", "peak_bucket", "record"]
