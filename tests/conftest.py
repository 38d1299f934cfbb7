import os
from typing import Any

from hypothesis import HealthCheck, settings

# Start measuring at collection time when run under COVERAGE_PROCESS_START
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # A collector may already be unregistered when stop() runs at interpreter exit
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop

# Generated parse trees can get deep; keep CI runs bounded and deterministic.
settings.register_profile(
    "ci",
    max_examples=50,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))
