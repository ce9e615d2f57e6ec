"""Hypothesis profiles for the envelope, error detection and call properties.

The ``kanbantool`` profile is loaded unless ``HYPOTHESIS_PROFILE`` names
another one. A cold run builds Hypothesis' text tables on first use, so the
slow-generation health check is suppressed in every profile.
"""

import os

from hypothesis import HealthCheck, Phase, settings

# PendingCall properties drive a fresh event loop per example
_base = {"deadline": None, "suppress_health_check": [HealthCheck.too_slow]}

settings.register_profile("kanbantool", max_examples=100, **_base)
settings.register_profile("ci", max_examples=200, **_base)
settings.register_profile("quick", max_examples=10, phases=[Phase.generate], **_base)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "kanbantool"))
