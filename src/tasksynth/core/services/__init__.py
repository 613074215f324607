"""
Service layer for tasksynth.

Services are the API that interfaces call; they own no per-request state.
"""

from tasksynth.core.services.synthesis import SynthesisService

__all__ = ["SynthesisService"]
