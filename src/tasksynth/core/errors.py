"""
Typed exceptions for task synthesis.

Only InvalidContextError and DuplicateRuleError ever reach callers of the
synthesis engine. GenerationFailure is raised by the AI adapter and absorbed
by the engine, which substitutes the fallback result.
"""


class SynthesisError(Exception):
    """Base exception for task synthesis errors."""


class GenerationFailure(SynthesisError):
    """Raised when the AI generation path cannot produce a usable result."""


class ConfigurationAbsent(GenerationFailure):
    """Raised when AI generation is disabled or has no credentials."""


class InvalidContextError(SynthesisError):
    """Raised when the generation context is unusable (e.g. no session id)."""


class DuplicateRuleError(SynthesisError):
    """Raised when a rule registry contains the same rule id twice."""

    def __init__(self, rule_id: str) -> None:
        super().__init__(f"Duplicate rule id in registry: {rule_id}")
        self.rule_id = rule_id
