"""
Configuration data models for tasksynth.

These models define the structure of .tasksynth.json and
~/.config/tasksynth/config.json files, with validation via Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AIConfig(BaseModel):
    """
    Settings for the AI todo generation path.

    The API key itself is never stored in configuration; only the name of
    the environment variable that holds it.
    """
    enabled: bool = Field(
        default=True,
        description="Call the model at all; when false the fallback is always used"
    )
    api_key_env: str = Field(
        default="OPENAI_API_KEY",
        description="Environment variable holding the API key"
    )
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of an OpenAI-compatible chat completions API"
    )
    model: str = Field(
        default="gpt-4-turbo-preview",
        description="Model name sent with each request"
    )
    temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=3000,
        ge=1,
        description="Upper bound on completion tokens"
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Upper bound on one generation attempt, in seconds"
    )

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store the base URL without a trailing slash."""
        return v.rstrip("/")


class PipelineConfig(BaseModel):
    """
    Post-processing behavior.
    """
    reject_invalid: bool = Field(
        default=False,
        description="Mark previews with validation findings as rejected"
    )


class SynthConfig(BaseModel):
    """
    Top-level tasksynth configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = SynthConfig(ai=AIConfig(enabled=False))
        >>> config.ai.model
        'gpt-4-turbo-preview'
    """
    ai: AIConfig = Field(
        default_factory=AIConfig,
        description="AI generation settings"
    )
    pipeline: PipelineConfig = Field(
        default_factory=PipelineConfig,
        description="Post-processing settings"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )
