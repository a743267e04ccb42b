"""Base Pydantic models for document elements.

This module defines the foundational model classes used by blocks,
resolution results and runtime settings. It enforces immutability so
that a parsed document snapshot can not change while it is resolved.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all document elements.

    This class serves as the root for all Pydantic models representing
    scanned blocks, validation outcomes and resolution results.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          Blocks and results are plain data passed between calls.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos.

    All document models must inherit from this class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    This class serves as the root for all settings models responsible for
    resolving runtime configuration (for example, environment variables,
    CI-provided values, or local overrides).

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.

    All runtime settings models must inherit from this class.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
