"""
Ownership hook configuration using Pydantic Settings.

Environment variables:
- OWNER_GUARD_OWNER_FIELD: field on resources holding the owner id (default: "userId")
- OWNER_GUARD_ID_FIELD: field on the caller holding its own id (default: "_id")
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


DEFAULT_OWNER_FIELD = "userId"
DEFAULT_ID_FIELD = "_id"


def _require_field_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("field name must be a non-empty string")
    return v


class GuardSettings(BaseSettings):
    """Process-wide defaults for ownership hooks."""

    model_config = SettingsConfigDict(env_prefix="OWNER_GUARD_")

    owner_field: str = Field(
        default=DEFAULT_OWNER_FIELD,
        description="Field on the resource that records its owner(s)",
    )
    id_field: str = Field(
        default=DEFAULT_ID_FIELD,
        description="Field on the authenticated caller that holds its id",
    )

    @field_validator("owner_field", "id_field")
    @classmethod
    def validate_field_name(cls, v: str) -> str:
        return _require_field_name(v)


class GuardConfig(BaseModel):
    """
    Resolved configuration for one hook instance.

    Immutable once built; hooks close over it.
    """

    model_config = ConfigDict(frozen=True)

    owner_field: str = DEFAULT_OWNER_FIELD
    id_field: str = DEFAULT_ID_FIELD

    @field_validator("owner_field", "id_field")
    @classmethod
    def validate_field_name(cls, v: str) -> str:
        return _require_field_name(v)

    @classmethod
    def resolve(
        cls,
        owner_field: str | None = None,
        id_field: str | None = None,
        settings: GuardSettings | None = None,
    ) -> "GuardConfig":
        """
        Build a config from explicit options, falling back to settings.

        Raises:
            ConfigurationError: If a field name is blank or not a string
        """
        settings = settings or get_settings()
        try:
            return cls(
                owner_field=settings.owner_field if owner_field is None else owner_field,
                id_field=settings.id_field if id_field is None else id_field,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid ownership hook configuration: {e}") from e


@lru_cache
def get_settings() -> GuardSettings:
    """Get cached settings instance."""
    return GuardSettings()
