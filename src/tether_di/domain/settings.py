from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContainerSettings(BaseSettings):
    """Container behaviour switches, overridable through ``TETHER_DI_*`` variables.

    Attributes:
        thread_safe: Guard the registry and instance caches with locks.
        allow_override: Let a later registration replace an earlier one.
        warn_on_override: Log replaced bindings at WARNING instead of DEBUG.
    """

    model_config = SettingsConfigDict(env_prefix="TETHER_DI_", extra="ignore")

    thread_safe: bool = Field(default=True, description="Guard shared state with re-entrant locks.")
    allow_override: bool = Field(default=True, description="Last registration wins when True.")
    warn_on_override: bool = Field(default=False, description="Log binding overrides at WARNING level.")
