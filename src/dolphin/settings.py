from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Environment-driven overrides, applied between CLI flags and the config file."""

    model_config = SettingsConfigDict(
        env_prefix="DOLPHIN_",
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    kubeconfig: Path | None = Field(default=None, validation_alias=AliasChoices("DOLPHIN_KUBECONFIG", "KUBECONFIG"))
    context: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DOLPHIN_CONTEXT", "DOLPHIN_KUBE_CONTEXT"),
    )
    in_cluster: bool | None = Field(default=None, validation_alias=AliasChoices("DOLPHIN_IN_CLUSTER"))
    namespace: str | None = Field(default=None, validation_alias=AliasChoices("DOLPHIN_NAMESPACE"))
    log_level: str | None = Field(default=None, validation_alias=AliasChoices("DOLPHIN_LOG_LEVEL"))
