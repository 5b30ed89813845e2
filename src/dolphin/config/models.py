from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dolphin.constants import DEFAULT_BATCH_SIZE, DEFAULT_NAMESPACE
from dolphin.utils.durations import parse_duration


class DefaultsConfig(BaseModel):
    """Defaults applied when the matching CLI flag is not given."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    namespace: str = DEFAULT_NAMESPACE
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        validation_alias=AliasChoices("batch_size", "batchSize", "batch-size"),
    )
    interval: timedelta = timedelta(0)
    dry_run: bool = Field(default=False, validation_alias=AliasChoices("dry_run", "dryRun", "dry-run"))
    verbose: bool = False

    @field_validator("interval", mode="before")
    @classmethod
    def parse_interval(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_duration(value)
        return value


class ClusterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kubeconfig: str | None = None
    context: str | None = None
    in_cluster: bool = Field(default=False, validation_alias=AliasChoices("in_cluster", "inCluster"))


class DolphinConfig(BaseModel):
    """Root configuration file model."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)
    log_level: str | None = Field(default=None, validation_alias=AliasChoices("log_level", "logLevel"))


class ResolvedConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: str
    path: Path | None = None
    data: DolphinConfig
