from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DolphinModel(BaseModel):
    """Immutable base model; snapshots taken from the cluster are never mutated."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
