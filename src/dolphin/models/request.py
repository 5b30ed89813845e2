from __future__ import annotations

from datetime import timedelta

from pydantic import field_validator

from dolphin.constants import DEFAULT_BATCH_SIZE, DEFAULT_NAMESPACE, NODE_NOT_GIVEN
from dolphin.models.common import DolphinModel


class EvictionRequest(DolphinModel):
    """Everything a run needs, fixed up front.

    ``batch_size`` is not range-checked here; the guard rejects values below one.
    """

    node_name: str = NODE_NOT_GIVEN
    namespace: str = DEFAULT_NAMESPACE
    batch_size: int = DEFAULT_BATCH_SIZE
    interval: timedelta = timedelta(0)
    dry_run: bool = False
    verbose: bool = False

    @field_validator("interval", mode="after")
    @classmethod
    def clamp_interval(cls, value: timedelta) -> timedelta:
        return max(timedelta(0), value)

    @property
    def interval_seconds(self) -> float:
        return self.interval.total_seconds()

    @property
    def node_given(self) -> bool:
        return bool(self.node_name) and self.node_name != NODE_NOT_GIVEN
