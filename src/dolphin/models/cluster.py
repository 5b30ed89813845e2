from __future__ import annotations

from pydantic import Field, computed_field

from dolphin.constants import CONTROL_PLANE_LABELS, SYSTEM_NAMESPACES
from dolphin.models.common import DolphinModel


class PodRef(DolphinModel):
    name: str
    namespace: str
    node_name: str | None = None


class NodeRoleInfo(DolphinModel):
    name: str
    labels: dict[str, str] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_control_plane(self) -> bool:
        return any(label in CONTROL_PLANE_LABELS for label in self.labels)


class NamespaceInfo(DolphinModel):
    name: str
    exists: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_system_reserved(self) -> bool:
        return self.name in SYSTEM_NAMESPACES
