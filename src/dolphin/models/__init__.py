from dolphin.models.cluster import NamespaceInfo, NodeRoleInfo, PodRef
from dolphin.models.common import DolphinModel
from dolphin.models.request import EvictionRequest
from dolphin.models.results import (
    BatchOutcome,
    EvictionReport,
    GuardResult,
    PodBatch,
    ProgressEvent,
    ProgressKind,
    RejectionReason,
    RunStatus,
)

__all__ = [
    "BatchOutcome",
    "DolphinModel",
    "EvictionReport",
    "EvictionRequest",
    "GuardResult",
    "NamespaceInfo",
    "NodeRoleInfo",
    "PodBatch",
    "PodRef",
    "ProgressEvent",
    "ProgressKind",
    "RejectionReason",
    "RunStatus",
]
