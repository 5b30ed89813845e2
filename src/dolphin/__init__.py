from dolphin.errors import (
    CancelledError,
    ConfigError,
    DolphinError,
    ExecutionError,
    GatewayError,
    NotFoundError,
    ValidationError,
)
from dolphin.executor import delete_batch
from dolphin.gateway import ClusterGateway, KubernetesGateway, load_gateway
from dolphin.guard import evaluate
from dolphin.models import (
    BatchOutcome,
    EvictionReport,
    EvictionRequest,
    GuardResult,
    NamespaceInfo,
    NodeRoleInfo,
    PodBatch,
    PodRef,
    RejectionReason,
    RunStatus,
)
from dolphin.orchestrator import evacuate
from dolphin.scheduler import BatchScheduler, plan_batches

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BatchOutcome",
    "BatchScheduler",
    "CancelledError",
    "ClusterGateway",
    "ConfigError",
    "DolphinError",
    "EvictionReport",
    "EvictionRequest",
    "ExecutionError",
    "GatewayError",
    "GuardResult",
    "KubernetesGateway",
    "NamespaceInfo",
    "NodeRoleInfo",
    "NotFoundError",
    "PodBatch",
    "PodRef",
    "RejectionReason",
    "RunStatus",
    "ValidationError",
    "delete_batch",
    "evacuate",
    "evaluate",
    "load_gateway",
    "plan_batches",
]
