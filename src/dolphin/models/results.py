"""Tagged outcomes produced by the guard, the executor and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from dolphin.errors import CancelledError, ExecutionError, ValidationError
from dolphin.models.cluster import PodRef
from dolphin.models.request import EvictionRequest


class RejectionReason(StrEnum):
    NODE_REQUIRED = "node required"
    NODE_NOT_FOUND = "node not found"
    CONTROL_PLANE = "control-plane node"
    NAMESPACE_NOT_FOUND = "namespace does not exist"
    SYSTEM_NAMESPACE = "system namespace"
    INVALID_BATCH_SIZE = "invalid batch size"


@dataclass(frozen=True, slots=True)
class GuardResult:
    allowed: bool
    reason: RejectionReason | None = None
    message: str | None = None
    show_help: bool = False

    @classmethod
    def allow(cls) -> GuardResult:
        return cls(allowed=True)

    @classmethod
    def reject(cls, reason: RejectionReason, message: str | None = None, *, show_help: bool = False) -> GuardResult:
        return cls(allowed=False, reason=reason, message=message or reason.value, show_help=show_help)

    @property
    def rejected(self) -> bool:
        return not self.allowed

    def to_error(self) -> ValidationError:
        if self.allowed or self.reason is None:
            raise ValueError("an allowed guard result has no error")
        return ValidationError(reason=self.reason.value, message=self.message or self.reason.value)


@dataclass(frozen=True, slots=True)
class PodBatch:
    index: int
    start: int
    end: int
    pods: tuple[PodRef, ...]

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class BatchOutcome:
    """Result of deleting one batch; identical in shape for dry and real runs."""

    deleted: tuple[PodRef, ...] = ()
    failed_pod: PodRef | None = None
    cause: str | None = None

    @classmethod
    def succeeded(cls, deleted: list[PodRef]) -> BatchOutcome:
        return cls(deleted=tuple(deleted))

    @classmethod
    def failed(cls, deleted: list[PodRef], pod: PodRef, cause: str) -> BatchOutcome:
        return cls(deleted=tuple(deleted), failed_pod=pod, cause=cause)

    @property
    def ok(self) -> bool:
        return self.failed_pod is None


class ProgressKind(StrEnum):
    DELETING_PODS = "deleting_pods"
    BATCH_STARTED = "batch_started"
    POD_DELETING = "pod_deleting"
    WAITING = "waiting"


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    kind: ProgressKind
    pod: PodRef | None = None
    batch: PodBatch | None = None
    interval_seconds: float | None = None
    dry_run: bool = False


class RunStatus(StrEnum):
    COMPLETED = "completed"
    EMPTY = "empty"
    REJECTED = "rejected"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class EvictionReport:
    request: EvictionRequest
    status: RunStatus
    message: str
    guard: GuardResult
    pods_found: int = 0
    batches_planned: int = 0
    batches_completed: int = 0
    sleeps: int = 0
    deleted: list[PodRef] = field(default_factory=list)
    failure: ExecutionError | None = None

    @property
    def ok(self) -> bool:
        return self.status in {RunStatus.COMPLETED, RunStatus.EMPTY}

    def raise_for_status(self) -> None:
        if self.status is RunStatus.REJECTED:
            raise self.guard.to_error()
        if self.status is RunStatus.FAILED and self.failure is not None:
            raise self.failure
        if self.status is RunStatus.CANCELLED:
            raise CancelledError(self.message)

    def summary(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "message": self.message,
            "namespace": self.request.namespace,
            "node": self.request.node_name,
            "dry_run": self.request.dry_run,
            "batch_size": self.request.batch_size,
            "interval_seconds": self.request.interval_seconds,
            "pods_found": self.pods_found,
            "batches_planned": self.batches_planned,
            "batches_completed": self.batches_completed,
            "sleeps": self.sleeps,
            "deleted": [pod.name for pod in self.deleted],
            "rejection": self.guard.reason.value if self.guard.reason else None,
            "failure": str(self.failure) if self.failure else None,
        }
