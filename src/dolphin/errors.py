from __future__ import annotations

from dataclasses import dataclass


class DolphinError(Exception):
    """Base error type for dolphin."""


class ConfigError(DolphinError):
    """Raised when configuration or kubeconfig cannot be loaded or validated."""


@dataclass(slots=True)
class GatewayError(DolphinError):
    """A call to the cluster API failed."""

    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class NotFoundError(GatewayError):
    """The requested node, namespace or pod does not exist."""


@dataclass(slots=True)
class ValidationError(DolphinError):
    """An eviction request was rejected before any deletion happened."""

    reason: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ExecutionError(DolphinError):
    """A delete call failed mid-run; earlier deletions are not rolled back."""

    pod: str
    namespace: str
    cause: str
    deleted_count: int = 0

    def __str__(self) -> str:
        return f"failed to delete pod {self.namespace}/{self.pod}: {self.cause}"


class CancelledError(DolphinError):
    """The run was interrupted before all batches were processed."""
