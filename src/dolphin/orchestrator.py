"""Guarded, batched pod eviction from one node."""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable

from dolphin.constants import SUCCESS_MESSAGE
from dolphin.errors import ExecutionError
from dolphin.executor import ProgressCallback, delete_batch
from dolphin.gateway.base import ClusterGateway
from dolphin.guard import evaluate
from dolphin.models import EvictionReport, EvictionRequest, ProgressEvent, ProgressKind, RunStatus
from dolphin.scheduler import BatchScheduler

logger = logging.getLogger(__name__)


def evacuate(
    gateway: ClusterGateway,
    request: EvictionRequest,
    *,
    sleep: Callable[[float], None] | None = None,
    cancel_event: threading.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> EvictionReport:
    """Evict the pods of ``request.namespace`` running on ``request.node_name``.

    The guard runs first and nothing is listed or deleted unless it allows the
    request. The pod list is read once; batches then run in order with
    ``request.interval`` between them. The first failed delete aborts the run.

    ``sleep`` replaces the pause between batches. Without it the pause waits on
    ``cancel_event`` when one is given, so cancelling cuts the wait short.

    Rejections, failures and cancellation are returned as the report status.
    Only a failure to list pods raises (``GatewayError``).
    """

    guard = evaluate(gateway, request)
    if guard.rejected:
        return EvictionReport(
            request=request,
            status=RunStatus.REJECTED,
            message=guard.message or "request rejected",
            guard=guard,
        )

    snapshot = gateway.list_pods(request.namespace, request.node_name)
    if not snapshot:
        message = f"no pods found for namespace {request.namespace} on node {request.node_name}"
        logger.info(message)
        return EvictionReport(request=request, status=RunStatus.EMPTY, message=message, guard=guard)

    if request.verbose and on_progress is not None:
        on_progress(ProgressEvent(kind=ProgressKind.DELETING_PODS, dry_run=request.dry_run))

    executor = functools.partial(
        delete_batch,
        gateway,
        dry_run=request.dry_run,
        verbose=request.verbose,
        on_progress=on_progress,
    )
    scheduler = BatchScheduler(sleep=sleep, cancel_event=cancel_event, on_progress=on_progress)
    result = scheduler.run(
        executor,
        snapshot,
        request.batch_size,
        request.interval_seconds,
        verbose=request.verbose,
    )

    report = EvictionReport(
        request=request,
        status=RunStatus.COMPLETED,
        message=SUCCESS_MESSAGE,
        guard=guard,
        pods_found=len(snapshot),
        batches_planned=result.batches_planned,
        batches_completed=result.batches_completed,
        sleeps=result.sleeps,
        deleted=list(result.deleted),
    )

    if result.failure is not None and result.failure.failed_pod is not None:
        pod = result.failure.failed_pod
        report.failure = ExecutionError(
            pod=pod.name,
            namespace=pod.namespace,
            cause=result.failure.cause or "unknown error",
            deleted_count=len(result.deleted),
        )
        report.status = RunStatus.FAILED
        report.message = str(report.failure)
    elif result.cancelled:
        report.status = RunStatus.CANCELLED
        report.message = (
            f"cancelled after {result.batches_completed} of {result.batches_planned} batch(es); "
            f"{len(result.deleted)} pod(s) deleted"
        )

    logger.info("eviction on %s/%s finished: %s", request.namespace, request.node_name, report.status.value)
    return report
