from __future__ import annotations

from collections.abc import Callable

from conftest import FakeGateway
from dolphin.executor import delete_batch
from dolphin.models import ProgressEvent, ProgressKind


def test_deletes_every_pod_in_order(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster(3)
    pods = list(gateway.pods)
    outcome = delete_batch(gateway, pods)

    assert outcome.ok
    assert [pod.name for pod in outcome.deleted] == ["web-0", "web-1", "web-2"]
    assert gateway.deleted == ["web-0", "web-1", "web-2"]
    assert gateway.pods == []


def test_dry_run_flags_request_and_changes_nothing(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster(3)
    before = list(gateway.pods)
    outcome = delete_batch(gateway, before, dry_run=True)

    assert outcome.ok
    assert len(outcome.deleted) == 3
    assert gateway.dry_run_flags == [True, True, True]
    assert gateway.pods == before
    assert gateway.deleted == []


def test_stops_at_first_failure(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster(4, fail_on={"web-1"})
    outcome = delete_batch(gateway, list(gateway.pods))

    assert not outcome.ok
    assert outcome.failed_pod is not None
    assert outcome.failed_pod.name == "web-1"
    assert outcome.cause is not None
    assert "forbidden" in outcome.cause
    assert [pod.name for pod in outcome.deleted] == ["web-0"]
    assert gateway.delete_calls == 2


def test_verbose_names_each_pod_before_deleting(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster(2)
    events: list[ProgressEvent] = []
    delete_batch(gateway, list(gateway.pods), verbose=True, on_progress=events.append)

    assert [event.kind for event in events] == [ProgressKind.POD_DELETING] * 2
    assert [event.pod.name for event in events if event.pod] == ["web-0", "web-1"]


def test_quiet_mode_emits_nothing(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster(2)
    events: list[ProgressEvent] = []
    delete_batch(gateway, list(gateway.pods), on_progress=events.append)
    assert events == []
