from __future__ import annotations

import signal
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any

import typer
from click.core import ParameterSource
from rich.console import Console
from rich.text import Text

from dolphin import __version__
from dolphin.config import DolphinConfig, load_config
from dolphin.constants import HELP_HINT, NODE_NOT_GIVEN
from dolphin.errors import DolphinError
from dolphin.gateway import ClusterGateway, load_gateway
from dolphin.log import configure_logging
from dolphin.models import EvictionReport, EvictionRequest, ProgressEvent, ProgressKind, RunStatus
from dolphin.orchestrator import evacuate
from dolphin.settings import RuntimeSettings
from dolphin.utils.durations import format_duration, parse_duration
from dolphin.utils.output import OutputFormat, emit

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REJECTED = 2
EXIT_CANCELLED = 130

USAGE = """\
DOLPHIN: Delete On-demand Local Pods Hosted In a Node.

Delete all pods of a given namespace hosted on a given node. Useful when a node
is going into maintenance and its pods need to be scheduled on other nodes.
Most effective after cordoning the node.

\b
Examples:
  $ kubectl dolphin -n data -w worker1
  Operation completed successfully! Dolphin is underwater. 🐬

\b
  $ kubectl dolphin --node kube-worker2 --namespace web --batch-size 2 --dry-run -i 3s
  Operation completed successfully! Dolphin is underwater. 🐬

\b
  $ kubectl dolphin --node kube-worker2 --namespace webi -i 3s
  namespace does not exist: webi

\b
  $ kubectl dolphin --node kube-control-plane --namespace web
  control-plane node: refusing to evict pods from kube-control-plane
"""

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dolphin {__version__}")
        raise typer.Exit()


def _explicit(ctx: typer.Context, name: str) -> bool:
    source = ctx.get_parameter_source(name)
    return source is not None and source.name != ParameterSource.DEFAULT.name


def _parse_interval(value: str) -> timedelta:
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="'--interval'") from exc


def _make_gateway(
    cfg: DolphinConfig,
    settings: RuntimeSettings,
    kubeconfig: Path | None,
    context: str | None,
) -> ClusterGateway:
    in_cluster = settings.in_cluster if settings.in_cluster is not None else cfg.cluster.in_cluster
    return load_gateway(
        kubeconfig=kubeconfig or settings.kubeconfig or cfg.cluster.kubeconfig,
        context=context or settings.context or cfg.cluster.context,
        in_cluster=in_cluster,
    )


def _progress_printer(console: Console) -> Callable[[ProgressEvent], None]:
    def render(event: ProgressEvent) -> None:
        if event.kind is ProgressKind.DELETING_PODS:
            suffix = " (dry run)" if event.dry_run else ""
            console.print(Text(f"Deleting pods...{suffix}", style="yellow"), soft_wrap=True)
        elif event.kind is ProgressKind.BATCH_STARTED and event.batch is not None:
            console.print(
                Text(f"Batch {event.batch.index + 1}: {len(event.batch)} pod(s)", style="white"),
                soft_wrap=True,
            )
        elif event.kind is ProgressKind.POD_DELETING and event.pod is not None:
            console.print(
                Text.assemble(("Pod ", "blue"), (event.pod.name, "cyan"), (" is being deleted!", "blue")),
                soft_wrap=True,
            )
        elif event.kind is ProgressKind.WAITING:
            waited = format_duration(timedelta(seconds=event.interval_seconds or 0))
            console.print(Text(f"Waiting for {waited} ...", style="white"), soft_wrap=True)

    return render


@contextmanager
def _interruptible() -> Iterator[threading.Event]:
    cancel = threading.Event()

    def handler(signum: int, frame: Any) -> None:
        cancel.set()

    previous: dict[int, Any] = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[signum] = signal.signal(signum, handler)
        except ValueError:
            # not the main thread; run without interrupt support
            continue
    try:
        yield cancel
    finally:
        for signum, old in previous.items():
            signal.signal(signum, old)


def _exit_code(report: EvictionReport) -> int:
    if report.status is RunStatus.REJECTED:
        return EXIT_REJECTED
    if report.status is RunStatus.FAILED:
        return EXIT_FAILED
    if report.status is RunStatus.CANCELLED:
        return EXIT_CANCELLED
    return EXIT_OK


def _render_text(report: EvictionReport, out: Console, err: Console) -> None:
    if report.request.verbose and report.status in {RunStatus.COMPLETED, RunStatus.FAILED, RunStatus.CANCELLED}:
        emit(report, output=OutputFormat.TEXT, console=out)

    if report.status is RunStatus.COMPLETED:
        suffix = " (dry run)" if report.request.dry_run else ""
        out.print(Text(f"{report.message} Dolphin is underwater. 🐬{suffix}", style="green"), soft_wrap=True)
    elif report.status is RunStatus.EMPTY:
        err.print(Text(f"{report.message}.", style="yellow"), soft_wrap=True)
    elif report.status is RunStatus.REJECTED:
        err.print(Text(report.message, style="red"), soft_wrap=True)
        if report.guard.show_help:
            err.print(HELP_HINT, soft_wrap=True, markup=False)
    elif report.status is RunStatus.FAILED:
        err.print(Text(report.message, style="red"), soft_wrap=True)
        if report.deleted:
            err.print(
                Text(f"{len(report.deleted)} pod(s) were deleted before the failure.", style="yellow"),
                soft_wrap=True,
            )
    else:
        err.print(Text(report.message, style="yellow"), soft_wrap=True)


@app.command(help=USAGE)
def main(
    ctx: typer.Context,
    node: Annotated[
        str | None,
        typer.Option("--node", "-w", help="Node name on which the pod(s) are scheduled (required)"),
    ] = None,
    namespace: Annotated[str, typer.Option("--namespace", "-n", help="Namespace of the pod(s)")] = "default",
    batch_size: Annotated[int, typer.Option("--batch-size", "-b", help="Delete in batches of N pods")] = 1,
    interval: Annotated[
        str,
        typer.Option("--interval", "-i", help="Wait between batches, e.g. 3s or 1m30s (minimum 0s)"),
    ] = "0s",
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run/--no-dry-run", help="Validate deletions server-side without applying them"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--no-verbose", "-v", help="Show pod names while deleting"),
    ] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TEXT,
    kubeconfig: Annotated[Path | None, typer.Option("--kubeconfig", help="Path to the kubeconfig file")] = None,
    context: Annotated[str | None, typer.Option("--context", help="Kubeconfig context to use")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config-file", "-c", help="Path to a dolphin config file"),
    ] = None,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Logging level (default WARNING)")] = None,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
) -> None:
    """Evict the pods of one namespace from one node in guarded batches."""

    _ = version
    out = Console()
    err = Console(stderr=True)
    try:
        settings = RuntimeSettings()
        cfg = load_config(config_file).data
        configure_logging(log_level or settings.log_level or cfg.log_level, console=err)

        defaults = cfg.defaults
        if not _explicit(ctx, "namespace"):
            namespace = settings.namespace or defaults.namespace
        request = EvictionRequest(
            node_name=node or NODE_NOT_GIVEN,
            namespace=namespace,
            batch_size=batch_size if _explicit(ctx, "batch_size") else defaults.batch_size,
            interval=_parse_interval(interval) if _explicit(ctx, "interval") else defaults.interval,
            dry_run=dry_run if _explicit(ctx, "dry_run") else defaults.dry_run,
            verbose=verbose if _explicit(ctx, "verbose") else defaults.verbose,
        )

        gateway = _make_gateway(cfg, settings, kubeconfig, context)
        with _interruptible() as cancel:
            report = evacuate(
                gateway,
                request,
                cancel_event=cancel,
                on_progress=_progress_printer(out) if output == OutputFormat.TEXT else None,
            )
    except ValueError as exc:
        err.print(Text(f"error: {exc}", style="red"), soft_wrap=True)
        raise typer.Exit(code=EXIT_FAILED) from exc
    except DolphinError as exc:
        err.print(Text(f"error: {exc}", style="red"), soft_wrap=True)
        raise typer.Exit(code=EXIT_FAILED) from exc

    if output == OutputFormat.TEXT:
        _render_text(report, out, err)
    else:
        emit(report, output=output)

    code = _exit_code(report)
    if code != EXIT_OK:
        raise typer.Exit(code=code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
