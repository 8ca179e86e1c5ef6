"""CLI entrypoint for the RCA agent."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from pod_rca import __version__
from pod_rca.agent import ScanOutcome, WorkloadScanner, build_pipeline, print_run, run_analysis
from pod_rca.config import Settings, get_settings
from pod_rca.observation import ClusterInfo
from pod_rca.report.renderer import NOT_AVAILABLE


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pod-rca",
        description="Pod RCA: diagnose failing Kubernetes workloads and print a root cause report.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a single pod")
    analyze.add_argument("pod", help="Name of the pod to analyze")
    analyze.add_argument(
        "--namespace",
        "-n",
        default=None,
        help="Namespace of the pod (default: from env or 'default')",
    )
    analyze.add_argument("--json", action="store_true", help="Print the report as JSON")

    scan = sub.add_parser("scan", help="Analyze every pod carrying the scan label")
    scan.add_argument("--label", default=None, help="Label selector, e.g. rca=enabled")
    scan.add_argument("--once", action="store_true", help="Scan once and exit")
    scan.add_argument("--interval", type=int, default=None, help="Seconds between scans")
    scan.add_argument("--workers", type=int, default=None, help="Pods analyzed in parallel")
    return parser.parse_args(argv)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    if args.kubeconfig:
        updates["kubeconfig"] = args.kubeconfig
    if args.context:
        updates["context"] = args.context
    if args.command == "scan":
        if args.label:
            updates["scan_label"] = args.label
        if args.interval:
            updates["scan_interval_seconds"] = args.interval
        if args.workers:
            updates["scan_workers"] = args.workers
    return settings.model_copy(update=updates) if updates else settings


def _print_outcome(console: Console, o: ScanOutcome) -> None:
    if o.ok:
        status = o.report.title or NOT_AVAILABLE
    else:
        status = f"FAILED: {o.error}"
    console.print(f"{o.namespace}/{o.pod}: {status}", markup=False, highlight=False)


def _scan(settings: Settings, once: bool, console: Console) -> int:
    cluster = ClusterInfo(
        kubeconfig=str(settings.kubeconfig) if settings.kubeconfig else None,
        context=settings.context,
    )
    with build_pipeline(settings, cluster=cluster) as pipeline:
        scanner = WorkloadScanner(cluster, pipeline, settings.scan_label, workers=settings.scan_workers)
        if not once:
            scanner.run_forever(
                settings.scan_interval_seconds,
                on_outcome=lambda o: _print_outcome(console, o),
            )
            return 0
        outcomes = scanner.scan()
    for o in outcomes:
        _print_outcome(console, o)
    return 0 if all(o.ok for o in outcomes) else 2


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for pod-rca CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=Console(stderr=True))],
    )
    logger = logging.getLogger("pod_rca")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    console = Console()
    try:
        settings = _apply_overrides(get_settings(), args)
        if args.command == "scan":
            return _scan(settings, args.once, console)

        run = run_analysis(args.namespace, args.pod, settings=settings)
        print_run(run, console, as_json=args.json)
        return 0 if run.healthy else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logging.exception("Analysis failed")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
