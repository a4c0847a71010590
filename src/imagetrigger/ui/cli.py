# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from imagetrigger.adapters.manifest import dump_workload
from imagetrigger.app import evaluate_manifest, reconcile_workloads, register_workload
from imagetrigger.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep workload container images in sync with image tags"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser(
        "evaluate",
        help="Evaluate a workload manifest against a tag file without storing anything",
    )
    evaluate.add_argument("manifest", type=Path, help="Workload manifest (JSON)")
    evaluate.add_argument(
        "--tags",
        type=Path,
        required=True,
        help="JSON list of {namespace, name, reference, resourceVersion} entries",
    )

    apply = subparsers.add_parser("apply", help="Store a workload manifest")
    apply.add_argument("manifest", type=Path, help="Workload manifest (JSON)")

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Run one reconciliation pass over stored workloads",
    )
    reconcile.add_argument("--namespace", type=str, help="Only reconcile this namespace")
    reconcile.add_argument(
        "--name",
        type=str,
        help="Only reconcile this workload (requires --namespace)",
    )

    args = parser.parse_args(list(argv))
    if args.command == "reconcile" and args.name is not None and args.namespace is None:
        parser.error("--name requires --namespace")
    return args


def _load_json(path: Path) -> object:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    payloads: dict[str, object] = {}
    try:
        if parsed_args.command in {"evaluate", "apply"}:
            payloads["manifest"] = _load_json(parsed_args.manifest)
        if parsed_args.command == "evaluate":
            payloads["tags"] = _load_json(parsed_args.tags)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "evaluate":
            candidate = evaluate_manifest(payloads["manifest"], payloads["tags"])
            if candidate is None:
                log.info("No update required")
            else:
                print(json.dumps(dump_workload(candidate), indent=2))
        elif parsed_args.command == "apply":
            register_workload(payloads["manifest"])
        elif parsed_args.command == "reconcile":
            summary = reconcile_workloads(
                namespace=parsed_args.namespace,
                name=parsed_args.name,
            )
            for namespace, name in summary.updated:
                print(f"updated {namespace}/{name}")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ValidationError:
        log.exception("Invalid manifest or tag file")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
