"""
Command-line entry point.

Usage::

    toolchain-matrix                      # default target (all)
    toolchain-matrix build-release
    toolchain-matrix build test --capture --receipt-dir out/
    toolchain-matrix --list
    python -m toolchain_matrix all-release --dry-run

Exit code is 0 on success, the failing toolchain invocation's exit code
on failure, and 2 for usage errors (including unknown targets).
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from toolchain_matrix import __version__
from toolchain_matrix.config import Settings
from toolchain_matrix.core.executor import SubprocessExecutor
from toolchain_matrix.core.targets import describe_targets
from toolchain_matrix.policy.profile import MatrixProfile
from toolchain_matrix.runner import run_targets


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolchain-matrix",
        description="Build and test a project against a pinned and the stable toolchain.",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        metavar="TARGET",
        help="Targets to run in order (default: all). See --list.",
    )
    parser.add_argument("--list", action="store_true", help="List targets and exit")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print commands without running them"
    )
    parser.add_argument(
        "--capture",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Capture toolchain output (relayed after each command, logged with the receipt); "
        "--no-capture forces pass-through",
    )
    parser.add_argument("--receipt-dir", type=Path, default=None, help="Write run_receipt.json here")
    parser.add_argument("--project-dir", type=Path, default=None, help="Run the toolchain in this directory")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_targets(profile: MatrixProfile) -> None:
    rows = describe_targets()
    width = max(len(name) for name, _ in rows)
    print("Available targets:")
    for name, description in rows:
        marker = " (default)" if name == profile.default_target else ""
        print(f"    {name:<{width}}  # {description}{marker}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as e:
        parser.error(f"invalid MATRIX_* setting:\n{e}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    try:
        profile = MatrixProfile.from_settings(settings)
    except ValueError as e:
        parser.error(str(e))

    if args.list:
        print_targets(profile)
        return 0

    project_dir = args.project_dir or (
        Path(settings.PROJECT_DIR) if settings.PROJECT_DIR else None
    )
    if project_dir is not None and not project_dir.is_dir():
        parser.error(f"project directory does not exist: {project_dir}")

    receipt_dir = args.receipt_dir or (
        Path(settings.RECEIPT_DIR) if settings.RECEIPT_DIR else None
    )
    capture = settings.CAPTURE_OUTPUT if args.capture is None else args.capture

    receipt = run_targets(
        args.targets,
        profile=profile,
        executor=SubprocessExecutor(cwd=project_dir, capture=capture),
        output_dir=receipt_dir,
        dry_run=args.dry_run,
        project_dir=project_dir,
    )
    return receipt.exit_code


if __name__ == "__main__":
    sys.exit(main())
