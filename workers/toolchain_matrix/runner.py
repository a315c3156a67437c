"""
Matrix runner — top-level orchestration: target names → run receipt.

This module ties target resolution, execution, verdicts and IO together
into a single ``run_targets`` function that can be called from the CLI
or from Python.

Execution is strictly sequential.  The first failing invocation ends the
run: later invocations of the same phase, later phases (a composite's
test phase after a failed build phase) and later requested targets are
never started.
"""
from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import List, Optional, Sequence

from toolchain_matrix.core.executor import Executor, SubprocessExecutor
from toolchain_matrix.core.targets import Phase, UnknownTargetError, resolve_plan
from toolchain_matrix.io.schema import InvocationRecord, RunReceipt, now_iso
from toolchain_matrix.io.writer import write_invocation_logs, write_receipt
from toolchain_matrix.policy.profile import MatrixProfile
from toolchain_matrix.policy.verdict import (
    FailureReason,
    Status,
    judge_invocation,
    run_exit_code,
)

log = logging.getLogger(__name__)

# Same code argparse uses for usage errors
EXIT_USAGE = 2


def run_targets(
    names: Sequence[str],
    profile: MatrixProfile | None = None,
    executor: Executor | None = None,
    output_dir: Path | None = None,
    dry_run: bool = False,
    project_dir: Path | None = None,
) -> RunReceipt:
    """
    Run one or more targets, fail-fast.

    Parameters
    ----------
    names : sequence of str
        Target names in request order.  Empty means the profile's
        default target.
    profile : MatrixProfile, optional
        Toolchain program and selectors.  Defaults to MatrixProfile.v1().
    executor : callable, optional
        ``argv -> ExecResult``.  Defaults to a pass-through
        SubprocessExecutor in *project_dir*.
    output_dir : Path, optional
        Where to write run_receipt.json and captured logs.  If None,
        nothing is written to disk.
    dry_run : bool
        Resolve and log every command without executing any.
    project_dir : Path, optional
        Working directory for the default executor; recorded in the
        receipt either way.

    Returns
    -------
    RunReceipt
        ``exit_code`` is 0 on success, the failing invocation's exit code
        on failure, and 2 for an unknown target.
    """
    if profile is None:
        profile = MatrixProfile.v1()
    if executor is None:
        executor = SubprocessExecutor(cwd=project_dir)

    requested = list(names) or [profile.default_target]
    receipt = RunReceipt(
        profile_id=profile.profile_id,
        requested=requested,
        program=profile.program,
        selectors=list(profile.selectors),
        project_dir=str(project_dir) if project_dir else None,
        dry_run=dry_run,
    )

    # ── Step 1: resolve every name before anything runs ─────────────
    try:
        plan = resolve_plan(requested, profile.selectors)
    except UnknownTargetError as e:
        log.error("%s", e)
        return _finish(
            receipt,
            Status.FAILED,
            [FailureReason.UNKNOWN_TARGET.value],
            EXIT_USAGE,
            output_dir,
        )

    log.debug(
        "Plan for %s: %s",
        " ".join(requested),
        ", ".join(phase.target for phase in plan),
    )

    # ── Step 2: execute phases in order, stop at the first failure ──
    for phase in plan:
        failure = _run_phase(phase, profile, executor, receipt, output_dir, dry_run)
        if failure is not None:
            reasons, code = failure
            return _finish(receipt, Status.FAILED, reasons, code, output_dir)

    return _finish(receipt, Status.SUCCESS, [], 0, output_dir)


def run_target(name: str, **kwargs) -> RunReceipt:
    """Convenience wrapper for a single target name."""
    return run_targets([name], **kwargs)


def _run_phase(
    phase: Phase,
    profile: MatrixProfile,
    executor: Executor,
    receipt: RunReceipt,
    output_dir: Optional[Path],
    dry_run: bool,
) -> Optional[tuple[List[str], int]]:
    """Run every invocation of *phase*; return (reasons, exit_code) on failure."""
    for inv in phase.invocations:
        argv = inv.to_argv(profile.program)
        index = len(receipt.invocations)
        record = InvocationRecord(
            index=index,
            target=phase.target,
            selector=inv.selector,
            operation=inv.operation.value,
            configuration=inv.configuration.value,
            verbosity=inv.verbosity.value,
            command=argv,
            status=Status.SKIPPED.value,
        )
        receipt.invocations.append(record)

        log.info("[%s] %s", phase.target, shlex.join(argv))
        if dry_run:
            continue

        result = executor(argv)
        status, reasons = judge_invocation(result)

        record.exit_code = result.exit_code
        record.status = status.value
        record.reasons = reasons
        record.duration_ms = result.duration_ms

        if output_dir is not None and (result.stdout or result.stderr):
            stem = f"{index:02d}.{phase.target}.{inv.selector}"
            record.stdout_path_rel, record.stderr_path_rel = write_invocation_logs(
                output_dir, stem, result.stdout, result.stderr
            )

        if status != Status.SUCCESS:
            log.error(
                "[%s] %s failed with exit code %d (%s)",
                phase.target,
                inv.label,
                result.exit_code,
                ", ".join(reasons),
            )
            return reasons, run_exit_code(result)

    return None


def _finish(
    receipt: RunReceipt,
    status: Status,
    reasons: List[str],
    exit_code: int,
    output_dir: Optional[Path],
) -> RunReceipt:
    receipt.status = status.value
    receipt.reasons = reasons
    receipt.exit_code = exit_code
    receipt.finished_at = now_iso()

    if status == Status.SUCCESS:
        log.info(
            "%s: %d invocation(s) %s",
            " ".join(receipt.requested),
            len(receipt.invocations),
            "planned" if receipt.dry_run else "succeeded",
        )

    if output_dir is not None:
        path = write_receipt(receipt, output_dir)
        log.info("Receipt saved: %s", path)
    return receipt
