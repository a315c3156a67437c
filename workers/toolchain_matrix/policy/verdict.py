"""
Verdict — status and reason vocabulary for invocations and runs.

Policy only classifies; it never changes control flow.  Every failure
halts the run the same way, the reason is recorded for the receipt.
"""
import re
from enum import Enum, unique
from typing import List, Tuple

from toolchain_matrix.core.executor import ExecResult


@unique
class Status(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@unique
class FailureReason(str, Enum):
    UNKNOWN_TARGET = "UNKNOWN_TARGET"
    TOOLCHAIN_NOT_FOUND = "TOOLCHAIN_NOT_FOUND"
    INVOCATION_FAILED = "INVOCATION_FAILED"


# rustup: "error: toolchain '1.31.0-x86_64-unknown-linux-gnu' is not installed"
_MISSING_TOOLCHAIN = re.compile(r"toolchain '[^']+' is not installed")


def judge_invocation(result: ExecResult) -> Tuple[Status, List[str]]:
    """
    Classify one subprocess outcome.

    Returns (Status, list_of_reason_strings).  Exit code 0 is the only
    success; a missing toolchain is told apart from a build or test
    failure only when there is evidence for it.
    """
    if result.exit_code == 0:
        return Status.SUCCESS, []

    if result.launch_error is not None or _MISSING_TOOLCHAIN.search(result.stderr):
        return Status.FAILED, [FailureReason.TOOLCHAIN_NOT_FOUND.value]

    return Status.FAILED, [FailureReason.INVOCATION_FAILED.value]


def run_exit_code(result: ExecResult) -> int:
    """Exit code for the whole run after *result* failed; never 0."""
    return result.exit_code if result.exit_code > 0 else 1
