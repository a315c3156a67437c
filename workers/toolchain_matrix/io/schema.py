"""
Schema — Pydantic models for the run receipt.

One output per run:
  run_receipt.json — requested targets, overall verdict, and one record
                     per invocation in execution order.

Runtime contract fields (present in every receipt):
  package_name, runner_version, schema_version, profile_id.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from toolchain_matrix import PACKAGE_NAME, RUNNER_VERSION, SCHEMA_VERSION


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


# ── Per-invocation record ────────────────────────────────────────────────────

class InvocationRecord(BaseModel):
    """One toolchain call as it was planned and (unless dry run) executed."""

    index: int                # 0-based position in the run
    target: str               # leaf target that issued it
    selector: str
    operation: str            # build | test
    configuration: str        # debug | release
    verbosity: str            # default | verbose | quiet
    command: List[str]

    exit_code: Optional[int] = None   # None when skipped
    status: str                       # SUCCESS | FAILED | SKIPPED
    reasons: List[str] = Field(default_factory=list)
    duration_ms: int = 0

    # Only set in capture mode, and only when the stream had content
    stdout_path_rel: Optional[str] = None
    stderr_path_rel: Optional[str] = None


# ── Run receipt ──────────────────────────────────────────────────────────────

class RunReceipt(BaseModel):
    """Run-level summary — run_receipt.json."""

    package_name: str = PACKAGE_NAME
    runner_version: str = RUNNER_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    requested: List[str]
    program: str
    selectors: List[str]
    project_dir: Optional[str] = None
    dry_run: bool = False

    status: str = "RUNNING"   # RUNNING | SUCCESS | FAILED
    reasons: List[str] = Field(default_factory=list)
    exit_code: int = 0

    invocations: List[InvocationRecord] = Field(default_factory=list)

    started_at: str = Field(default_factory=now_iso)
    finished_at: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "SUCCESS"

    def commands(self) -> List[List[str]]:
        """Argv of every recorded invocation, in order."""
        return [rec.command for rec in self.invocations]
