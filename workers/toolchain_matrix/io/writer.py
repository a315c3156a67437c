"""
Writer — serialize run outputs to disk.

Filesystem layout per run:
    <output_dir>/run_receipt.json
    <output_dir>/logs/<index>.<target>.<selector>.stdout
    <output_dir>/logs/<index>.<target>.<selector>.stderr
"""
import json
from pathlib import Path
from typing import Optional, Tuple

from toolchain_matrix.io.schema import RunReceipt

RECEIPT_NAME = "run_receipt.json"


def write_invocation_logs(
    output_dir: Path,
    stem: str,
    stdout: str,
    stderr: str,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Write captured streams under ``logs/``.

    Only streams with content are written.  Returns the paths relative
    to *output_dir* (posix form), or None for a stream not written.
    """
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    stdout_rel = None
    stderr_rel = None
    if stdout:
        path = logs_dir / f"{stem}.stdout"
        path.write_text(stdout, encoding="utf-8")
        stdout_rel = path.relative_to(output_dir).as_posix()
    if stderr:
        path = logs_dir / f"{stem}.stderr"
        path.write_text(stderr, encoding="utf-8")
        stderr_rel = path.relative_to(output_dir).as_posix()
    return stdout_rel, stderr_rel


def write_receipt(receipt: RunReceipt, output_dir: Path) -> Path:
    """
    Write run_receipt.json into *output_dir*.

    Creates *output_dir* if it does not exist.
    Returns the receipt path.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_path = output_dir / RECEIPT_NAME
    receipt_path.write_text(
        json.dumps(
            receipt.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return receipt_path
