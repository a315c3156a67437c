"""
Profile — which toolchain program to drive and with which selectors.

The profile holds every knob of the matrix so that target resolution and
execution carry no opinions.  Moving the pinned version forward is a
profile change, not a code change.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from toolchain_matrix.core.targets import DEFAULT_TARGET

if TYPE_CHECKING:
    from toolchain_matrix.config import Settings


@dataclass(frozen=True)
class MatrixProfile:
    """Toolchain program plus the ordered selectors every leaf target runs."""

    program: str
    pinned: str
    stable: str
    default_target: str = DEFAULT_TARGET

    def __post_init__(self):
        if not self.program:
            raise ValueError("toolchain program must not be empty")
        if not self.pinned or not self.stable:
            raise ValueError("both toolchain selectors must be non-empty")

    @property
    def selectors(self) -> Tuple[str, str]:
        """Pinned first, then stable.  The order is part of the contract."""
        return (self.pinned, self.stable)

    @property
    def profile_id(self) -> str:
        return f"{self.program}-{self.pinned}-{self.stable}"

    @classmethod
    def v1(cls) -> "MatrixProfile":
        """The stock profile: cargo, pinned to 1.31.0, plus stable."""
        return cls(program="cargo", pinned="1.31.0", stable="stable")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "MatrixProfile":
        return cls(
            program=settings.TOOLCHAIN_PROGRAM,
            pinned=settings.PINNED_TOOLCHAIN,
            stable=settings.STABLE_TOOLCHAIN,
        )
