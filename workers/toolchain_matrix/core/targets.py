"""
Targets — the target table and plan resolution.

Two kinds of targets:
  1. Leaf targets      — issue invocations directly, one per toolchain
                         selector, in selector order (pinned first).
  2. Composite targets — ordered lists of other targets; ``all`` is
                         build then test, ``all-release`` is
                         build-release then test-release.

A *plan* is the flattened list of phases (one phase per leaf target) for
a request.  Resolution is pure: no processes are started here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from toolchain_matrix.core.invocation import (
    Configuration,
    Invocation,
    Operation,
    Verbosity,
)


class UnknownTargetError(ValueError):
    """Raised when a requested target name is not in the table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"unknown target {name!r} (expected one of: {', '.join(TARGET_NAMES)})"
        )


# ── Target definitions ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class LeafTarget:
    name: str
    description: str
    operation: Operation
    configuration: Configuration
    verbosity: Verbosity

    def invocations(self, selectors: Sequence[str]) -> Tuple[Invocation, ...]:
        """One invocation per selector, in the order given."""
        return tuple(
            Invocation(
                selector=sel,
                operation=self.operation,
                configuration=self.configuration,
                verbosity=self.verbosity,
            )
            for sel in selectors
        )


@dataclass(frozen=True)
class CompositeTarget:
    name: str
    description: str
    steps: Tuple[str, ...]


Target = Union[LeafTarget, CompositeTarget]


_TARGETS: Tuple[Target, ...] = (
    CompositeTarget(
        name="all",
        description="compiles and tests the code",
        steps=("build", "test"),
    ),
    CompositeTarget(
        name="all-release",
        description="compiles and tests the code in release mode",
        steps=("build-release", "test-release"),
    ),
    LeafTarget(
        name="build",
        description="compiles the code",
        operation=Operation.BUILD,
        configuration=Configuration.DEBUG,
        verbosity=Verbosity.DEFAULT,
    ),
    LeafTarget(
        name="build-release",
        description="compiles the code in release mode",
        operation=Operation.BUILD,
        configuration=Configuration.RELEASE,
        verbosity=Verbosity.VERBOSE,
    ),
    LeafTarget(
        name="test",
        description="runs unit tests",
        operation=Operation.TEST,
        configuration=Configuration.DEBUG,
        verbosity=Verbosity.QUIET,
    ),
    LeafTarget(
        name="test-release",
        description="runs unit tests in release mode",
        operation=Operation.TEST,
        configuration=Configuration.RELEASE,
        verbosity=Verbosity.VERBOSE,
    ),
)

TARGETS: Dict[str, Target] = {t.name: t for t in _TARGETS}
TARGET_NAMES: Tuple[str, ...] = tuple(TARGETS)
DEFAULT_TARGET = "all"


def get_target(name: str) -> Target:
    try:
        return TARGETS[name]
    except KeyError:
        raise UnknownTargetError(name) from None


# ── Resolution ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Phase:
    """The invocations contributed by one leaf target."""
    target: str
    invocations: Tuple[Invocation, ...]


def leaf_targets(name: str) -> List[LeafTarget]:
    """Expand *name* into its leaf targets, in execution order."""
    target = get_target(name)
    if isinstance(target, LeafTarget):
        return [target]
    leaves: List[LeafTarget] = []
    for step in target.steps:
        leaves.extend(leaf_targets(step))
    return leaves


def leaf_names(name: str) -> List[str]:
    return [leaf.name for leaf in leaf_targets(name)]


def resolve_target(name: str, selectors: Sequence[str]) -> List[Phase]:
    """Resolve a single target into its ordered phases."""
    return [
        Phase(target=leaf.name, invocations=leaf.invocations(selectors))
        for leaf in leaf_targets(name)
    ]


def resolve_plan(names: Sequence[str], selectors: Sequence[str]) -> List[Phase]:
    """
    Resolve a request of one or more target names into a flat plan.

    Every name is validated before any phase is produced, so an unknown
    name anywhere in the request yields no plan at all.  A leaf target
    that already appears earlier in the plan is not repeated.
    """
    for name in names:
        get_target(name)

    plan: List[Phase] = []
    seen = set()
    for name in names:
        for phase in resolve_target(name, selectors):
            if phase.target in seen:
                continue
            seen.add(phase.target)
            plan.append(phase)
    return plan


def describe_targets() -> List[Tuple[str, str]]:
    """(name, description) pairs in table order."""
    return [(t.name, t.description) for t in _TARGETS]
