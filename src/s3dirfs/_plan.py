"""Mutation plans — explicit, inspectable sequences of store actions.

The store offers no transaction spanning several objects, so a directory
copy, rename or delete is a loop of independent requests. Building the loop
as a :class:`MutationPlan` first lets callers see how far an operation got
when one of the requests fails.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Optional


class Action(enum.Enum):
    """A single store request issued by a plan step."""

    PUT = "put"
    COPY = "copy"
    DELETE = "delete"
    DELETE_BATCH = "delete_batch"


class StepStatus(enum.Enum):
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


@dataclasses.dataclass
class PlanStep:
    """One request of a plan.

    :param action: The store request to issue.
    :param key: Source key (or listed prefix for a batch delete).
    :param dest_key: Destination key for copies.
    :param keys: Keys removed by a batch delete.
    """

    action: Action
    key: str
    dest_key: Optional[str] = None
    keys: tuple[str, ...] = ()
    status: StepStatus = StepStatus.PENDING
    error: Optional[str] = None

    def __str__(self) -> str:
        if self.action is Action.COPY:
            return f"{self.action.value} {self.key!r} -> {self.dest_key!r}"
        if self.action is Action.DELETE_BATCH:
            return f"{self.action.value} {len(self.keys)} key(s) under {self.key!r}"
        return f"{self.action.value} {self.key!r}"


@dataclasses.dataclass
class MutationPlan:
    """Ordered steps of one create, delete, copy or rename.

    :param operation: Name of the filesystem operation.
    :param path: The path the operation was called with.
    :param dest: The destination path, for copy and rename.
    :param steps: Steps in execution order.
    """

    operation: str
    path: str
    dest: Optional[str] = None
    steps: list[PlanStep] = dataclasses.field(default_factory=list)

    def add(self, action: Action, key: str, dest_key: str | None = None, keys: tuple[str, ...] = ()) -> PlanStep:
        step = PlanStep(action, key, dest_key=dest_key, keys=keys)
        self.steps.append(step)
        return step

    def _with_status(self, status: StepStatus) -> list[PlanStep]:
        return [step for step in self.steps if step.status is status]

    @property
    def completed(self) -> list[PlanStep]:
        return self._with_status(StepStatus.DONE)

    @property
    def failed(self) -> list[PlanStep]:
        return self._with_status(StepStatus.FAILED)

    @property
    def pending(self) -> list[PlanStep]:
        return self._with_status(StepStatus.PENDING)

    @property
    def is_complete(self) -> bool:
        """``True`` once every step has succeeded."""
        return all(step.status is StepStatus.DONE for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)
