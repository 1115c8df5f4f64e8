"""Tagged results for multi-step workflows.

Each step reports what happened instead of letting exceptions fall through,
so the orchestrator decides between continuing and aborting by inspecting
the tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class StepStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED_CONTINUE = "failed_continue"
    FAILED_ABORT = "failed_abort"


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """Outcome of one named workflow step."""

    step: str
    status: StepStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def completed(cls, step: str, value: Optional[T] = None) -> "StepResult[T]":
        return cls(step=step, status=StepStatus.COMPLETED, value=value)

    @classmethod
    def skipped(cls, step: str) -> "StepResult[T]":
        return cls(step=step, status=StepStatus.SKIPPED)

    @classmethod
    def failed(cls, step: str, error: str, *, abort: bool = False) -> "StepResult[T]":
        status = StepStatus.FAILED_ABORT if abort else StepStatus.FAILED_CONTINUE
        return cls(step=step, status=status, error=error)

    @property
    def ok(self) -> bool:
        return self.status == StepStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"step": self.step, "status": self.status.value}
        if self.error:
            data["error"] = self.error
        return data


__all__ = ["StepResult", "StepStatus"]
