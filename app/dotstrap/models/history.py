"""Run history models.

Every real (non dry-run) setup run is recorded as one line in a JSONL
history file so that `dotstrap history` can show what was provisioned
and when.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from dotstrap.models.step import StepResult, StepStatus


@dataclass(frozen=True, slots=True)
class StepRecord:
    """Persisted outcome of one step within a run.

    Attributes:
        name: Step identifier.
        status: Step outcome.
        message: Optional detail (error output, skip reason).
    """

    name: str
    status: StepStatus
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {"name": self.name, "status": self.status.value}
        if self.message is not None:
            result["message"] = self.message
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StepRecord:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If status is invalid.
        """
        return cls(
            name=data["name"],
            status=StepStatus(data["status"]),
            message=data.get("message"),
        )

    @classmethod
    def from_result(cls, result: StepResult) -> StepRecord:
        return cls(name=result.name, status=result.status, message=result.message)


@dataclass(frozen=True, slots=True)
class RunRecord:
    """Record of a single setup run.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the run finished (ISO 8601 format with timezone).
        variant: Setup variant ("host" or "container").
        success: Whether every step completed without failure.
        steps: Outcome of each step that was attempted, in order.
        metadata: Additional context (command, version).
    """

    id: str
    timestamp: str
    variant: str
    success: bool
    steps: tuple[StepRecord, ...]
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Run record ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        try:
            datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        except ValueError as e:
            msg = f"Invalid timestamp: {self.timestamp!r}"
            raise ValueError(msg) from e

    @property
    def changed_count(self) -> int:
        """Number of steps that modified the system."""
        return sum(1 for s in self.steps if s.status == StepStatus.DONE)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "variant": self.variant,
            "success": self.success,
            "steps": [step.to_dict() for step in self.steps],
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRecord:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If step data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            variant=data["variant"],
            success=data.get("success", True),
            steps=tuple(StepRecord.from_dict(step) for step in data.get("steps", [])),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> RunRecord:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_run_record(
    variant: str,
    results: list[StepResult],
    success: bool,
    metadata: dict[str, Any] | None = None,
) -> RunRecord:
    """Factory function to create a new RunRecord.

    Automatically generates a unique ID and current timestamp.

    Args:
        variant: Setup variant that ran.
        results: Step results in execution order.
        success: Whether the run completed without a failed step.
        metadata: Optional additional context.

    Returns:
        New RunRecord with auto-generated ID and timestamp.
    """
    return RunRecord(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        variant=variant,
        success=success,
        steps=tuple(StepRecord.from_result(r) for r in results),
        metadata=metadata or {},
    )
