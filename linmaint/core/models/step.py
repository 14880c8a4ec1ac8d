"""
Step and Receipt models — the execution contract.

A Step is one external command in a task's ordered sequence. A Receipt
is what running it produced. The runner sends Steps, adapters return
Receipts. Never exceptions.
"""

from __future__ import annotations

import shlex
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Step(BaseModel):
    """One command of a maintenance task.

    Steps are built by the task catalog and dispatched through the
    adapter registry.
    """

    id: str                         # e.g. "update-system:0"
    name: str = ""                  # human-readable name
    adapter: str = "shell"          # which adapter handles this
    argv: list[str] = Field(default_factory=list)
    privileged: bool = False        # run through the privilege gate
    feeds_credential: bool = False  # unprivileged, but its own sudo reads stdin
    capture: bool = False           # keep stdout for the runner to inspect
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def command_line(self) -> str:
        """Shell-quoted rendering of argv, for logs and dry runs."""
        return shlex.join(self.argv)


class Receipt(BaseModel):
    """Result of an adapter execution.

    The adapter NEVER raises exceptions — failures are captured here.
    """

    adapter: str
    step_id: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    return_code: int | None = None
    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the step succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the step failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        step_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            step_id=step_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        step_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            step_id=step_id,
            status="failed",
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        adapter: str,
        step_id: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt."""
        return cls(
            adapter=adapter,
            step_id=step_id,
            status="skipped",
            output=reason,
            **kwargs,
        )
