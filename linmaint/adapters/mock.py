"""
Mock adapter — test double and dry-run stand-in for the shell adapter.

Records every step it is asked to run without touching the system.
Configurable to return success, failure, or custom responses per step.
"""

from __future__ import annotations

import logging

from linmaint.adapters.base import Adapter, ExecutionContext
from linmaint.core.models.step import Receipt

logger = logging.getLogger(__name__)


class MockAdapter(Adapter):
    """Universal mock adapter.

    By default, returns success for everything. Can be configured
    with custom responses per step ID.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def commands(self) -> list[list[str]]:
        """The argv of every executed step, in order."""
        return [ctx.step.argv for ctx in self._call_log]

    def set_response(self, step_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific step ID."""
        self._responses[step_id] = receipt

    def set_output(self, step_id: str, output: str) -> None:
        """Make a specific step succeed with the given stdout."""
        self._responses[step_id] = Receipt.success(
            adapter=self._name, step_id=step_id, output=output, return_code=0,
        )

    def set_failure(self, step_id: str, error: str = "Mock failure") -> None:
        """Configure a specific step to fail."""
        self._responses[step_id] = Receipt.failure(
            adapter=self._name,
            step_id=step_id,
            error=error,
            return_code=1,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        logger.info("[mock] %s", context.step.command_line)

        if context.step.id in self._responses:
            return self._responses[context.step.id]

        return Receipt.success(
            adapter=self._name,
            step_id=context.step.id,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )
