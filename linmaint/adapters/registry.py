"""
Adapter registry — central dispatch for step execution.

The registry handles registration, lookup, mock mode, and step
execution. The runner never talks to adapters directly — always
through the registry.
"""

from __future__ import annotations

import logging
import time
from linmaint.adapters.base import Adapter, ExecutionContext
from linmaint.core.models.step import Receipt, Step
from linmaint.core.models.system import Credential

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters.

    Features:
        - Register adapters by name
        - Mock mode: route every step to a mock (``--dry-run``)
        - Execute steps through the appropriate adapter
    """

    def __init__(self):
        self._adapters: dict[str, Adapter] = {}
        self._mock_adapter: Adapter | None = None

    def set_mock_mode(self, mock_adapter: Adapter | None) -> None:
        """Route every step to ``mock_adapter``; ``None`` turns mock mode off."""
        self._mock_adapter = mock_adapter

    def register(self, adapter: Adapter) -> None:
        """Register an adapter under its name."""
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        """Look up an adapter by name."""
        return self._adapters.get(name)

    def execute_step(
        self,
        step: Step,
        credential: Credential | None = None,
        privilege_tool: str = "sudo",
    ) -> Receipt:
        """Execute a step through the appropriate adapter.

        This is the main dispatch method. It:
        1. Resolves the adapter (or mock)
        2. Builds the execution context
        3. Validates the step
        4. Executes
        5. Returns a Receipt (never raises)
        """
        start_time = time.monotonic()

        context = ExecutionContext(
            step=step,
            credential=credential or Credential(),
            privilege_tool=privilege_tool,
        )

        # Resolve adapter
        adapter = self._mock_adapter or self._adapters.get(step.adapter)

        if adapter is None:
            return Receipt.failure(
                adapter=step.adapter,
                step_id=step.id,
                error=f"No adapter registered for '{step.adapter}'",
            )

        # Validate
        try:
            is_valid, error_msg = adapter.validate(context)
            if not is_valid:
                return Receipt.failure(
                    adapter=step.adapter,
                    step_id=step.id,
                    error=f"Validation failed: {error_msg}",
                )
        except Exception as e:
            return Receipt.failure(
                adapter=step.adapter,
                step_id=step.id,
                error=f"Validation error: {e}",
            )

        # Execute
        try:
            receipt = adapter.execute(context)
        except Exception as e:
            # Adapters should never raise
            logger.error("Adapter %s raised during execution: %s", step.adapter, e)
            receipt = Receipt.failure(
                adapter=step.adapter,
                step_id=step.id,
                error=f"Unexpected error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        receipt.duration_ms = elapsed_ms

        return receipt
