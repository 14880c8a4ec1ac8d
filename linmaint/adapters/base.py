"""
Adapter base — the protocol contract between the runner and tools.

The runner only talks to adapters through this protocol, never
directly to external commands.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from linmaint.core.models.step import Receipt, Step
from linmaint.core.models.system import Credential


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute a step.

    The credential travels here rather than in any module-level state,
    so its lifetime is exactly the run that created it.
    """

    step: Step
    credential: Credential = Field(default_factory=Credential)
    privilege_tool: str = "sudo"


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the step can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the step and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
