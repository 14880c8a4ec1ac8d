"""
Domain models — Pydantic types for linmaint.

All models are re-exported here for convenient access:

    from linmaint.core.models import Ecosystem, Step, Receipt, TaskName
"""

from linmaint.core.models.step import Receipt, Step
from linmaint.core.models.system import Credential, Ecosystem, Helper, SystemProfile
from linmaint.core.models.task import Notice, TaskName, TaskReport

__all__ = [
    # system.py
    "Credential",
    "Ecosystem",
    "Helper",
    # task.py
    "Notice",
    # step.py
    "Receipt",
    "Step",
    "SystemProfile",
    "TaskName",
    "TaskReport",
]
