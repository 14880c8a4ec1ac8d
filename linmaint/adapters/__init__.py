"""Adapters — bindings for the external commands linmaint drives.

Public re-exports for convenient access.
"""

from linmaint.adapters.base import Adapter, ExecutionContext
from linmaint.adapters.mock import MockAdapter
from linmaint.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
]
