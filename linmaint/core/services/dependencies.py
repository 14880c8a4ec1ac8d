"""
Dependency check — are the external tools we drive installed?

Tools are checked in a fixed order and the first missing one aborts
the check. The filesystem checker is looked up by absolute path, since
it often lives in /sbin which is not on an unprivileged user's PATH.
"""

from __future__ import annotations

import logging
import os
import shutil
from typing import Callable

from linmaint.core.config.loader import Settings
from linmaint.core.models.system import Ecosystem

logger = logging.getLogger(__name__)

# Arch-only tools: mirror ranking and cache pruning
ARCH_TOOLS = ["reflector", "paccache"]


class MissingDependency(Exception):
    """A required external tool is absent."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing dependency: {name}")


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def required_tools(ecosystem: Ecosystem, settings: Settings | None = None) -> list[str]:
    """Tools looked up on PATH, in check order.

    The filesystem checker is not included; it is checked separately
    by path.
    """
    settings = settings or Settings()
    tools = [settings.menu_tool, settings.notify_tool]
    if ecosystem is Ecosystem.ARCH:
        tools.extend(ARCH_TOOLS)
    return tools


def check_dependencies(
    ecosystem: Ecosystem,
    settings: Settings | None = None,
    which: Callable[[str], str | None] = shutil.which,
    is_executable: Callable[[str], bool] = _is_executable,
) -> None:
    """Verify every required tool, stopping at the first one missing.

    Raises:
        MissingDependency: Naming the first absent tool.
    """
    settings = settings or Settings()

    for tool in required_tools(ecosystem, settings):
        if not which(tool):
            logger.debug("Dependency %s not found on PATH", tool)
            raise MissingDependency(tool)

    if not is_executable(settings.fsck_path):
        logger.debug("%s is not executable", settings.fsck_path)
        raise MissingDependency(settings.fsck_path)

    logger.debug("All dependencies present for %s", ecosystem.value)
