"""
Environment probe — which package ecosystem is this machine?

Read-only PATH lookups, nothing is executed. The ``which`` callable is
injectable so tests can fake any distribution.
"""

from __future__ import annotations

import logging
import shutil
from typing import Callable

from linmaint.core.models.system import Ecosystem, Helper, SystemProfile

logger = logging.getLogger(__name__)

Which = Callable[[str], str | None]

# Probe order matters: the first marker found decides the ecosystem.
ECOSYSTEM_MARKERS: list[tuple[str, Ecosystem]] = [
    ("pacman", Ecosystem.ARCH),
    ("xbps-install", Ecosystem.VOID),
    ("apt", Ecosystem.DEBIAN),
]

HELPER_MARKERS: list[tuple[str, Helper]] = [
    ("yay", Helper.YAY),
    ("paru", Helper.PARU),
]


class UnsupportedEnvironment(Exception):
    """No known package ecosystem was found on PATH."""

    def __init__(self, probed: list[str] | None = None):
        self.probed = probed or [marker for marker, _ in ECOSYSTEM_MARKERS]
        super().__init__(
            "Unsupported distribution: none of "
            f"{', '.join(self.probed)} found on PATH"
        )


def detect_ecosystem(which: Which = shutil.which) -> Ecosystem:
    """Return the ecosystem of the first marker tool found.

    Raises:
        UnsupportedEnvironment: If no marker is present.
    """
    for marker, ecosystem in ECOSYSTEM_MARKERS:
        if which(marker):
            logger.debug("Found %s → %s", marker, ecosystem.value)
            return ecosystem
    raise UnsupportedEnvironment()


def detect_helper(ecosystem: Ecosystem, which: Which = shutil.which) -> Helper | None:
    """Return the first AUR helper found, only on Arch. Absence is fine."""
    if ecosystem is not Ecosystem.ARCH:
        return None
    for marker, helper in HELPER_MARKERS:
        if which(marker):
            logger.debug("Found AUR helper %s", marker)
            return helper
    return None


def probe_system(which: Which = shutil.which) -> SystemProfile:
    """Detect ecosystem and helper in one go."""
    ecosystem = detect_ecosystem(which)
    profile = SystemProfile(ecosystem=ecosystem, helper=detect_helper(ecosystem, which))
    logger.info("Detected system: %s", profile.label)
    return profile
