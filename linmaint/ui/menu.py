"""
Selection menu — task picker and password prompt via rofi.

Any dmenu-compatible tool works for the picker: items go in on stdin,
the chosen line comes back on stdout. An empty string means the user
cancelled.
"""

from __future__ import annotations

import logging
import subprocess

from linmaint.core.models.system import Credential

logger = logging.getLogger(__name__)


class Menu:
    """Thin wrapper around a dmenu-style selection tool."""

    def __init__(self, tool: str = "rofi"):
        self.tool = tool

    def _dmenu_args(self, prompt: str) -> list[str]:
        if self.tool == "rofi":
            return [self.tool, "-dmenu", "-i", "-p", prompt]
        return [self.tool, "-i", "-p", prompt]

    def _run(self, cmd: list[str], stdin: str) -> str:
        try:
            result = subprocess.run(cmd, input=stdin, capture_output=True, text=True)
        except OSError as e:
            logger.error("Cannot start menu %s: %s", self.tool, e)
            return ""
        if result.returncode != 0:
            # rofi and dmenu exit 1 on Escape
            logger.debug("Menu closed with exit code %d", result.returncode)
            return ""
        return result.stdout

    def choose(self, items: list[str], prompt: str = "Select task") -> str:
        """Show items and return the chosen one, or "" on cancel."""
        return self._run(self._dmenu_args(prompt), "\n".join(items)).strip()

    def ask_password(self, prompt: str = "Password") -> Credential:
        """Prompt once for the privilege-escalation password.

        Masking the input is the menu tool's job (``rofi -password``).
        """
        cmd = self._dmenu_args(prompt)
        if self.tool == "rofi":
            cmd.append("-password")
        return Credential.from_plain(self._run(cmd, "").rstrip("\n"))
