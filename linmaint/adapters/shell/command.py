"""
Shell command adapter — run a step's argv, elevating when asked to.

This is the SINGLE PLACE where ``subprocess.run`` is called for
maintenance steps.  Privilege handling, output logging and error
capture are centralised here.

Credential invariants:
- Password piped via stdin only (``sudo -S``)
- ``-k`` invalidates cached credentials every time
- Password never logged, never written to disk
- Password never appears in command args
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Callable

from linmaint.adapters.base import Adapter, ExecutionContext
from linmaint.core.models.step import Receipt
from linmaint.core.observability.logging_config import OUTPUT_LOGGER

logger = logging.getLogger(__name__)
output_log = logging.getLogger(OUTPUT_LOGGER)


class ShellCommandAdapter(Adapter):
    """Execute a step's argv and capture its output.

    Commands run to completion with no timeout. Unless the step asks
    for ``capture``, stderr is folded into stdout so the log shows the
    combined stream in order.
    """

    def __init__(self, euid: Callable[[], int] = os.geteuid):
        self._euid = euid

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.step.argv:
            return False, "Step has no command"
        return True, ""

    def build_command(self, context: ExecutionContext) -> tuple[list[str], str | None]:
        """Return the final argv and stdin payload for a step.

        Privileged steps are wrapped in ``sudo -S -k -p ""`` and get the
        credential as the only line of stdin. Steps that elevate on
        their own (AUR helpers) run as-is but still get the credential
        on stdin. Root processes skip both.
        """
        step = context.step
        cmd = list(step.argv)
        stdin_data = None

        if self._euid() == 0:
            return cmd, stdin_data
        if step.privileged:
            cmd = [context.privilege_tool, "-S", "-k", "-p", ""] + cmd
            stdin_data = context.credential.reveal() + "\n"
        elif step.feeds_credential:
            stdin_data = context.credential.reveal() + "\n"

        return cmd, stdin_data

    def execute(self, context: ExecutionContext) -> Receipt:
        step = context.step
        cmd, stdin_data = self.build_command(context)

        # The credential is in stdin, never in cmd, so this is safe to log
        logger.debug("Executing: %s", step.command_line)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                input=stdin_data,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE if step.capture else subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                step_id=step.id,
                error=f"Cannot start {step.argv[0]}: {e}",
                metadata={"command": step.command_line},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = (result.stdout or "").strip()
        stderr = (result.stderr or "").strip()

        for line in output.splitlines():
            output_log.info(line)
        for line in stderr.splitlines():
            output_log.info(line)

        if result.returncode in step.params.get("ok_codes", [0]):
            return Receipt.success(
                adapter=self.name,
                step_id=step.id,
                output=output,
                return_code=result.returncode,
                duration_ms=elapsed_ms,
                metadata={"command": step.command_line, "stderr": stderr},
            )

        return Receipt.failure(
            adapter=self.name,
            step_id=step.id,
            error=stderr or f"Command exited with code {result.returncode}",
            output=output,
            return_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"command": step.command_line},
        )
