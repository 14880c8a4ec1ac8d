"""
Task runner — executes catalog steps and brackets them with notices.

Flow per task:
    start notice → steps in order (through the registry) → done notice

The done notice is sent whatever the individual exit codes were; the
receipts (and the log) carry the real outcome. Full Optimization runs
every task in a fixed order with no short-circuit.
"""

from __future__ import annotations

import logging

from linmaint.adapters.registry import AdapterRegistry
from linmaint.core.config.loader import Settings
from linmaint.core.models.step import Receipt, Step
from linmaint.core.models.system import Credential, SystemProfile
from linmaint.core.models.task import Notice, TaskName, TaskReport
from linmaint.core.services.catalog import (
    FULL_OPTIMIZATION_ORDER,
    build_steps,
    is_supported,
)
from linmaint.ui.notify import Notifier

logger = logging.getLogger(__name__)


class TaskRunner:
    """Run maintenance tasks for one probed system and one credential."""

    def __init__(
        self,
        registry: AdapterRegistry,
        notifier: Notifier,
        profile: SystemProfile,
        settings: Settings | None = None,
        credential: Credential | None = None,
    ):
        self.registry = registry
        self.notifier = notifier
        self.profile = profile
        self.settings = settings or Settings()
        self.credential = credential or Credential()

    def run(self, task: TaskName) -> list[TaskReport]:
        """Dispatch a menu choice. Returns one report per task executed."""
        if task is TaskName.FULL_OPTIMIZATION:
            return self.run_full_optimization()
        return [self.run_task(task)]

    def run_full_optimization(self) -> list[TaskReport]:
        """Run every task in order; failures never stop the sequence."""
        reports = []
        for task in FULL_OPTIMIZATION_ORDER:
            reports.append(self.run_task(task))
        failed = [r.task.value for r in reports if r.status != "ok"]
        if failed:
            logger.warning("Full optimization finished with errors in: %s", ", ".join(failed))
        else:
            logger.info("Full optimization finished")
        return reports

    def run_task(self, task: TaskName) -> TaskReport:
        """Run a single (non-composite) task."""
        report = TaskReport(task=task)

        if not is_supported(task, self.profile.ecosystem):
            report.notices.append(self.notifier.notify(
                f"{task.value} is not available on {self.profile.ecosystem.value}; nothing to do"
            ))
            return report

        steps = build_steps(task, self.profile, self.settings)
        report.notices.append(self.notifier.notify(f"Starting: {task.value}"))

        captured: dict[str, list[str]] = {}
        for step in steps:
            receipt = self._run_step(step, captured, report)
            report.receipts.append(receipt)

            status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
            logger.info("%s %s → %s", status_marker, step.command_line, receipt.status)
            if receipt.failed:
                logger.warning("%s failed: %s", step.command_line, receipt.error)

        report.notices.append(self._done_notice(report))
        return report

    def _run_step(
        self,
        step: Step,
        captured: dict[str, list[str]],
        report: TaskReport,
    ) -> Receipt:
        expand = step.params.get("expand")
        if expand:
            items = captured.get(expand, [])
            if not items:
                logger.info("No %s found; skipping %s", expand, step.argv[0])
                return Receipt.skip(
                    adapter=step.adapter,
                    step_id=step.id,
                    reason=f"no {expand}",
                )
            step = _expand_argv(step, expand, items)

        receipt = self.registry.execute_step(
            step,
            credential=self.credential,
            privilege_tool=self.settings.privilege_tool,
        )

        capture_as = step.params.get("capture_as")
        if capture_as:
            captured[capture_as] = receipt.output.split() if receipt.ok else []

        if step.params.get("report"):
            self._collect_findings(step, receipt, report)

        return receipt

    def _collect_findings(self, step: Step, receipt: Receipt, report: TaskReport) -> None:
        kind = step.params["report"]
        if receipt.failed:
            report.notices.append(self.notifier.error(
                f"{report.task.value}: scan failed ({receipt.error})"
            ))
            return
        report.findings = [line for line in receipt.output.splitlines() if line.strip()]
        logger.info("%s: %d %s found", report.task.value, len(report.findings), kind)

    def _done_notice(self, report: TaskReport) -> Notice:
        message = f"Done: {report.task.value}"
        if report.task is TaskName.CHECK_BROKEN_SYMLINKS and report.status == "ok":
            count = len(report.findings)
            message += f" ({count} broken symlink{'s' if count != 1 else ''} found)"

        if self.settings.report_failures and report.status != "ok":
            return self.notifier.error(
                f"{report.task.value} finished with errors "
                f"({report.failed}/{report.total} steps failed)"
            )
        return self.notifier.notify(message)


def _expand_argv(step: Step, name: str, items: list[str]) -> Step:
    """Replace the ``{name}`` token in argv with the captured items."""
    token = f"{{{name}}}"
    argv: list[str] = []
    for arg in step.argv:
        if arg == token:
            argv.extend(items)
        else:
            argv.append(arg)
    return step.model_copy(update={"argv": argv})
