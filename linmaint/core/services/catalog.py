"""
Task catalog — what each maintenance task runs on each ecosystem.

The table is keyed by task, then by ecosystem value (``"_default"``
applies to every ecosystem).  Ecosystems differ only in which tool is
invoked, never in what the task means.

Each recipe entry is a dict:

    argv         command template; ``{key}`` tokens come from Settings
    sudo         run through the privilege gate
    feeds_credential  pipe the credential to a tool that runs sudo itself
    capture_as   keep stdout (split on whitespace) under this name
    expand       replace a ``{name}`` argv token with a captured list;
                 the step is skipped when that list is empty
    report       stdout lines are findings; a failed scan is reported
    ok_codes     exit codes that still count as success (default: 0)
    foreach      repeat the entry once per item of a Settings list,
                 exposing the item as ``{item}``
"""

from __future__ import annotations

from typing import Any

from linmaint.core.config.loader import Settings
from linmaint.core.models.step import Step
from linmaint.core.models.system import Ecosystem, SystemProfile
from linmaint.core.models.task import TaskName


_DEFAULT = "_default"

TASK_COMMANDS: dict[TaskName, dict[str, list[dict[str, Any]]]] = {
    TaskName.UPDATE_SYSTEM: {
        "arch": [
            {"argv": ["pacman", "-Syu", "--noconfirm"], "sudo": True},
        ],
        "void": [
            {"argv": ["xbps-install", "-Suy"], "sudo": True},
        ],
        "debian": [
            {"argv": ["apt", "update"], "sudo": True},
            {"argv": ["apt", "upgrade", "-y"], "sudo": True},
        ],
    },
    TaskName.CLEAN_PACKAGE_CACHE: {
        "arch": [
            {"argv": ["pacman", "-Scc", "--noconfirm"], "sudo": True},
        ],
        "void": [
            {"argv": ["xbps-remove", "-Oy"], "sudo": True},
        ],
        "debian": [
            {"argv": ["apt", "clean"], "sudo": True},
        ],
    },
    TaskName.REMOVE_ORPHANS: {
        "arch": [
            {"argv": ["pacman", "-Qtdq"], "sudo": False, "capture_as": "orphans",
             "ok_codes": [0, 1]},
            {"argv": ["pacman", "-Rns", "--noconfirm", "{orphans}"], "sudo": True,
             "expand": "orphans"},
        ],
        "void": [
            {"argv": ["xbps-remove", "-oy"], "sudo": True},
        ],
        "debian": [
            {"argv": ["apt", "autoremove", "-y"], "sudo": True},
        ],
    },
    TaskName.CLEAN_UNUSED_CACHE: {
        "arch": [
            {"argv": ["paccache", "-r"], "sudo": True},
        ],
        "void": [
            {"argv": ["xbps-remove", "-Oy"], "sudo": True},
        ],
        "debian": [
            {"argv": ["apt", "autoclean"], "sudo": True},
        ],
    },
    TaskName.OPTIMIZE_PERFORMANCE: {
        _DEFAULT: [
            {"argv": ["sysctl", "vm.swappiness={swappiness}"], "sudo": True},
            {"argv": ["sh", "-c", 'printf "%s\\n" "$1" >> "$2"', "sh",
                      "vm.swappiness={swappiness}", "{sysctl_conf}"], "sudo": True},
            {"argv": ["systemctl", "disable", "--now", "{item}"], "sudo": True,
             "foreach": "disabled_services"},
            {"argv": ["systemctl", "mask", "{item}"], "sudo": True,
             "foreach": "disabled_services"},
        ],
    },
    TaskName.UPDATE_MIRRORS: {
        "arch": [
            {"argv": ["reflector", "--latest", "{mirror_count}", "--protocol", "https",
                      "--sort", "rate", "--save", "{mirrorlist}"], "sudo": True},
        ],
    },
    TaskName.CHECK_BROKEN_SYMLINKS: {
        _DEFAULT: [
            {"argv": ["find", "/", "-xdev", "-xtype", "l", "-print"], "sudo": True,
             "report": "symlinks"},
        ],
    },
    TaskName.CLEAN_JOURNAL_LOGS: {
        _DEFAULT: [
            {"argv": ["journalctl", "--vacuum-time={journal_retention}"], "sudo": True},
        ],
    },
    TaskName.CHECK_FILESYSTEM: {
        _DEFAULT: [
            {"argv": ["{fsck_path}", "-A", "-y"], "sudo": True},
        ],
    },
}

# AUR helpers refuse to run as root and call sudo themselves; the
# credential reaches that sudo through stdin (--sudoflags -S).
HELPER_COMMANDS: dict[TaskName, list[str]] = {
    TaskName.UPDATE_SYSTEM: ["{helper}", "-Syu", "--noconfirm", "--sudoflags", "-S"],
    TaskName.CLEAN_PACKAGE_CACHE: ["{helper}", "-Scc", "--noconfirm", "--sudoflags", "-S"],
}

FULL_OPTIMIZATION_ORDER: list[TaskName] = [
    TaskName.UPDATE_SYSTEM,
    TaskName.CLEAN_PACKAGE_CACHE,
    TaskName.REMOVE_ORPHANS,
    TaskName.CLEAN_UNUSED_CACHE,
    TaskName.OPTIMIZE_PERFORMANCE,
    TaskName.UPDATE_MIRRORS,
    TaskName.CHECK_BROKEN_SYMLINKS,
    TaskName.CLEAN_JOURNAL_LOGS,
    TaskName.CHECK_FILESYSTEM,
]


def task_labels() -> list[str]:
    """Menu entries in display order."""
    return [task.value for task in TaskName]


def is_supported(task: TaskName, ecosystem: Ecosystem) -> bool:
    """Whether the task has anything to do on this ecosystem."""
    if task is TaskName.FULL_OPTIMIZATION:
        return True
    recipes = TASK_COMMANDS.get(task, {})
    return _DEFAULT in recipes or ecosystem.value in recipes


def _render(template: str, values: dict[str, Any]) -> str:
    """Substitute ``{key}`` placeholders. Unknown tokens are left alone."""
    result = template
    for key, value in values.items():
        result = result.replace(f"{{{key}}}", str(value))
    return result


def build_steps(
    task: TaskName,
    profile: SystemProfile,
    settings: Settings | None = None,
) -> list[Step]:
    """Build the ordered steps for a single task.

    Full Optimization is not a step list of its own; the runner expands
    it into ``FULL_OPTIMIZATION_ORDER``.

    Returns:
        The steps, possibly empty when the task does not apply to the
        ecosystem (see ``is_supported``).
    """
    if task is TaskName.FULL_OPTIMIZATION:
        raise ValueError("Full Optimization is expanded by the runner, not the catalog")

    settings = settings or Settings()
    values: dict[str, Any] = settings.model_dump()
    if profile.helper:
        values["helper"] = profile.helper.value

    recipes = TASK_COMMANDS.get(task, {})
    entries = recipes.get(profile.ecosystem.value, recipes.get(_DEFAULT, []))

    steps: list[Step] = []
    for entry in entries:
        items = values[entry["foreach"]] if "foreach" in entry else [None]
        for item in items:
            scoped = dict(values, item=item) if item is not None else values
            steps.append(_make_step(task, len(steps), entry, scoped))

    if profile.helper and profile.ecosystem is Ecosystem.ARCH and task in HELPER_COMMANDS:
        helper_entry = {"argv": HELPER_COMMANDS[task], "sudo": False, "feeds_credential": True}
        steps.append(_make_step(task, len(steps), helper_entry, values))

    return steps


def _make_step(
    task: TaskName,
    index: int,
    entry: dict[str, Any],
    values: dict[str, Any],
) -> Step:
    argv = [_render(arg, values) for arg in entry["argv"]]
    params = {k: entry[k] for k in ("capture_as", "expand", "report", "ok_codes") if k in entry}
    return Step(
        id=f"{task.slug}:{index}",
        name=f"{task.value} [{argv[0]}]",
        argv=argv,
        privileged=entry.get("sudo", False),
        feeds_credential=entry.get("feeds_credential", False),
        capture=bool(params.get("capture_as") or params.get("report")),
        params=params,
    )
