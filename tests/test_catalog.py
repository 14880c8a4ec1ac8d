"""
Tests for the task catalog — per-ecosystem command sequences.
"""

import pytest

from linmaint.core.config.loader import Settings
from linmaint.core.models.system import Ecosystem
from linmaint.core.models.task import TaskName
from linmaint.core.services.catalog import (
    FULL_OPTIMIZATION_ORDER,
    TASK_COMMANDS,
    build_steps,
    is_supported,
    task_labels,
)


def _argvs(steps):
    return [s.argv for s in steps]


def _persist(line, path):
    return ["sh", "-c", 'printf "%s\\n" "$1" >> "$2"', "sh", line, path]


class TestLabels:
    def test_menu_order(self):
        assert task_labels() == [
            "Update System",
            "Clean Package Cache",
            "Remove Orphans",
            "Clean Unused Cache",
            "Optimize Performance",
            "Update Mirrors",
            "Check Broken Symlinks",
            "Clean Journal Logs",
            "Check Filesystem",
            "Full Optimization",
        ]

    def test_full_optimization_order(self):
        assert FULL_OPTIMIZATION_ORDER == [t for t in TaskName if t is not TaskName.FULL_OPTIMIZATION]

    def test_every_task_has_recipes(self):
        assert set(TASK_COMMANDS) == set(FULL_OPTIMIZATION_ORDER)


class TestUpdateSystem:
    def test_arch_without_helper(self, arch):
        assert _argvs(build_steps(TaskName.UPDATE_SYSTEM, arch)) == [
            ["pacman", "-Syu", "--noconfirm"],
        ]

    def test_arch_with_helper_unprivileged(self, arch_yay):
        steps = build_steps(TaskName.UPDATE_SYSTEM, arch_yay)
        assert _argvs(steps) == [
            ["pacman", "-Syu", "--noconfirm"],
            ["yay", "-Syu", "--noconfirm", "--sudoflags", "-S"],
        ]
        assert steps[0].privileged
        assert not steps[1].privileged
        assert steps[1].feeds_credential
        assert not steps[0].feeds_credential

    def test_void(self, void):
        assert _argvs(build_steps(TaskName.UPDATE_SYSTEM, void)) == [["xbps-install", "-Suy"]]

    def test_debian(self, debian):
        assert _argvs(build_steps(TaskName.UPDATE_SYSTEM, debian)) == [
            ["apt", "update"],
            ["apt", "upgrade", "-y"],
        ]


class TestCaches:
    def test_debian_clean_is_one_step(self, debian):
        steps = build_steps(TaskName.CLEAN_PACKAGE_CACHE, debian)
        assert _argvs(steps) == [["apt", "clean"]]
        assert steps[0].privileged

    def test_arch_clean_with_helper(self, arch_yay):
        assert _argvs(build_steps(TaskName.CLEAN_PACKAGE_CACHE, arch_yay)) == [
            ["pacman", "-Scc", "--noconfirm"],
            ["yay", "-Scc", "--noconfirm", "--sudoflags", "-S"],
        ]

    def test_unused_cache_differs_on_arch(self, arch):
        assert _argvs(build_steps(TaskName.CLEAN_UNUSED_CACHE, arch)) == [["paccache", "-r"]]

    def test_unused_cache_same_as_clean_on_void(self, void):
        assert _argvs(build_steps(TaskName.CLEAN_UNUSED_CACHE, void)) == _argvs(
            build_steps(TaskName.CLEAN_PACKAGE_CACHE, void)
        )

    def test_debian_autoclean(self, debian):
        assert _argvs(build_steps(TaskName.CLEAN_UNUSED_CACHE, debian)) == [["apt", "autoclean"]]

    def test_helper_never_added_to_other_tasks(self, arch_yay):
        for task in (TaskName.REMOVE_ORPHANS, TaskName.CLEAN_UNUSED_CACHE):
            assert all(s.argv[0] != "yay" for s in build_steps(task, arch_yay))


class TestRemoveOrphans:
    def test_arch_lists_then_removes(self, arch):
        query, removal = build_steps(TaskName.REMOVE_ORPHANS, arch)
        assert query.argv == ["pacman", "-Qtdq"]
        assert not query.privileged
        assert query.capture
        assert query.params == {"capture_as": "orphans", "ok_codes": [0, 1]}
        assert removal.argv == ["pacman", "-Rns", "--noconfirm", "{orphans}"]
        assert removal.params == {"expand": "orphans"}

    def test_void(self, void):
        assert _argvs(build_steps(TaskName.REMOVE_ORPHANS, void)) == [["xbps-remove", "-oy"]]

    def test_debian(self, debian):
        assert _argvs(build_steps(TaskName.REMOVE_ORPHANS, debian)) == [["apt", "autoremove", "-y"]]


class TestOptimizePerformance:
    @pytest.mark.parametrize("eco", ["arch", "void", "debian"])
    def test_ecosystem_agnostic(self, eco, request):
        profile = request.getfixturevalue(eco)
        steps = build_steps(TaskName.OPTIMIZE_PERFORMANCE, profile)
        assert _argvs(steps) == [
            ["sysctl", "vm.swappiness=10"],
            _persist("vm.swappiness=10", "/etc/sysctl.d/99-swappiness.conf"),
            ["systemctl", "disable", "--now", "bluetooth.service"],
            ["systemctl", "disable", "--now", "cups.service"],
            ["systemctl", "mask", "bluetooth.service"],
            ["systemctl", "mask", "cups.service"],
        ]

    def test_persistent_line(self, debian):
        steps = build_steps(TaskName.OPTIMIZE_PERFORMANCE, debian)
        # The line travels in argv; a privileged step's stdin carries only the credential
        assert steps[1].argv[-2:] == ["vm.swappiness=10", "/etc/sysctl.d/99-swappiness.conf"]
        assert not steps[1].feeds_credential
        assert all(s.privileged for s in steps)

    def test_settings_flow_through(self, debian):
        s = Settings(swappiness=5, disabled_services=["avahi-daemon.service"],
                     sysctl_conf="/etc/sysctl.d/50-tune.conf")
        assert _argvs(build_steps(TaskName.OPTIMIZE_PERFORMANCE, debian, s)) == [
            ["sysctl", "vm.swappiness=5"],
            _persist("vm.swappiness=5", "/etc/sysctl.d/50-tune.conf"),
            ["systemctl", "disable", "--now", "avahi-daemon.service"],
            ["systemctl", "mask", "avahi-daemon.service"],
        ]

    def test_no_services(self, debian):
        steps = build_steps(TaskName.OPTIMIZE_PERFORMANCE, debian, Settings(disabled_services=[]))
        assert len(steps) == 2


class TestMirrors:
    def test_arch(self, arch):
        assert _argvs(build_steps(TaskName.UPDATE_MIRRORS, arch)) == [[
            "reflector", "--latest", "20", "--protocol", "https",
            "--sort", "rate", "--save", "/etc/pacman.d/mirrorlist",
        ]]

    @pytest.mark.parametrize("eco", [Ecosystem.VOID, Ecosystem.DEBIAN])
    def test_not_supported_elsewhere(self, eco):
        assert not is_supported(TaskName.UPDATE_MIRRORS, eco)

    def test_no_steps_elsewhere(self, debian):
        assert build_steps(TaskName.UPDATE_MIRRORS, debian) == []


class TestEcosystemAgnosticTasks:
    def test_symlinks(self, void):
        (step,) = build_steps(TaskName.CHECK_BROKEN_SYMLINKS, void)
        assert step.argv == ["find", "/", "-xdev", "-xtype", "l", "-print"]
        assert step.capture
        assert step.params["report"] == "symlinks"

    def test_journal_two_weeks(self, arch):
        assert _argvs(build_steps(TaskName.CLEAN_JOURNAL_LOGS, arch)) == [
            ["journalctl", "--vacuum-time=2weeks"],
        ]

    def test_fsck_auto_repair(self, debian):
        assert _argvs(build_steps(TaskName.CHECK_FILESYSTEM, debian)) == [["/sbin/fsck", "-A", "-y"]]

    def test_full_optimization_not_a_recipe(self, debian):
        with pytest.raises(ValueError):
            build_steps(TaskName.FULL_OPTIMIZATION, debian)

    def test_step_ids_are_unique(self, arch_yay):
        steps = build_steps(TaskName.OPTIMIZE_PERFORMANCE, arch_yay)
        assert len({s.id for s in steps}) == len(steps)
        assert steps[0].id == "optimize-performance:0"
