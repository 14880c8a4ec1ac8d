"""
Tests for the dependency check — required tool set and first-missing failure.
"""

import pytest

from linmaint.core.config.loader import Settings
from linmaint.core.models.system import Ecosystem
from linmaint.core.services.dependencies import (
    MissingDependency,
    check_dependencies,
    required_tools,
)

ALL_TOOLS = ("rofi", "notify-send", "reflector", "paccache")


def _executable(path: str) -> bool:
    return path == "/sbin/fsck"


class TestRequiredTools:
    def test_base_set(self):
        assert required_tools(Ecosystem.DEBIAN) == ["rofi", "notify-send"]
        assert required_tools(Ecosystem.VOID) == ["rofi", "notify-send"]

    def test_arch_adds_mirror_and_cache_tools(self):
        assert required_tools(Ecosystem.ARCH) == ["rofi", "notify-send", "reflector", "paccache"]

    def test_follows_settings(self):
        s = Settings(menu_tool="dmenu", notify_tool="dunstify")
        assert required_tools(Ecosystem.DEBIAN, s) == ["dmenu", "dunstify"]


class TestCheckDependencies:
    def test_all_present(self, make_which):
        check_dependencies(Ecosystem.ARCH, which=make_which(*ALL_TOOLS), is_executable=_executable)

    def test_first_missing_is_reported(self, make_which):
        with pytest.raises(MissingDependency) as exc:
            check_dependencies(
                Ecosystem.ARCH,
                which=make_which("rofi", "notify-send"),
                is_executable=lambda _p: False,
            )
        assert exc.value.name == "reflector"

    def test_stops_after_first_missing(self):
        looked_up = []

        def which(name):
            looked_up.append(name)
            return None

        with pytest.raises(MissingDependency):
            check_dependencies(Ecosystem.ARCH, which=which, is_executable=_executable)
        assert looked_up == ["rofi"]

    def test_arch_tools_not_needed_elsewhere(self, make_which):
        check_dependencies(
            Ecosystem.DEBIAN,
            which=make_which("rofi", "notify-send"),
            is_executable=_executable,
        )

    def test_fsck_checked_by_path_not_path_lookup(self, make_which):
        # fsck on PATH does not count; the configured path must be executable
        with pytest.raises(MissingDependency) as exc:
            check_dependencies(
                Ecosystem.VOID,
                which=make_which("rofi", "notify-send", "fsck"),
                is_executable=lambda _p: False,
            )
        assert exc.value.name == "/sbin/fsck"

    def test_fsck_checked_last(self, make_which):
        checked = []

        def is_executable(path):
            checked.append(path)
            return False

        with pytest.raises(MissingDependency) as exc:
            check_dependencies(Ecosystem.DEBIAN, which=make_which(), is_executable=is_executable)
        assert exc.value.name == "rofi"
        assert checked == []

    def test_real_executable_check(self, tmp_path, make_which):
        fsck = tmp_path / "fsck"
        fsck.write_text("#!/bin/sh\nexit 0\n")
        fsck.chmod(0o755)
        check_dependencies(
            Ecosystem.DEBIAN,
            Settings(fsck_path=str(fsck)),
            which=make_which("rofi", "notify-send"),
        )

    def test_non_executable_file(self, tmp_path, make_which):
        fsck = tmp_path / "fsck"
        fsck.write_text("")
        fsck.chmod(0o644)
        with pytest.raises(MissingDependency):
            check_dependencies(
                Ecosystem.DEBIAN,
                Settings(fsck_path=str(fsck)),
                which=make_which("rofi", "notify-send"),
            )
