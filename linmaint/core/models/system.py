"""
System models — what kind of machine we are maintaining, and who we are.

The profile is probed once per run and never changes afterwards.
The credential is captured once and only ever held in memory.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Ecosystem(str, Enum):
    """Package ecosystem whose native tools are authoritative."""

    ARCH = "arch"
    VOID = "void"
    DEBIAN = "debian"


class Helper(str, Enum):
    """Optional AUR helper, only meaningful alongside Arch."""

    YAY = "yay"
    PARU = "paru"


class SystemProfile(BaseModel):
    """Detected ecosystem plus optional helper."""

    model_config = ConfigDict(frozen=True)

    ecosystem: Ecosystem
    helper: Helper | None = None

    @property
    def label(self) -> str:
        if self.helper:
            return f"{self.ecosystem.value} (+{self.helper.value})"
        return self.ecosystem.value


class Credential(BaseModel):
    """Privilege-escalation password, scoped to one run.

    Passed explicitly to every privileged invocation. An empty
    credential means the process is already root or sudo needs no
    password.
    """

    model_config = ConfigDict(frozen=True)

    secret: SecretStr = Field(default_factory=lambda: SecretStr(""))

    @classmethod
    def from_plain(cls, password: str) -> Credential:
        return cls(secret=SecretStr(password))

    def reveal(self) -> str:
        """Plain text, only for piping to the privilege tool's stdin."""
        return self.secret.get_secret_value()
