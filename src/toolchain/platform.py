"""Host platform capabilities.

Every platform-conditional behavior (binary suffix, legacy console
encoding, shell handling of bare commands) is described by one
``PlatformProfile`` chosen at startup.
"""

from __future__ import annotations

import os
import platform as _host
import sys
from dataclasses import dataclass

_GOOS_PREFIXES = (
    ("win32", "windows"),
    ("cygwin", "windows"),
    ("darwin", "darwin"),
    ("linux", "linux"),
    ("freebsd", "freebsd"),
    ("openbsd", "openbsd"),
    ("netbsd", "netbsd"),
)

_GOARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "arm",
    "armv7l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}


@dataclass(frozen=True)
class PlatformProfile:
    name: str
    binary_suffix: str = ""
    legacy_encoding: str | None = None
    shell_wraps_bare_commands: bool = False

    def executable(self, path: str) -> str:
        """Apply the platform's binary suffix to a candidate path."""
        return path + self.binary_suffix

    def shell_argv(self, command_line: str) -> list[str]:
        """Argument vector handing ``command_line`` to the shell verbatim."""
        return ["cmd", "/C", command_line]


POSIX = PlatformProfile(name="posix")
WINDOWS = PlatformProfile(
    name="windows",
    binary_suffix=".exe",
    legacy_encoding="gbk",
    shell_wraps_bare_commands=True,
)


def current_platform() -> PlatformProfile:
    return WINDOWS if os.name == "nt" else POSIX


def host_os(system: str | None = None) -> str:
    """Host operating system in Go's GOOS spelling (``win32`` is ``windows``)."""
    system = sys.platform if system is None else system
    for prefix, goos in _GOOS_PREFIXES:
        if system.startswith(prefix):
            return goos
    return system


def host_arch(machine: str | None = None) -> str:
    """Host CPU architecture in Go's GOARCH spelling (``x86_64`` is ``amd64``)."""
    machine = _host.machine() if machine is None else machine
    return _GOARCH_NAMES.get(machine.lower(), machine.lower())


__all__ = [
    "POSIX",
    "WINDOWS",
    "PlatformProfile",
    "current_platform",
    "host_arch",
    "host_os",
]
