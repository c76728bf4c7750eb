"""Information about the platform the tool is running on."""

from __future__ import annotations

import platform

_OS_NAMES = {"linux": "linux", "darwin": "macos", "windows": "windows"}

_ARCH_NAMES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
}


def current_os() -> str:
    """Name of the operating system: "linux", "macos", "windows" or other."""
    system = platform.system().lower()
    return _OS_NAMES.get(system, system)


def current_arch() -> str:
    """Name of the CPU architecture: "x86_64", "x86" or other."""
    machine = platform.machine().lower()
    return _ARCH_NAMES.get(machine, machine)


def is_linux() -> bool:
    return current_os() == "linux"


def is_macos() -> bool:
    return current_os() == "macos"


def is_windows() -> bool:
    return current_os() == "windows"


def is_x86_64() -> bool:
    return current_arch() == "x86_64"


def is_x86() -> bool:
    return current_arch() == "x86"