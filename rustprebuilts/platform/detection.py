"""Build host detection.

Simple, stateless functions; the enum values match the host names
accepted on the command line (`--host linux_musl`).
"""

from __future__ import annotations

import glob
import platform as _platform
from enum import Enum

__all__ = ["BuildOS", "detect_build_os", "parse_build_os"]


class BuildOS(Enum):
    LINUX = "linux"  # glibc
    LINUX_MUSL = "linux_musl"
    DARWIN = "darwin"
    UNKNOWN = "unknown"


_ALIASES: dict[str, BuildOS] = {
    "linux": BuildOS.LINUX,
    "linux_glibc": BuildOS.LINUX,
    "glibc": BuildOS.LINUX,
    "linux_musl": BuildOS.LINUX_MUSL,
    "musl": BuildOS.LINUX_MUSL,
    "darwin": BuildOS.DARWIN,
    "macos": BuildOS.DARWIN,
}


def parse_build_os(name: str) -> BuildOS | None:
    """Parse a user-supplied host name ("linux-musl", "darwin", ...)."""
    key = name.strip().lower().replace("-", "_")
    return _ALIASES.get(key)


def _is_musl() -> bool:
    libc, _version = _platform.libc_ver()
    if libc == "glibc":
        return False
    # musl ships its dynamic loader as /lib/ld-musl-<arch>.so.1
    return bool(glob.glob("/lib/ld-musl-*.so.1"))


def detect_build_os() -> BuildOS:
    """Detect the operating system this configuration pass runs on."""
    system = _platform.system().lower()
    if system.startswith("linux"):
        return BuildOS.LINUX_MUSL if _is_musl() else BuildOS.LINUX
    if system.startswith("darwin"):
        return BuildOS.DARWIN
    return BuildOS.UNKNOWN
