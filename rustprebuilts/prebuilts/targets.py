"""Host targets that ship prebuilt sysroot libraries.

Each entry ties a property key of the library module to the platform
family directory and architecture triple its artifacts live under.
"""

from __future__ import annotations

from dataclasses import dataclass

from rustprebuilts.platform.detection import BuildOS

__all__ = [
    "TARGETS",
    "TargetDescriptor",
    "host_tag",
    "primary_triple",
    "targets_for",
]


@dataclass(frozen=True, slots=True)
class TargetDescriptor:
    key: str
    family: str
    triple: str
    build_os: BuildOS

    @property
    def dylib_extension(self) -> str:
        if "darwin" in self.family:
            return ".dylib"
        return ".so"


# Order matters: the first entry per build OS is its primary (64-bit) triple.
TARGETS: tuple[TargetDescriptor, ...] = (
    TargetDescriptor("linux_glibc_x86_64", "linux-x86", "x86_64-unknown-linux-gnu", BuildOS.LINUX),
    TargetDescriptor("linux_glibc_x86", "linux-x86", "i686-unknown-linux-gnu", BuildOS.LINUX),
    TargetDescriptor(
        "linux_musl_x86_64", "linux-musl-x86", "x86_64-unknown-linux-musl", BuildOS.LINUX_MUSL
    ),
    TargetDescriptor("linux_musl_x86", "linux-musl-x86", "i686-unknown-linux-musl", BuildOS.LINUX_MUSL),
    TargetDescriptor("darwin_x86_64", "darwin-x86", "x86_64-apple-darwin", BuildOS.DARWIN),
)


def targets_for(build_os: BuildOS) -> list[TargetDescriptor]:
    return [t for t in TARGETS if t.build_os is build_os]


def host_tag(build_os: BuildOS) -> str | None:
    """Prebuilt directory of the build host ("linux-x86", "darwin-x86", ...)."""
    targets = targets_for(build_os)
    return targets[0].family if targets else None


def primary_triple(build_os: BuildOS) -> str | None:
    targets = targets_for(build_os)
    return targets[0].triple if targets else None
