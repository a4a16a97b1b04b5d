"""Per-target property records for a prebuilt sysroot library.

`construct_lib_props` is the body of the library load hook: it resolves
the artifacts for the build host's targets and leaves every other target
disabled and empty.
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from rustprebuilts.core.result import Err, Ok, Result
from rustprebuilts.host.module import PropertyMap
from rustprebuilts.platform.detection import BuildOS
from rustprebuilts.prebuilts.locator import LocateError, find_prebuilt
from rustprebuilts.prebuilts.targets import TARGETS, TargetDescriptor, targets_for

__all__ = [
    "LibProps",
    "SrcsProps",
    "TargetProps",
    "add_prebuilt_to_target",
    "construct_lib_props",
    "rust_lib_dir",
]

Warn = Callable[[str], None]


def rust_lib_dir(version: str) -> str:
    """`<version>/lib/rustlib`, relative to a platform family directory."""
    return posixpath.join(version, "lib", "rustlib")


@dataclass(slots=True)
class SrcsProps:
    srcs: list[str] = field(default_factory=list)


@dataclass(slots=True)
class TargetProps:
    suffix: str | None = None
    dylib: SrcsProps = field(default_factory=SrcsProps)
    rlib: SrcsProps = field(default_factory=SrcsProps)
    link_dirs: list[str] = field(default_factory=list)
    enabled: bool = False

    def to_dict(self) -> PropertyMap:
        props: PropertyMap = {
            "dylib": {"srcs": list(self.dylib.srcs)},
            "rlib": {"srcs": list(self.rlib.srcs)},
            "link_dirs": list(self.link_dirs),
            "enabled": self.enabled,
        }
        if self.suffix is not None:
            props["suffix"] = self.suffix
        return props


@dataclass(slots=True)
class LibProps:
    enabled: bool = False
    target: dict[str, TargetProps] = field(
        default_factory=lambda: {t.key: TargetProps() for t in TARGETS}
    )

    def to_dict(self) -> PropertyMap:
        return {
            "enabled": self.enabled,
            "target": {key: props.to_dict() for key, props in self.target.items()},
        }

    def enabled_targets(self) -> list[str]:
        return [key for key, props in self.target.items() if props.enabled]


def add_prebuilt_to_target(
    target: TargetProps,
    *,
    module_dir: Path,
    lib_name: str,
    rust_dir: str,
    descriptor: TargetDescriptor,
    rlib: bool,
    dylib: bool,
    warn: Warn | None = None,
) -> Result[None, LocateError]:
    """Fill `target` with the artifacts of one platform/architecture pair."""
    lib_dir = posixpath.join(descriptor.family, rust_dir, descriptor.triple, "lib")
    target.link_dirs = [lib_dir]
    target.enabled = True

    if rlib:
        match find_prebuilt(module_dir, lib_dir, lib_name, ".rlib"):
            case Err() as err:
                return err
            case Ok(found):
                target.rlib.srcs = [found.rel_path]
                target.suffix = found.suffix

    if dylib:
        match find_prebuilt(module_dir, lib_dir, lib_name, descriptor.dylib_extension):
            case Err() as err:
                return err
            case Ok(found):
                target.dylib.srcs = [found.rel_path]
                # Static and dynamic forms are published with the same hash;
                # when they are not, the dylib's suffix wins.
                if target.suffix is not None and target.suffix != found.suffix and warn:
                    warn(
                        f"{descriptor.key}: rlib suffix {target.suffix!r} differs from "
                        f"dylib suffix {found.suffix!r}"
                    )
                target.suffix = found.suffix

    return Ok(None)


def construct_lib_props(
    *,
    module_dir: Path,
    lib_name: str,
    version: str,
    build_os: BuildOS,
    rlib: bool,
    dylib: bool,
    warn: Warn | None = None,
) -> Result[LibProps, LocateError]:
    """Describe `lib_name` for every target of `build_os`.

    Stops at the first lookup failure; no partial record is returned.
    """
    rust_dir = rust_lib_dir(version)
    props = LibProps()

    for descriptor in targets_for(build_os):
        result = add_prebuilt_to_target(
            props.target[descriptor.key],
            module_dir=module_dir,
            lib_name=lib_name,
            rust_dir=rust_dir,
            descriptor=descriptor,
            rlib=rlib,
            dylib=dylib,
            warn=warn,
        )
        if isinstance(result, Err):
            return result

    return Ok(props)
