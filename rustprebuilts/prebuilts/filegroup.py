"""Toolchain filegroups: files shipped inside the host's rustlib directory."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable

from rustprebuilts.platform.detection import BuildOS
from rustprebuilts.prebuilts.targets import host_tag, primary_triple

__all__ = ["toolchain_prefix", "toolchain_srcs"]


def toolchain_prefix(build_os: BuildOS, version: str) -> str | None:
    """`<host-tag>/<version>/lib/rustlib/<triple>`, or None for unsupported hosts."""
    tag = host_tag(build_os)
    triple = primary_triple(build_os)
    if tag is None or triple is None:
        return None
    return posixpath.join(tag, version, "lib", "rustlib", triple)


def toolchain_srcs(prefix: str, srcs: Iterable[str]) -> list[str]:
    return [posixpath.join(prefix, s) for s in srcs]
