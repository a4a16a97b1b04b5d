"""Toolchain version selection.

Keep this file small and explicit.

The prebuilt tree holds one directory per published toolchain release;
which one is used is decided once per invocation.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

__all__ = [
    "DEFAULT_RUST_VERSION",
    "VERSION_ENV_VAR",
    "resolve_version",
]


# Bump together with the prebuilt drop checked into the tree.
DEFAULT_RUST_VERSION = "1.81.0"

VERSION_ENV_VAR = "RUST_PREBUILTS_VERSION"


def resolve_version(
    configured: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the toolchain version to use.

    Precedence: RUST_PREBUILTS_VERSION, then the configured version,
    then DEFAULT_RUST_VERSION. Empty values are ignored.
    """
    env = os.environ if environ is None else environ
    override = env.get(VERSION_ENV_VAR, "").strip()
    if override:
        return override
    if configured:
        return configured
    return DEFAULT_RUST_VERSION
