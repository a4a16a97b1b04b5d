"""Prebuilt Rust toolchain glue: locate sysroot libraries and apply patches."""

from __future__ import annotations

__version__ = "0.1.0"
