"""Discovery and description of prebuilt Rust sysroot libraries."""

from __future__ import annotations
