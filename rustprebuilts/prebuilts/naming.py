from __future__ import annotations

__all__ = ["PREBUILT_PREFIX", "SYSROOT_SUFFIXES", "normalize_module_name"]

PREBUILT_PREFIX = "prebuilt_"

# Longest first so the static token is not left half-stripped.
SYSROOT_SUFFIXES = (".rust_sysroot_static", ".rust_sysroot")


def normalize_module_name(name: str) -> str:
    """Reduce a module name to the library base name used on disk.

    `prebuilt_libstd.rust_sysroot` -> `libstd`. At most one prefix and one
    suffix token are removed.
    """
    name = name.removeprefix(PREBUILT_PREFIX)
    for suffix in SYSROOT_SUFFIXES:
        if name.endswith(suffix):
            return name.removesuffix(suffix)
    return name
