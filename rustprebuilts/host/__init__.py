"""In-process stand-in for the build configuration engine.

Only the surface the prebuilt module types rely on: module types
registered by name, modules with declared properties, load hooks that
run once after the declared properties are parsed, and a context through
which hooks report errors and append properties.
"""

from __future__ import annotations

from rustprebuilts.host.context import HostContext, LoadHookContext
from rustprebuilts.host.module import LoadHook, Module, merge_properties
from rustprebuilts.host.registry import ModuleFactory, ModuleTypeRegistry, load_module

__all__ = [
    "HostContext",
    "LoadHook",
    "LoadHookContext",
    "Module",
    "ModuleFactory",
    "ModuleTypeRegistry",
    "load_module",
    "merge_properties",
]
