"""Prebuilt module types and their load hooks.

    rust_stdlib_prebuilt_host            sysroot library, rlib + dylib
    rust_stdlib_prebuilt_static_host     sysroot static library, rlib only
    rust_stdlib_prebuilt_filegroup_host  files from the host toolchain

Modules declare only a name (and, for filegroups, `toolchain_srcs`);
everything else is discovered on disk when the load hook runs.
"""

from __future__ import annotations

from rustprebuilts.core.result import Err, Ok
from rustprebuilts.core.versions import VERSION_ENV_VAR, resolve_version
from rustprebuilts.host.context import LoadHookContext
from rustprebuilts.host.module import LoadHook, Module, PropertyMap
from rustprebuilts.host.registry import ModuleTypeRegistry
from rustprebuilts.prebuilts.filegroup import toolchain_prefix, toolchain_srcs
from rustprebuilts.prebuilts.naming import normalize_module_name
from rustprebuilts.prebuilts.props import construct_lib_props

__all__ = [
    "FILEGROUP_MODULE_TYPE",
    "LIBRARY_MODULE_TYPE",
    "STATIC_LIBRARY_MODULE_TYPE",
    "default_registry",
    "get_rust_prebuilt_version",
    "register_module_types",
]

LIBRARY_MODULE_TYPE = "rust_stdlib_prebuilt_host"
STATIC_LIBRARY_MODULE_TYPE = "rust_stdlib_prebuilt_static_host"
FILEGROUP_MODULE_TYPE = "rust_stdlib_prebuilt_filegroup_host"


def get_rust_prebuilt_version(ctx: LoadHookContext) -> str:
    return resolve_version(ctx.configured_version, {VERSION_ENV_VAR: ctx.getenv(VERSION_ENV_VAR)})


def lib_props_hook(*, rlib: bool, dylib: bool) -> LoadHook:
    def hook(ctx: LoadHookContext) -> None:
        result = construct_lib_props(
            module_dir=ctx.module_dir,
            lib_name=normalize_module_name(ctx.module_name()),
            version=get_rust_prebuilt_version(ctx),
            build_os=ctx.build_os,
            rlib=rlib,
            dylib=dylib,
            warn=ctx.warning,
        )
        match result:
            case Err(error):
                ctx.module_error(error.message)
            case Ok(props):
                ctx.append_properties(props.to_dict())

    return hook


def toolchain_filegroup_hook(ctx: LoadHookContext) -> None:
    declared = ctx.module.properties.get("toolchain_srcs", [])
    if not isinstance(declared, list) or not all(isinstance(s, str) for s in declared):
        ctx.module_error("toolchain_srcs must be a list of strings")
        return

    prefix = toolchain_prefix(ctx.build_os, get_rust_prebuilt_version(ctx))
    if prefix is None:
        ctx.module_error(f"no prebuilt toolchain for build OS {ctx.build_os.value!r}")
        return

    ctx.append_properties({"srcs": toolchain_srcs(prefix, declared)})


def rust_host_prebuilt_sysroot_library_factory(name: str, properties: PropertyMap) -> Module:
    module = Module(type_name=LIBRARY_MODULE_TYPE, name=name, properties=properties)
    module.add_load_hook(lib_props_hook(rlib=True, dylib=True))
    return module


def rust_host_prebuilt_sysroot_static_library_factory(
    name: str, properties: PropertyMap
) -> Module:
    module = Module(type_name=STATIC_LIBRARY_MODULE_TYPE, name=name, properties=properties)
    module.add_load_hook(lib_props_hook(rlib=True, dylib=False))
    return module


def rust_toolchain_filegroup_factory(name: str, properties: PropertyMap) -> Module:
    module = Module(type_name=FILEGROUP_MODULE_TYPE, name=name, properties=properties)
    module.add_load_hook(toolchain_filegroup_hook)
    return module


def register_module_types(registry: ModuleTypeRegistry) -> None:
    registry.register(LIBRARY_MODULE_TYPE, rust_host_prebuilt_sysroot_library_factory)
    registry.register(
        STATIC_LIBRARY_MODULE_TYPE, rust_host_prebuilt_sysroot_static_library_factory
    )
    registry.register(FILEGROUP_MODULE_TYPE, rust_toolchain_filegroup_factory)


def default_registry() -> ModuleTypeRegistry:
    registry = ModuleTypeRegistry()
    register_module_types(registry)
    return registry
