from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

from rustprebuilts.core.result import Err, Ok, Result
from rustprebuilts.host.context import HostContext
from rustprebuilts.host.module import Module, PropertyMap
from rustprebuilts.platform.detection import BuildOS

__all__ = ["ModuleFactory", "ModuleTypeRegistry", "load_module"]

ModuleFactory = Callable[[str, PropertyMap], Module]


class ModuleTypeRegistry:
    """Maps module type names to factories."""

    def __init__(self) -> None:
        self._factories: dict[str, ModuleFactory] = {}

    def register(self, type_name: str, factory: ModuleFactory) -> None:
        if type_name in self._factories:
            raise ValueError(f"module type already registered: {type_name}")
        self._factories[type_name] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def create(
        self, type_name: str, name: str, properties: PropertyMap | None = None
    ) -> Module | None:
        factory = self._factories.get(type_name)
        if factory is None:
            return None
        return factory(name, dict(properties or {}))


def load_module(
    module: Module,
    *,
    module_dir: Path,
    build_os: BuildOS,
    environ: Mapping[str, str] | None = None,
    configured_version: str | None = None,
) -> Result[HostContext, list[str]]:
    """Run the module's load hooks once, in registration order.

    Returns the context (with any warnings) on success, or every error the
    hooks reported.
    """
    ctx = HostContext(
        module=module,
        module_dir=module_dir,
        build_os=build_os,
        configured_version=configured_version,
    )
    if environ is not None:
        ctx.environ = environ

    for hook in module.load_hooks:
        hook(ctx)

    if ctx.errors:
        return Err(list(ctx.errors))
    return Ok(ctx)
