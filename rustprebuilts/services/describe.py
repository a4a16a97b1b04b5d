"""Run prebuilt module types outside the build engine.

Used by the CLI to show what a module declaration resolves to on this
host: the same load hooks, rooted at a prebuilts checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from rustprebuilts.core.result import Err, Ok, Result
from rustprebuilts.host.module import PropertyMap, merge_properties
from rustprebuilts.host.registry import ModuleTypeRegistry, load_module
from rustprebuilts.prebuilts.modules import default_registry
from rustprebuilts.services.base import BaseService

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rustprebuilts.core.config import Config
    from rustprebuilts.output.console import ConsoleProtocol
    from rustprebuilts.platform.detection import BuildOS

__all__ = ["DescribeError", "DescribeService"]


@dataclass(frozen=True, slots=True)
class DescribeError:
    kind: Literal["unknown_module_type", "root_missing", "load_failed"]
    message: str
    details: tuple[str, ...] = ()


class DescribeService(BaseService):
    def __init__(
        self,
        *,
        build_os: BuildOS,
        config: Config,
        console: ConsoleProtocol,
        registry: ModuleTypeRegistry | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(build_os=build_os, config=config, console=console)
        self._registry = registry or default_registry()
        self._environ = environ

    def describe(
        self,
        type_name: str,
        name: str,
        *,
        root: Path,
        properties: PropertyMap | None = None,
    ) -> Result[PropertyMap, DescribeError]:
        """Declare one module under `root`, run its load hooks, return what they appended."""
        if not root.is_dir():
            return Err(DescribeError("root_missing", f"prebuilts root not found: {root}"))

        module = self._registry.create(type_name, name, properties)
        if module is None:
            return Err(
                DescribeError(
                    "unknown_module_type",
                    f"unknown module type: {type_name}",
                    tuple(self._registry.names()),
                )
            )

        result = load_module(
            module,
            module_dir=root,
            build_os=self._build_os,
            environ=self._environ,
            configured_version=self._config.version,
        )
        match result:
            case Err(errors):
                return Err(DescribeError("load_failed", f"cannot configure {name}", tuple(errors)))
            case Ok(ctx):
                for warning in ctx.warnings:
                    self._console.warning(warning)

        appended: PropertyMap = {}
        for props in module.appended:
            appended = merge_properties(appended, props)
        return Ok(appended)
