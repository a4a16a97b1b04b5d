from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from rustprebuilts.host.module import Module, PropertyMap
from rustprebuilts.platform.detection import BuildOS

__all__ = ["HostContext", "LoadHookContext"]


class LoadHookContext(Protocol):
    """What a load hook may ask of the engine."""

    @property
    def module(self) -> Module: ...

    @property
    def module_dir(self) -> Path: ...

    @property
    def build_os(self) -> BuildOS: ...

    @property
    def configured_version(self) -> str | None: ...

    def module_name(self) -> str: ...

    def getenv(self, key: str, default: str = "") -> str: ...

    def module_error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def append_properties(self, props: PropertyMap) -> None: ...


@dataclass
class HostContext:
    """Load hook context for a single module.

    Attributes:
        module: Module whose hooks are running
        module_dir: Directory the module was declared in; globs are rooted here
        build_os: Operating system of the configuration host
        environ: Environment visible to hooks (defaults to os.environ)
        configured_version: Toolchain version from the config file, if any
    """

    module: Module
    module_dir: Path
    build_os: BuildOS
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    configured_version: str | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def module_name(self) -> str:
        return self.module.name

    def getenv(self, key: str, default: str = "") -> str:
        return self.environ.get(key, default)

    def module_error(self, message: str) -> None:
        self.errors.append(f"{self.module.name}: {message}")

    def warning(self, message: str) -> None:
        self.warnings.append(f"{self.module.name}: {message}")

    def append_properties(self, props: PropertyMap) -> None:
        self.module.appended.append(props)
