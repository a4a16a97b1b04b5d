"""Base service class with common initialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rustprebuilts.core.config import Config
    from rustprebuilts.output.console import ConsoleProtocol
    from rustprebuilts.platform.detection import BuildOS


class BaseService:
    """Base class for services that need config, build host and console."""

    def __init__(
        self,
        *,
        build_os: BuildOS,
        config: Config,
        console: ConsoleProtocol,
    ) -> None:
        self._build_os = build_os
        self._config = config
        self._console = console
