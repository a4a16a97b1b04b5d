"""Optional `rust-prebuilts.toml` configuration.

Example:

    [prebuilts]
    version = "1.81.0"

    [patches]
    dir = "patches"
    strip = 3
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from rustprebuilts.core.result import Err, Ok, Result

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "PatchesConfig",
    "find_config",
    "load_config",
]

CONFIG_FILENAME = "rust-prebuilts.toml"
CONFIG_ENV_VAR = "RUST_PREBUILTS_CONFIG"

DEFAULT_PATCHES_DIR = "patches"
DEFAULT_PATCH_STRIP = 3


@dataclass(frozen=True, slots=True)
class ConfigError:
    path: Path
    message: str


@dataclass(frozen=True, slots=True)
class PatchesConfig:
    dir: str = DEFAULT_PATCHES_DIR
    strip: int = DEFAULT_PATCH_STRIP


@dataclass(frozen=True, slots=True)
class Config:
    version: str | None = None
    patches: PatchesConfig = field(default_factory=PatchesConfig)


def find_config(cwd: Path | None = None) -> Path | None:
    """Locate the config file: $RUST_PREBUILTS_CONFIG, else ./rust-prebuilts.toml."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path) -> Result[Config, ConfigError]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        return Err(ConfigError(path, f"cannot read config: {e}"))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(path, f"invalid TOML: {e}"))

    prebuilts = data.get("prebuilts", {})
    patches = data.get("patches", {})
    if not isinstance(prebuilts, dict) or not isinstance(patches, dict):
        return Err(ConfigError(path, "[prebuilts] and [patches] must be tables"))

    version = prebuilts.get("version")
    if version is not None and not isinstance(version, str):
        return Err(ConfigError(path, "prebuilts.version must be a string"))

    patches_dir = patches.get("dir", DEFAULT_PATCHES_DIR)
    if not isinstance(patches_dir, str):
        return Err(ConfigError(path, "patches.dir must be a string"))

    strip = patches.get("strip", DEFAULT_PATCH_STRIP)
    if isinstance(strip, bool) or not isinstance(strip, int) or strip < 0:
        return Err(ConfigError(path, "patches.strip must be a non-negative integer"))

    return Ok(Config(version=version, patches=PatchesConfig(dir=patches_dir, strip=strip)))
