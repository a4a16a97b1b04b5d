"""Find the one prebuilt file for a library.

Toolchains embed a build hash in library file names
(`libstd-8a1d2f7c.rlib`). Given the library base name and extension the
locator finds the unique match and returns its module-relative path and
that hash suffix. Zero or several matches is a configuration error.
"""

from __future__ import annotations

import glob
import posixpath
from dataclasses import dataclass
from pathlib import Path

from rustprebuilts.core.result import Err, Ok, Result

__all__ = ["LibraryMatch", "LocateError", "find_prebuilt"]


@dataclass(frozen=True, slots=True)
class LibraryMatch:
    rel_path: str
    suffix: str


@dataclass(frozen=True, slots=True)
class LocateError:
    pattern: str
    count: int

    @property
    def message(self) -> str:
        return (
            f'Unexpected number of matches for prebuilt libraries at path "{self.pattern}", '
            f"found {self.count} matches"
        )


def find_prebuilt(
    module_dir: Path, dir: str, lib: str, extension: str
) -> Result[LibraryMatch, LocateError]:
    """Locate `<module_dir>/<dir>/<lib>-*<extension>`.

    Args:
        module_dir: Root the returned path is relative to
        dir: Directory of the library, relative to module_dir
        lib: Library base name ("libstd")
        extension: File extension including the dot (".rlib")
    """
    search_dir = module_dir / dir
    pattern = posixpath.join(module_dir.as_posix(), dir, lib) + "-*" + extension
    matches = sorted(
        p for p in search_dir.glob(glob.escape(lib) + "-*" + glob.escape(extension)) if p.is_file()
    )

    if len(matches) != 1:
        return Err(LocateError(pattern=pattern, count=len(matches)))

    match = matches[0]
    suffix = match.name.removesuffix(extension)[len(lib) + 1 :]
    rel_path = match.relative_to(module_dir).as_posix()
    return Ok(LibraryMatch(rel_path=rel_path, suffix=suffix))
