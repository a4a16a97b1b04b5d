from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rustprebuilts.host.context import LoadHookContext

__all__ = ["LoadHook", "Module", "PropertyMap", "merge_properties"]

PropertyMap = dict[str, object]
LoadHook = Callable[["LoadHookContext"], None]


def merge_properties(base: Mapping[str, object], extra: Mapping[str, object]) -> PropertyMap:
    """Append `extra` onto `base` the way the engine appends property structs.

    Nested tables merge recursively, lists are concatenated and scalars
    from `extra` replace those in `base`. Neither input is modified.
    """
    merged: PropertyMap = copy.deepcopy(dict(base))
    for key, value in extra.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_properties(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + copy.deepcopy(value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


@dataclass
class Module:
    """One declared module: its type, name and properties."""

    type_name: str
    name: str
    properties: PropertyMap = field(default_factory=dict)
    appended: list[PropertyMap] = field(default_factory=list)
    _load_hooks: list[LoadHook] = field(default_factory=list, repr=False)

    def add_load_hook(self, hook: LoadHook) -> None:
        self._load_hooks.append(hook)

    @property
    def load_hooks(self) -> tuple[LoadHook, ...]:
        return tuple(self._load_hooks)

    def effective_properties(self) -> PropertyMap:
        """Declared properties with every appended set merged in order."""
        result: PropertyMap = dict(self.properties)
        for props in self.appended:
            result = merge_properties(result, props)
        return result
