"""Scan caches and prefix-based invalidation.

Two plain memo tables keyed by normalized absolute directory path:

- ``existence``: does the directory (recursively) reach an endpoint file?
- ``schemas``: the full ``ScanResult`` computed for the directory.

Nothing expires.  Correctness relies on ``invalidate()`` being called for
every changed path before the next scan: it drops the changed directory and
all of its ancestors, whose results embed the changed subtree, and leaves
descendants alone.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

from routeschema._types import DirKey
from routeschema.routes.alias import AliasAllocator
from routeschema.routes.schema import ScanResult


def dir_key(path: str | Path) -> DirKey:
    """Normalize *path* into a cache key (absolute, no trailing separator)."""
    return os.path.normpath(os.path.abspath(path))


def invalidate(cache: MutableMapping[DirKey, Any], changed_path: str | Path) -> int:
    """Evict every entry for *changed_path* or one of its ancestors.

    A file path works as well as its parent directory: the parent is an
    ancestor of the file.  Paths unrelated to any key remove nothing.

    Returns:
        The number of entries removed.

    """
    target = dir_key(changed_path)
    doomed = [
        key for key in cache
        if (resolved := dir_key(key)) == target
        or target.startswith(resolved.rstrip(os.sep) + os.sep)
    ]
    for key in doomed:
        del cache[key]
    return len(doomed)


class ScanCache:
    """The existence cache, the schema cache and the alias allocator of a process.

    Shared by every scan in a process lifetime (for example every
    regeneration of a watch session).
    """

    __slots__ = ("aliases", "existence", "schemas")

    def __init__(self) -> None:
        self.existence: dict[DirKey, bool] = {}
        self.schemas: dict[DirKey, ScanResult] = {}
        self.aliases = AliasAllocator()

    def invalidate(self, changed_path: str | Path) -> int:
        """Invalidate *changed_path* in both caches; returns entries removed."""
        return invalidate(self.existence, changed_path) + invalidate(self.schemas, changed_path)

    def clear(self) -> None:
        self.existence.clear()
        self.schemas.clear()
        self.aliases.clear()

    def __len__(self) -> int:
        return len(self.schemas)


default_cache = ScanCache()
