"""Alias allocator — collision-free local names for imported symbols.

Many endpoint files export the same names (``GET``, ``Query``), so every
import gets an alias derived from a hash of its source and name::

    GET from "./app/api/users/route"  ->  GET_3f1c0e8d2a9b4c77

The alias depends only on ``(source, name)``, which keeps cached scan
results valid across scans within one process.  Entries for deleted files
are dropped by ``retain()`` after each full scan, so a long watch session
holds only the aliases its current artifact uses.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routeschema.routes.schema import ImportRef

_DEFAULT_DIGEST_CHARS = 16


class AliasAllocator:
    """Hands out aliases and guarantees they never collide.

    A hash-prefix collision between two different ``(source, name)`` pairs is
    resolved by widening the digest for the later pair.
    """

    __slots__ = ("_by_alias", "_by_key")

    def __init__(self) -> None:
        self._by_key: dict[tuple[str, str], str] = {}
        self._by_alias: dict[str, tuple[str, str]] = {}

    def allocate(self, source: str, name: str) -> str:
        key = (source, name)
        existing = self._by_key.get(key)
        if existing is not None:
            return existing

        digest = hashlib.md5(f"{source}::{name}".encode()).hexdigest()
        width = _DEFAULT_DIGEST_CHARS
        alias = f"{name}_{digest[:width]}"
        while alias in self._by_alias:
            width += 1
            if width > len(digest):
                # Exhausted the digest; fall back to a counter suffix.
                alias = f"{name}_{digest}_{len(self._by_alias)}"
                break
            alias = f"{name}_{digest[:width]}"

        self._by_key[key] = alias
        self._by_alias[alias] = key
        return alias

    def retain(self, imports: Iterable[ImportRef]) -> int:
        """Forget every alias not used by *imports*; returns how many were dropped."""
        keep = {(ref.source_file, ref.exported_name) for ref in imports}
        stale = [key for key in self._by_key if key not in keep]
        for key in stale:
            del self._by_alias[self._by_key.pop(key)]
        return len(stale)

    def clear(self) -> None:
        self._by_key.clear()
        self._by_alias.clear()

    def __len__(self) -> int:
        return len(self._by_key)
