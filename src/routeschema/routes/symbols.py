"""Symbol scanner — detect exported query contracts and method handlers.

Detection is plain pattern matching over the file text, not parsing.  The
recognised forms are::

    export interface Query { ... }          export type Query = ...
    export interface OptionalQuery { ... }  export type OptionalQuery = ...

    export function GET(...)                export async function POST(...)
    export const PUT = ...                  export { GET, POST } from "..."
    export const { GET, POST } = handlers   export { DELETE } = ...
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from routeschema._types import HttpMethod, QueryTypeName
from routeschema.routes.schema import Capability, ImportRef

if TYPE_CHECKING:
    from routeschema.routes.alias import AliasAllocator

HTTP_METHODS: tuple[HttpMethod, ...] = ("GET", "HEAD", "OPTIONS", "POST", "PUT", "DELETE", "PATCH")
# OPTIONS is answered by the framework itself and is not addressable over RPC.
RPC_METHODS: tuple[HttpMethod, ...] = tuple(m for m in HTTP_METHODS if m != "OPTIONS")
QUERY_TYPES: tuple[QueryTypeName, ...] = ("Query", "OptionalQuery")

QUERY_KEY = "QueryKey"
OPTIONAL_QUERY_KEY = "OptionalQueryKey"

_QUERY_PATTERNS: dict[QueryTypeName, re.Pattern[str]] = {
    name: re.compile(rf"export (interface {name} ?\{{|type {name} ?=)")
    for name in QUERY_TYPES
}


def _method_pattern(method: str) -> re.Pattern[str]:
    names = rf"\{{[^}}]*\b{method}\b[^}}]*\}}"
    return re.compile(
        rf"export (async )?("
        rf"function {method} ?\(|"
        rf"const {method} ?=|"
        rf"{names} ?=|"
        rf"const {names} ?=|"
        rf"{names} from)"
    )


_METHOD_PATTERNS: dict[str, re.Pattern[str]] = {m: _method_pattern(m) for m in RPC_METHODS}


@dataclass(frozen=True, slots=True)
class SymbolMatch:
    """One detected export: the capability it adds and the import it needs."""

    capability: Capability
    import_ref: ImportRef


def find_query_type(text: str) -> QueryTypeName | None:
    """Return the first query contract exported by *text*, if any."""
    for name in QUERY_TYPES:
        if _QUERY_PATTERNS[name].search(text):
            return name
    return None


def exports_method(text: str, method: str) -> bool:
    pattern = _METHOD_PATTERNS.get(method)
    return pattern is not None and pattern.search(text) is not None


def relative_import_path(output_file: str | Path, input_file: str | Path) -> str:
    """Import specifier for *input_file* as seen from *output_file*'s directory.

    POSIX separators, ``.ts``/``.tsx`` stripped, ``./`` added unless the
    path already climbs with ``../``.
    """
    rel = os.path.relpath(input_file, os.path.dirname(output_file)).replace(os.sep, "/")
    rel = re.sub(r"\.tsx?$", "", rel)
    if not rel.startswith("../"):
        rel = "./" + rel
    return rel


def scan_symbols(
    text: str,
    *,
    source: str,
    aliases: AliasAllocator,
) -> list[SymbolMatch]:
    """Detect every query contract and method handler exported by *text*.

    Args:
        text: Raw contents of an endpoint file.
        source: Import specifier of the file (see ``relative_import_path``).
        aliases: Allocator shared by the whole scan.

    Returns:
        Matches in a fixed order: the query contract first, then methods in
        ``RPC_METHODS`` order.

    """
    matches: list[SymbolMatch] = []

    query = find_query_type(text)
    if query is not None:
        alias = aliases.allocate(source, query)
        kind = "query" if query == "Query" else "optional_query"
        key = QUERY_KEY if query == "Query" else OPTIONAL_QUERY_KEY
        matches.append(SymbolMatch(
            capability=Capability(kind=kind, key=key, value=alias),
            import_ref=ImportRef(exported_name=query, source_file=source, alias=alias),
        ))

    for method in RPC_METHODS:
        if not exports_method(text, method):
            continue
        alias = aliases.allocate(source, method)
        matches.append(SymbolMatch(
            capability=Capability(kind="method", key=f"${method.lower()}", value=alias),
            import_ref=ImportRef(exported_name=method, source_file=source, alias=alias),
        ))

    return matches
