"""Serializer — spell a ``ScanResult`` as a TypeScript declaration.

The artifact looks like::

    import type { Endpoint, ParamsKey } from "rpc4next/client";
    import type { GET as GET_3f1c0e8d2a9b4c77 } from "./app/api/users/[id]/route";

    export type PathStructure = {
      "api": {
        "users": {
          "_id": { "$get": typeof GET_3f1c0e8d2a9b4c77 } & Endpoint & Record<ParamsKey, { "id": string }>
        }
      }
    };
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from routeschema.routes.scanner import PARAMS_KEY
from routeschema.routes.schema import Capability, ImportRef, ParamsTypeEntry, ScanResult, SchemaNode
from routeschema.routes.symbols import OPTIONAL_QUERY_KEY, QUERY_KEY
from routeschema.routes.typefmt import import_type, object_type, record_type

CLIENT_IMPORT_PATH = "rpc4next/client"
ENDPOINT_TYPE = "Endpoint"
INDENT = "  "

# Key types the client package exports, in import order.
TYPE_KEYS: tuple[str, ...] = (ENDPOINT_TYPE, OPTIONAL_QUERY_KEY, PARAMS_KEY, QUERY_KEY)

_CAPABILITY_KEY_TYPES: dict[str, str] = {
    "endpoint": ENDPOINT_TYPE,
    "optional_query": OPTIONAL_QUERY_KEY,
    "params": PARAMS_KEY,
    "query": QUERY_KEY,
}

_DIGITS = re.compile(r"(\d+)")


def render_capability(capability: Capability) -> str:
    match capability.kind:
        case "method":
            return object_type([(capability.key, f"typeof {capability.value}")])
        case "endpoint":
            return ENDPOINT_TYPE
        case _:
            return record_type(_CAPABILITY_KEY_TYPES[capability.kind], capability.value)


def render_node(node: SchemaNode, indent: str = "") -> str:
    """Render *node* as ``caps & { children }``, either part optional."""
    type_string = " & ".join(render_capability(cap) for cap in node.capabilities)

    body = ""
    if node.children:
        inner = indent + INDENT
        members = ",\n".join(
            f'{inner}"{key}": {render_node(child, inner)}' for key, child in node.children
        )
        body = f"{{\n{members}\n{indent}}}"

    if type_string and body:
        return f"{type_string} & {body}"
    return type_string or body or "{}"


def collect_imports(result: ScanResult) -> list[ImportRef]:
    """De-duplicated imports, sorted by source path in natural order."""
    unique = dict.fromkeys(result.imports)
    return sorted(unique, key=lambda ref: (_natural_key(ref.source_file), ref.alias))


def used_key_types(node: SchemaNode) -> list[str]:
    kinds = {cap.kind for cap in _walk_capabilities(node)}
    used = {_CAPABILITY_KEY_TYPES[k] for k in kinds if k in _CAPABILITY_KEY_TYPES}
    return [key for key in TYPE_KEYS if key in used]


def render_path_structure(result: ScanResult, *, client_import_path: str = CLIENT_IMPORT_PATH) -> str:
    """Render the full declaration artifact for *result*."""
    header: list[str] = []
    key_types = used_key_types(result.schema)
    if key_types:
        header.append(import_type(", ".join(key_types), client_import_path))
    header.extend(
        import_type(ref.exported_name, ref.source_file, ref.alias) for ref in collect_imports(result)
    )

    declaration = f"export type PathStructure = {render_node(result.schema)};\n"
    if not header:
        return declaration
    return "\n".join(header) + "\n\n" + declaration


def render_params_file(entry: ParamsTypeEntry) -> str:
    return f"export type Params = {entry.record_description};\n"


def _walk_capabilities(node: SchemaNode) -> Iterator[Capability]:
    yield from node.capabilities
    for _, child in node.children:
        yield from _walk_capabilities(child)


def _natural_key(text: str) -> tuple[object, ...]:
    return tuple(int(part) if part.isdigit() else part for part in _DIGITS.split(text))
