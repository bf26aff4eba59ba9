"""Schema tree data model.

Every value here is a frozen dataclass built from tuples, so a ``ScanResult``
handed up from a child directory can be embedded in its parent without any
risk of later mutation through a shared reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

type ParamArity = Literal["single", "catch_all", "optional_catch_all"]
type CapabilityKind = Literal["method", "query", "optional_query", "endpoint", "params"]


@dataclass(frozen=True, slots=True)
class ParamBinding:
    """A route parameter inherited from a dynamic ancestor segment.

    Attributes:
        name: Parameter name (``id`` for ``[id]``).
        arity: How many path segments the parameter binds.

    """

    name: str
    arity: ParamArity


@dataclass(frozen=True, slots=True)
class ImportRef:
    """A symbol the generated artifact must import.

    Attributes:
        exported_name: Name exported by the endpoint file (``GET``, ``Query``).
        source_file: Import path relative to the output file, without extension.
        alias: Globally unique local name for the import.

    """

    exported_name: str
    source_file: str
    alias: str


@dataclass(frozen=True, slots=True)
class Capability:
    """One contribution to an endpoint's contract.

    Attributes:
        kind: Which capability this is.
        key: ``$get`` style key for methods, empty otherwise.
        value: Imported alias for method/query capabilities, the rendered
            params record for ``params``, empty for the endpoint marker.

    """

    kind: CapabilityKind
    key: str = ""
    value: str = ""


ENDPOINT_MARKER = Capability(kind="endpoint")


@dataclass(frozen=True, slots=True)
class SchemaNode:
    """A node of the schema tree.

    A node may carry capabilities (it is an endpoint), children (it is a
    directory of further endpoints), or both.  Children are kept as ordered
    ``(key, node)`` pairs; the order is the sorted directory-entry order.

    """

    capabilities: tuple[Capability, ...] = ()
    children: tuple[tuple[str, SchemaNode], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.capabilities and not self.children

    @property
    def is_endpoint(self) -> bool:
        return ENDPOINT_MARKER in self.capabilities

    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.children)

    def get(self, key: str) -> SchemaNode | None:
        for child_key, child in self.children:
            if child_key == key:
                return child
        return None

    def __getitem__(self, key: str) -> SchemaNode:
        node = self.get(key)
        if node is None:
            raise KeyError(key)
        return node

    def count_endpoints(self) -> int:
        """Number of reachable endpoints in this subtree, this node included."""
        own = 1 if self.is_endpoint else 0
        return own + sum(child.count_endpoints() for _, child in self.children)


EMPTY_NODE = SchemaNode()


@dataclass(frozen=True, slots=True)
class ParamsTypeEntry:
    """A params record to emit next to an endpoint.

    Attributes:
        record_description: Rendered object type, e.g. ``{ "id": string }``.
        directory: Absolute directory of the endpoint file.
        bindings: The inherited bindings the record was built from.

    """

    record_description: str
    directory: str
    bindings: tuple[ParamBinding, ...] = ()


@dataclass(frozen=True, slots=True)
class ScanResult:
    """The unit cached per directory and merged by a parent from its children."""

    schema: SchemaNode = EMPTY_NODE
    imports: tuple[ImportRef, ...] = ()
    params_entries: tuple[ParamsTypeEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.schema.is_empty


def merge_nodes(left: SchemaNode, right: SchemaNode) -> SchemaNode:
    """Combine two nodes that landed on the same key.

    Happens when sibling groups such as ``(a)/home`` and ``(b)/home`` both
    contribute ``home``.  Capabilities are concatenated without duplicates and
    children with the same key are merged recursively.
    """
    capabilities = left.capabilities + tuple(
        cap for cap in right.capabilities if cap not in left.capabilities
    )
    return SchemaNode(capabilities=capabilities, children=merge_children(left.children, right.children))


def merge_children(
    left: tuple[tuple[str, SchemaNode], ...],
    right: tuple[tuple[str, SchemaNode], ...],
) -> tuple[tuple[str, SchemaNode], ...]:
    merged: dict[str, SchemaNode] = dict(left)
    for key, node in right:
        existing = merged.get(key)
        merged[key] = node if existing is None else merge_nodes(existing, node)
    return tuple(merged.items())
