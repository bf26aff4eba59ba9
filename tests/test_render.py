"""Tests for routeschema.render — declaration artifact text."""

from collections.abc import Callable
from pathlib import Path

from routeschema.render import (
    collect_imports,
    render_capability,
    render_node,
    render_params_file,
    render_path_structure,
    used_key_types,
)
from routeschema.routes.cache import ScanCache
from routeschema.routes.scanner import RouteScanner
from routeschema.routes.schema import (
    ENDPOINT_MARKER,
    Capability,
    ImportRef,
    ParamsTypeEntry,
    ScanResult,
    SchemaNode,
)

from .conftest import PAGE, ROUTE_GET_POST, Tree


class TestRenderCapability:

    def test_method(self) -> None:
        cap = Capability(kind="method", key="$get", value="GET_abc")
        assert render_capability(cap) == '{ "$get": typeof GET_abc }'

    def test_query_kinds(self) -> None:
        assert render_capability(Capability("query", "QueryKey", "Q_1")) == "Record<QueryKey, Q_1>"
        assert (
            render_capability(Capability("optional_query", "OptionalQueryKey", "Q_2"))
            == "Record<OptionalQueryKey, Q_2>"
        )

    def test_endpoint_and_params(self) -> None:
        assert render_capability(ENDPOINT_MARKER) == "Endpoint"
        params = Capability("params", "ParamsKey", '{ "id": string }')
        assert render_capability(params) == 'Record<ParamsKey, { "id": string }>'


class TestRenderNode:

    def test_empty(self) -> None:
        assert render_node(SchemaNode()) == "{}"

    def test_endpoint_only(self) -> None:
        assert render_node(SchemaNode(capabilities=(ENDPOINT_MARKER,))) == "Endpoint"

    def test_endpoint_and_children(self) -> None:
        node = SchemaNode(
            capabilities=(ENDPOINT_MARKER,),
            children=(("about", SchemaNode(capabilities=(ENDPOINT_MARKER,))),),
        )
        assert render_node(node) == 'Endpoint & {\n  "about": Endpoint\n}'

    def test_nested_indentation(self) -> None:
        leaf = SchemaNode(capabilities=(ENDPOINT_MARKER,))
        node = SchemaNode(children=(("a", SchemaNode(children=(("b", leaf),))), ("c", leaf)))
        assert render_node(node) == (
            "{\n"
            '  "a": {\n'
            '    "b": Endpoint\n'
            "  },\n"
            '  "c": Endpoint\n'
            "}"
        )


class TestImports:

    def test_deduplicated_and_naturally_sorted(self) -> None:
        a10 = ImportRef("GET", "./app/v10/route", "GET_a10")
        a2 = ImportRef("GET", "./app/v2/route", "GET_a2")
        result = ScanResult(imports=(a10, a2, a10))
        assert collect_imports(result) == [a2, a10]

    def test_used_key_types_in_fixed_order(self) -> None:
        node = SchemaNode(children=(
            ("x", SchemaNode(capabilities=(Capability("query", "QueryKey", "Q"), ENDPOINT_MARKER))),
        ))
        assert used_key_types(node) == ["Endpoint", "QueryKey"]


class TestRenderPathStructure:

    def test_full_artifact(
        self, make_app_tree: Callable[[Tree], Path], tmp_path: Path, cache: ScanCache
    ) -> None:
        app = make_app_tree({"[id]": {"route.ts": ROUTE_GET_POST}, "about": {"page.tsx": PAGE}})
        result = RouteScanner(tmp_path / "out.ts", cache=cache).scan(app)
        get_alias, post_alias = (ref.alias for ref in result.imports)
        # Same source file: imports are ordered by alias.
        import_lines = "".join(
            f'import type {{ {ref.exported_name} as {ref.alias} }} from "./app/[id]/route";\n'
            for ref in sorted(result.imports, key=lambda r: r.alias)
        )

        text = render_path_structure(result)

        assert text == (
            'import type { Endpoint, ParamsKey } from "rpc4next/client";\n'
            + import_lines
            + "\n"
            "export type PathStructure = {\n"
            f'  "_id": {{ "$get": typeof {get_alias} }} & {{ "$post": typeof {post_alias} }}'
            ' & Endpoint & Record<ParamsKey, { "id": string }>,\n'
            '  "about": Endpoint\n'
            "};\n"
        )

    def test_empty_result(self) -> None:
        assert render_path_structure(ScanResult()) == "export type PathStructure = {};\n"

    def test_custom_client_import_path(self) -> None:
        result = ScanResult(schema=SchemaNode(capabilities=(ENDPOINT_MARKER,)))
        text = render_path_structure(result, client_import_path="my-client")
        assert text.startswith('import type { Endpoint } from "my-client";\n')


def test_render_params_file() -> None:
    entry = ParamsTypeEntry(record_description='{ "id": string }', directory="/app/[id]")
    assert render_params_file(entry) == 'export type Params = { "id": string };\n'
