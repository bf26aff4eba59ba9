"""Shared test fixtures for routeschema."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from routeschema.routes.cache import ScanCache
from routeschema.routes.scanner import RouteScanner

type Tree = Mapping[str, "str | Tree"]


def write_tree(root: Path, tree: Tree) -> Path:
    """Materialize a nested ``{name: content | subtree}`` mapping under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in tree.items():
        path = root / name
        if isinstance(value, str):
            path.write_text(value)
        else:
            write_tree(path, value)
    return root


@pytest.fixture
def make_app_tree(tmp_path: Path) -> Callable[[Tree], Path]:
    """Factory writing a tree under ``tmp_path/app`` and returning that directory."""

    def _make(tree: Tree) -> Path:
        return write_tree(tmp_path / "app", tree)

    return _make


@pytest.fixture
def cache() -> ScanCache:
    """A fresh, private scan cache."""
    return ScanCache()


@pytest.fixture
def scanner(tmp_path: Path, cache: ScanCache) -> RouteScanner:
    """A scanner writing to ``tmp_path/path-structure.ts`` over a private cache."""
    return RouteScanner(tmp_path / "path-structure.ts", cache=cache)


ROUTE_GET_POST = """\
import { NextResponse } from "next/server";

export async function GET(request: Request) {
  return NextResponse.json({ ok: true });
}

export const POST = async (request: Request) => NextResponse.json({});

export function OPTIONS() {}
"""

PAGE = "export default function Page() { return null; }\n"
