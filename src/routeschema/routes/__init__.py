"""Route scanning — from an app directory to a schema tree.

Classifies directory names by file-based routing conventions, detects the
symbols endpoint files export, and memoizes the composed tree per directory.

Public API::

    from routeschema.routes import RouteScanner, ScanCache

    cache = ScanCache()
    scanner = RouteScanner("src/path-structure.ts", cache=cache)
    result = scanner.scan("src/app")
    cache.invalidate("src/app/api/users/route.ts")
"""

from routeschema.routes.cache import ScanCache, default_cache, dir_key, invalidate
from routeschema.routes.scanner import RouteScanner, scan_app_dir
from routeschema.routes.schema import (
    Capability,
    ImportRef,
    ParamBinding,
    ParamsTypeEntry,
    ScanResult,
    SchemaNode,
)
from routeschema.routes.segments import Segment, classify_segment

__all__ = [
    "Capability",
    "ImportRef",
    "ParamBinding",
    "ParamsTypeEntry",
    "RouteScanner",
    "ScanCache",
    "ScanResult",
    "SchemaNode",
    "Segment",
    "classify_segment",
    "default_cache",
    "dir_key",
    "invalidate",
    "scan_app_dir",
]
