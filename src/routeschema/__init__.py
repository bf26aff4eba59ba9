"""routeschema — typed path structures for file-based routing app directories.

Scans an app directory (``page.tsx`` / ``route.ts`` endpoints, dynamic
``[id]`` segments, ``(group)`` and ``@parallel`` folders) and writes a
TypeScript declaration describing every reachable endpoint: its HTTP method
handlers, its query contract, and the route params it inherits.

Quick start::

    from routeschema import ScanConfig, generate

    generate(ScanConfig(base_dir=Path("src/app"), output_path=Path("src/path-structure.ts")))

Watch mode::

    import asyncio
    from routeschema import watch

    asyncio.run(watch(config))

"""

__version__ = "0.1.0"
__all__ = [
    "RouteScanner",
    "ScanCache",
    "ScanConfig",
    "__version__",
    "generate",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routeschema`` fast (no watchfiles import) while providing
    a clean top-level API.
    """
    if name == "ScanConfig":
        from routeschema.config import ScanConfig

        return ScanConfig

    if name == "RouteScanner":
        from routeschema.routes.scanner import RouteScanner

        return RouteScanner

    if name == "ScanCache":
        from routeschema.routes.cache import ScanCache

        return ScanCache

    if name == "generate":
        from routeschema.generator import generate

        return generate

    if name == "watch":
        from routeschema.watch.session import watch

        return watch

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
