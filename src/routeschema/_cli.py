"""routeschema CLI — routeschema <base_dir> <output_path> [--watch].

Entry point for the ``routeschema`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from routeschema._errors import RouteSchemaError
from routeschema.console import Console

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the routeschema CLI."""
    parser = argparse.ArgumentParser(
        prog="routeschema",
        description="Generate RPC client type definitions from an app directory's path structure.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument("base_dir", help="App directory containing the route files")
    parser.add_argument("output_path", help="Output path for the generated type definitions")
    parser.add_argument(
        "-w", "--watch", action="store_true", default=None,
        help="Watch mode: regenerate on file changes",
    )
    parser.add_argument(
        "-p", "--params-file", metavar="FILENAME", default=None,
        help="Write a Params type file with this name next to each parameterised endpoint",
    )
    parser.add_argument(
        "--debounce", type=int, metavar="MS", default=None, dest="debounce_ms",
        help="Quiet period before regenerating in watch mode (default: 300)",
    )
    parser.add_argument(
        "--config-root", default=".",
        help="Directory holding routeschema.yaml / routeschema.toml (default: .)",
    )
    return parser


def _get_version() -> str:
    """Get the package version."""
    from routeschema import __version__

    return __version__


def main(argv: list[str] | None = None, *, console: Console | None = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    from routeschema.config_loader import load_config

    try:
        config = load_config(
            Path(args.config_root),
            base_dir=Path(args.base_dir),
            output_path=Path(args.output_path),
            params_file=args.params_file,
            watch=args.watch,
            debounce_ms=args.debounce_ms,
        )
    except RouteSchemaError as exc:
        console.error(f"Error: {exc}")
        return EXIT_FAILURE

    if config.watch:
        from routeschema.watch.session import watch

        try:
            asyncio.run(watch(config, console=console))
        except KeyboardInterrupt:
            pass
        return EXIT_SUCCESS

    from routeschema.generator import generate

    try:
        generate(config, console=console)
    except RouteSchemaError as exc:
        console.error(f"Failed to generate: {exc}")
        return EXIT_FAILURE
    return EXIT_SUCCESS


def run() -> None:
    """Console-script wrapper: exit with ``main()``'s status."""
    sys.exit(main())


if __name__ == "__main__":
    run()
