"""Generator — scan the app directory and write the declaration artifacts.

Writes the path-structure declaration to ``config.output_path`` and, when
``config.params_file`` is set, one ``Params`` declaration next to every
endpoint that inherits route parameters.
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from routeschema._errors import GenerateError
from routeschema.console import Console, pad_message
from routeschema.observability.events import ScanCompleted, now_ns
from routeschema.render import render_params_file, render_path_structure
from routeschema.routes.scanner import RouteScanner

if TYPE_CHECKING:
    from routeschema.config import ScanConfig
    from routeschema.observability.log import EventLog
    from routeschema.routes.cache import ScanCache
    from routeschema.routes.schema import ScanResult

SUCCESS_INDENT = 1
SUCCESS_PAD = 20


def create_scanner(config: ScanConfig, cache: ScanCache | None = None) -> RouteScanner:
    """Build a scanner honoring the conventions configured in *config*."""
    return RouteScanner(
        config.output_path,
        cache=cache,
        endpoint_file_names=config.endpoint_file_names,
        ignore_dirs=config.ignore_dirs,
    )


def generate(
    config: ScanConfig,
    *,
    scanner: RouteScanner | None = None,
    console: Console | None = None,
    log: EventLog | None = None,
) -> ScanResult:
    """Scan ``config.base_dir`` and write the artifacts.

    Args:
        config: Resolved configuration.
        scanner: Scanner whose caches persist across calls (watch mode).
            A fresh one over the default cache is created when omitted.
        console: Progress reporter.
        log: Optional event log receiving a ``ScanCompleted`` event.

    Raises:
        ScanError: If the app directory cannot be scanned.
        GenerateError: If an artifact cannot be written.

    """
    console = console or Console()
    scanner = scanner or create_scanner(config)

    console.info("Generating types...", event="generate")

    t0 = time.perf_counter()
    result = scanner.scan(config.base_dir)
    duration_ms = (time.perf_counter() - t0) * 1000
    scanner.cache.aliases.retain(result.imports)

    if log is not None:
        log.append(ScanCompleted(
            path=str(config.base_dir),
            endpoints=result.schema.count_endpoints(),
            imports=len(result.imports),
            duration_ms=duration_ms,
            timestamp_ns=now_ns(),
        ))

    _write(config.output_path, render_path_structure(result))
    console.success(
        pad_message("Path structure type", _display_path(config.output_path), width=SUCCESS_PAD),
        indent=SUCCESS_INDENT,
    )

    if config.params_file:
        for entry in result.params_entries:
            _write(Path(entry.directory) / config.params_file, render_params_file(entry))
        console.success(
            pad_message("Params types", config.params_file, width=SUCCESS_PAD),
            indent=SUCCESS_INDENT,
        )

    return result


def _write(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write {path}: {exc}"
        raise GenerateError(msg) from exc


def _display_path(path: Path) -> str:
    """Show *path* relative to the working directory (absolute across drives)."""
    try:
        return os.path.relpath(path)
    except ValueError:
        return str(path)
