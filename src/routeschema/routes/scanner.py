"""Recursive scanner — build the schema tree of an app directory.

Walks the app directory, classifies every subdirectory name, scans endpoint
files for exported symbols, and composes one ``ScanResult`` per directory::

    app/
      api/users/[id]/route.ts     ->  api -> users -> _id  (GET, POST, params)
      (marketing)/about/page.tsx  ->  about                (group is spliced)
      _components/page.tsx        ->  (excluded)

Results are memoized per directory in a ``ScanCache``.  A cache hit returns
the very same ``ScanResult`` object, so callers may compare by identity to
detect an unchanged subtree.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from routeschema._errors import ScanError
from routeschema.config import DEFAULT_ENDPOINT_FILE_NAMES, DEFAULT_IGNORE_DIRS
from routeschema.routes.cache import ScanCache, default_cache, dir_key
from routeschema.routes.schema import (
    ENDPOINT_MARKER,
    Capability,
    ImportRef,
    ParamBinding,
    ParamsTypeEntry,
    ScanResult,
    SchemaNode,
    merge_children,
)
from routeschema.routes.segments import classify_segment
from routeschema.routes.symbols import relative_import_path, scan_symbols
from routeschema.routes.typefmt import params_record

PARAMS_KEY = "ParamsKey"


class RouteScanner:
    """Scans an app directory tree into a schema tree.

    Args:
        output_path: The artifact path; only used to compute import paths.
        cache: Memo tables shared across scans.  Defaults to the process-wide
            ``default_cache``.
        endpoint_file_names: File names that make a directory reachable.
        ignore_dirs: Directory names that are never traversed.

    """

    def __init__(
        self,
        output_path: str | Path,
        *,
        cache: ScanCache | None = None,
        endpoint_file_names: Iterable[str] = DEFAULT_ENDPOINT_FILE_NAMES,
        ignore_dirs: Iterable[str] = DEFAULT_IGNORE_DIRS,
    ) -> None:
        self.output_path = dir_key(output_path)
        self.cache = cache if cache is not None else default_cache
        self._endpoint_names = frozenset(endpoint_file_names)
        self._ignore_dirs = frozenset(ignore_dirs)

    # ------------------------------------------------------------------
    # Existence
    # ------------------------------------------------------------------

    def has_endpoint_files(self, directory: str | Path) -> bool:
        """Whether *directory* reaches at least one endpoint file.

        Excluded subdirectories (private, intercepting, ignored) do not count,
        but they never hide their siblings either.  Symlinked directories are never
        followed, so a link cycle or a second path to one directory is ignored.
        """
        key = dir_key(directory)
        cached = self.cache.existence.get(key)
        if cached is not None:
            return cached

        found = False
        for entry in _list_dir(Path(key)):
            if entry.is_file():
                if entry.name in self._endpoint_names:
                    found = True
                    break
            elif _is_real_dir(entry) and not self._is_skipped_dir(entry.name):
                if self.has_endpoint_files(entry):
                    found = True
                    break

        self.cache.existence[key] = found
        return found

    def _is_skipped_dir(self, name: str) -> bool:
        return name in self._ignore_dirs or classify_segment(name).is_excluded

    # ------------------------------------------------------------------
    # Scan
    # ------------------------------------------------------------------

    def scan(
        self,
        directory: str | Path,
        inherited: tuple[ParamBinding, ...] = (),
    ) -> ScanResult:
        """Compute (or fetch) the ``ScanResult`` for *directory*.

        The cache is keyed by directory alone: a physical directory occupies
        exactly one position in the tree, so its inherited params never vary.

        Raises:
            ScanError: If a directory cannot be listed or a file cannot be read.

        """
        key = dir_key(directory)
        cached = self.cache.schemas.get(key)
        if cached is not None:
            return cached

        capabilities: list[Capability] = []
        children: tuple[tuple[str, SchemaNode], ...] = ()
        imports: list[ImportRef] = []
        params_entries: list[ParamsTypeEntry] = []

        for entry in self._qualifying_entries(Path(key)):
            if entry.is_file():
                self._scan_endpoint_file(entry, inherited, capabilities, imports, params_entries)
                continue

            segment = classify_segment(entry.name)
            binding = segment.binding()
            child_params = (*inherited, binding) if binding is not None else inherited
            child = self.scan(entry, child_params)

            imports.extend(child.imports)
            params_entries.extend(child.params_entries)
            if child.is_empty:
                continue

            if segment.is_transparent:
                _extend_unique(capabilities, child.schema.capabilities)
                children = merge_children(children, child.schema.children)
            else:
                children = merge_children(children, ((segment.key, child.schema),))

        result = ScanResult(
            schema=SchemaNode(capabilities=tuple(capabilities), children=children),
            imports=tuple(imports),
            params_entries=tuple(params_entries),
        )
        self.cache.schemas[key] = result
        return result

    def _qualifying_entries(self, directory: Path) -> list[Path]:
        """Endpoint files and reachable, non-excluded subdirectories, sorted by name.

        Symlinked directories are left out: every physical directory sits at
        exactly one position in the tree.
        """
        entries: list[Path] = []
        for entry in _list_dir(directory):
            if _is_real_dir(entry):
                if not self._is_skipped_dir(entry.name) and self.has_endpoint_files(entry):
                    entries.append(entry)
            elif entry.name in self._endpoint_names:
                entries.append(entry)
        return sorted(entries, key=lambda p: p.name)

    def _scan_endpoint_file(
        self,
        path: Path,
        inherited: tuple[ParamBinding, ...],
        capabilities: list[Capability],
        imports: list[ImportRef],
        params_entries: list[ParamsTypeEntry],
    ) -> None:
        text = _read_text(path)
        source = relative_import_path(self.output_path, path)

        for match in scan_symbols(text, source=source, aliases=self.cache.aliases):
            _extend_unique(capabilities, (match.capability,))
            if match.import_ref not in imports:
                imports.append(match.import_ref)

        _extend_unique(capabilities, (ENDPOINT_MARKER,))

        if inherited:
            record = params_record(inherited)
            _extend_unique(capabilities, (Capability(kind="params", key=PARAMS_KEY, value=record),))
            directory = dir_key(path.parent)
            if not any(e.directory == directory for e in params_entries):
                params_entries.append(ParamsTypeEntry(
                    record_description=record,
                    directory=directory,
                    bindings=inherited,
                ))


def scan_app_dir(
    output_path: str | Path,
    base_dir: str | Path,
    *,
    cache: ScanCache | None = None,
) -> ScanResult:
    """Scan *base_dir* with default conventions; convenience for one-off scans."""
    return RouteScanner(output_path, cache=cache).scan(base_dir)


def _extend_unique(target: list[Capability], items: Iterable[Capability]) -> None:
    for item in items:
        if item not in target:
            target.append(item)


def _is_real_dir(entry: Path) -> bool:
    return entry.is_dir() and not entry.is_symlink()


def _list_dir(directory: Path) -> list[Path]:
    try:
        return list(directory.iterdir())
    except OSError as exc:
        msg = f"Cannot list directory {directory}: {exc}"
        raise ScanError(msg, directory) from exc


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read endpoint file {path}: {exc}"
        raise ScanError(msg, path) from exc
