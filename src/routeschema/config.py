"""routeschema configuration.

ScanConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from routeschema._errors import ConfigError

DEFAULT_ENDPOINT_FILE_NAMES: tuple[str, ...] = ("page.tsx", "route.ts")
DEFAULT_IGNORE_DIRS: tuple[str, ...] = ("node_modules",)


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Configuration for one generation (or one watch session).

    Attributes:
        base_dir: The app directory to scan.  Always resolved to an absolute
            path on construction.
        output_path: Where the path-structure declaration is written.  Import
            paths in the artifact are computed relative to its directory.
        params_file: File name for co-located ``Params`` declarations, written
            next to every endpoint that inherits route parameters.  *None*
            disables params files.
        watch: Keep running and regenerate on endpoint file changes.
        debounce_ms: Quiet period before a burst of changes triggers a re-scan.
        endpoint_file_names: File names that make a directory reachable.
        ignore_dirs: Directory names never traversed.

    """

    base_dir: Path = field(default_factory=Path.cwd)
    output_path: Path = field(default_factory=lambda: Path("path-structure.ts"))
    params_file: str | None = None
    watch: bool = False
    debounce_ms: int = 300
    endpoint_file_names: tuple[str, ...] = DEFAULT_ENDPOINT_FILE_NAMES
    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS

    def __post_init__(self) -> None:
        # Resolve to absolute so that watchfiles (which returns absolute
        # paths) and the scan caches agree on keys.
        if not self.base_dir.is_absolute():
            object.__setattr__(self, "base_dir", self.base_dir.resolve())
        if not self.output_path.is_absolute():
            object.__setattr__(self, "output_path", self.output_path.resolve())

        if self.params_file is not None:
            if not self.params_file or "/" in self.params_file or "\\" in self.params_file:
                msg = f"params_file must be a bare file name, got {self.params_file!r}"
                raise ConfigError(msg)
        if self.debounce_ms <= 0:
            msg = f"debounce_ms must be positive, got {self.debounce_ms}"
            raise ConfigError(msg)
        if not self.endpoint_file_names:
            msg = "endpoint_file_names must name at least one file"
            raise ConfigError(msg)

    @property
    def debounce_seconds(self) -> float:
        """Debounce delay in seconds, for the asyncio scheduler."""
        return self.debounce_ms / 1000
