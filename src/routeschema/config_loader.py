"""Load ScanConfig from routeschema.yaml / routeschema.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from routeschema._errors import ConfigError
from routeschema.config import ScanConfig

_KNOWN_KEYS: frozenset[str] = frozenset({
    "base_dir",
    "output_path",
    "params_file",
    "watch",
    "debounce_ms",
    "endpoint_file_names",
    "ignore_dirs",
})

_PATH_KEYS: tuple[str, ...] = ("base_dir", "output_path")
_TUPLE_KEYS: tuple[str, ...] = ("endpoint_file_names", "ignore_dirs")


def load_config(root: Path, **overrides: object) -> ScanConfig:
    """Load ScanConfig from *root*, optionally merging a routeschema config file.

    Looks for routeschema.yaml, routeschema.yml, or routeschema.toml in *root*.
    Relative ``base_dir`` / ``output_path`` values from the file are resolved
    against *root*.  Overrides take precedence; ``None`` overrides are ignored
    so that unset CLI flags do not mask file values.

    Raises:
        ConfigError: If the config file is malformed or a value is invalid.

    """
    file_config = _read_config_file(root)
    for key in _PATH_KEYS:
        if key in file_config:
            value = Path(str(file_config[key]))
            file_config[key] = value if value.is_absolute() else root / value

    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    for key in _PATH_KEYS:
        if key in merged and not isinstance(merged[key], Path):
            merged[key] = Path(str(merged[key]))
    for key in _TUPLE_KEYS:
        if key in merged:
            merged[key] = _as_name_tuple(key, merged[key])

    try:
        return ScanConfig(**merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigError(msg) from exc


def _read_config_file(root: Path) -> dict[str, object]:
    """Read routeschema config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("routeschema.yaml", "routeschema.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "routeschema.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Malformed YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Malformed TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_section(data)


def _flatten_section(data: dict[str, object]) -> dict[str, object]:
    """Extract routeschema.* keys (or known top-level keys) into a flat dict."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "routeschema" and k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("routeschema")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result


def _as_name_tuple(key: str, value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    msg = f"{key} must be a list of names, got {value!r}"
    raise ConfigError(msg)
