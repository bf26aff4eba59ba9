"""Tests for routeschema.config_loader — file config merged with overrides."""

from pathlib import Path

import pytest

from routeschema._errors import ConfigError
from routeschema.config_loader import load_config


class TestLoadConfig:

    def test_no_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, base_dir=tmp_path / "app")
        assert config.base_dir == tmp_path / "app"
        assert config.debounce_ms == 300

    def test_yaml_section(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yaml").write_text(
            "routeschema:\n"
            "  base_dir: src/app\n"
            "  output_path: src/paths.ts\n"
            "  params_file: params.ts\n"
            "  debounce_ms: 150\n"
        )
        config = load_config(tmp_path)
        assert config.base_dir == tmp_path / "src" / "app"
        assert config.output_path == tmp_path / "src" / "paths.ts"
        assert config.params_file == "params.ts"
        assert config.debounce_ms == 150

    def test_yaml_top_level_keys(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yml").write_text("watch: true\nunknown: 1\n")
        assert load_config(tmp_path).watch is True

    def test_toml(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.toml").write_text(
            '[routeschema]\nendpoint_file_names = ["page.tsx"]\nignore_dirs = ["vendor", "dist"]\n'
        )
        config = load_config(tmp_path)
        assert config.endpoint_file_names == ("page.tsx",)
        assert config.ignore_dirs == ("vendor", "dist")

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yaml").write_text("debounce_ms: 150\nparams_file: a.ts\n")
        config = load_config(tmp_path, debounce_ms=500, params_file=None)
        assert config.debounce_ms == 500
        assert config.params_file == "a.ts"

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yaml").write_text("routeschema: [unclosed\n")
        with pytest.raises(ConfigError, match="Malformed YAML"):
            load_config(tmp_path)

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.toml").write_text("[routeschema\n")
        with pytest.raises(ConfigError, match="Malformed TOML"):
            load_config(tmp_path)

    def test_bad_name_list(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yaml").write_text("ignore_dirs: 5\n")
        with pytest.raises(ConfigError, match="ignore_dirs"):
            load_config(tmp_path)

    def test_invalid_value_from_file(self, tmp_path: Path) -> None:
        (tmp_path / "routeschema.yaml").write_text("debounce_ms: 0\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)
