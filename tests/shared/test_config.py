"""Tests for TOML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from shared.config import GlobalConfig, TabulaConfig, VigenereConfig, get_config


class TestDefaults:
    def test_vigenere_defaults(self) -> None:
        cfg = VigenereConfig()
        assert cfg.policy == "unicode"
        assert cfg.chunk_size == 32
        assert cfg.batch_size == 4
        assert cfg.use_marker is True
        assert cfg.marker == "M%S$&#%"
        assert cfg.encoding == "utf-8"
        assert cfg.output_format == "console"

    def test_global_defaults(self) -> None:
        cfg = GlobalConfig()
        assert cfg.log_level == "WARNING"
        assert cfg.log_file is None
        assert cfg.debug is False

    @pytest.mark.parametrize("field", ["chunk_size", "batch_size"])
    def test_sizes_must_be_positive(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            VigenereConfig(**{field: 0})

    def test_to_dict(self) -> None:
        data = TabulaConfig().to_dict()
        assert data["vigenere"]["policy"] == "unicode"
        assert data["global_settings"]["log_level"] == "WARNING"


class TestLoad:
    def test_loads_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text(
            '[global]\nlog_level = "DEBUG"\nlog_json = true\n'
            '[vigenere]\npolicy = "letters"\nchunk_size = 4096\nuse_marker = false\n',
            encoding="utf-8",
        )
        cfg = TabulaConfig.load(path)
        assert cfg.global_settings.log_level == "DEBUG"
        assert cfg.global_settings.log_json is True
        assert cfg.vigenere.policy == "letters"
        assert cfg.vigenere.chunk_size == 4096
        assert cfg.vigenere.use_marker is False
        assert cfg.vigenere.batch_size == 4  # default

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text(
            '[vigenere]\nshiny_new_option = 1\n[other_tool]\nx = 2\n',
            encoding="utf-8",
        )
        assert TabulaConfig.load(path) == TabulaConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text("", encoding="utf-8")
        assert TabulaConfig.load(path) == TabulaConfig()

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            TabulaConfig.load(tmp_path / "absent.toml")

    def test_malformed_toml_is_value_error(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text("[vigenere\npolicy =", encoding="utf-8")
        with pytest.raises(ValueError):
            TabulaConfig.load(path)

    def test_get_config_caches(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text('[vigenere]\npolicy = "printable"\n', encoding="utf-8")
        loaded = get_config(path)
        assert loaded.vigenere.policy == "printable"
        assert get_config() is loaded


class TestTypeChecks:
    @pytest.mark.parametrize(
        ("body", "message"),
        [
            ('[vigenere]\nchunk_size = "32"\n', "vigenere.chunk_size must be an integer"),
            ("[vigenere]\nchunk_size = true\n", "vigenere.chunk_size must be an integer"),
            ("[vigenere]\nmarker = 5\n", "vigenere.marker must be a string"),
            ('[vigenere]\nuse_marker = "yes"\n', "vigenere.use_marker must be a boolean"),
            ("[global]\nlog_file = 3\n", "global.log_file must be a string"),
        ],
    )
    def test_mistyped_values(self, tmp_path: Path, body: str, message: str) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text(body, encoding="utf-8")
        with pytest.raises(ValueError, match=message):
            TabulaConfig.load(path)

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text("vigenere = 5\n", encoding="utf-8")
        with pytest.raises(ValueError, match=r"\[vigenere\] must be a table"):
            TabulaConfig.load(path)

    def test_optional_string_accepted(self, tmp_path: Path) -> None:
        path = tmp_path / "tabula.toml"
        path.write_text('[global]\nlog_file = "logs/tabula.log"\n', encoding="utf-8")
        assert TabulaConfig.load(path).global_settings.log_file == "logs/tabula.log"
