"""Tests for config.ini loading."""

from pathlib import Path

from gallery.config import (
    DEFAULT_PAGE_LIMIT,
    GalleryConfig,
    LibraryConfig,
    ScannerConfig,
    ServerConfig,
    load_config,
    write_config,
)


def test_missing_config_uses_defaults(tmp_path):
    config = load_config(tmp_path / "config.ini")
    assert config.library_path == Path("./assets")
    assert config.server_host == "0.0.0.0"
    assert config.server_port == 8080
    assert config.scanner.images_only is False
    assert config.scanner.ignore_patterns == ()
    assert config.pagination.default_limit == DEFAULT_PAGE_LIMIT


def test_load_config_reads_sections(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[library]\n"
        "path = /srv/pictures\n"
        "name = Holiday Photos\n"
        "[server]\n"
        "host = 127.0.0.1\n"
        "port = 9000\n"
        "[scanner]\n"
        "images_only = yes\n"
        "ignore_patterns = .DS_Store, Thumbs.db ,\n"
        "[pagination]\n"
        "default_limit = 50\n"
    )

    config = load_config(path)
    assert config.library_path == Path("/srv/pictures")
    assert config.library.name == "Holiday Photos"
    assert config.server_host == "127.0.0.1"
    assert config.server_port == 9000
    assert config.scanner.images_only is True
    assert config.scanner.ignore_patterns == (".DS_Store", "Thumbs.db")
    assert config.pagination.default_limit == 50


def test_non_positive_default_limit_falls_back(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[pagination]\ndefault_limit = 0\n")
    assert load_config(path).pagination.default_limit == DEFAULT_PAGE_LIMIT


def test_write_then_load(tmp_path):
    path = tmp_path / "nested" / "config.ini"
    original = GalleryConfig(
        library=LibraryConfig(path=tmp_path / "pics", name="Mine"),
        server=ServerConfig(port=8181),
        scanner=ScannerConfig(images_only=True, ignore_patterns=("@eaDir",)),
    )

    assert write_config(original, path) == path
    assert load_config(path) == original
