"""Tests for the gallery CLI commands."""

import pytest
from typer.testing import CliRunner

import main


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config.ini at a temp dir and keep logging handlers off the root logger."""
    config_path = tmp_path / "config.ini"
    monkeypatch.setattr("gallery.config.DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.setattr("main.DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.setattr("main.setup_logging", lambda *args, **kwargs: None)
    return config_path


@pytest.fixture
def library(tmp_path):
    lib = tmp_path / "assets"
    (lib / "cats").mkdir(parents=True)
    (lib / "cats" / "fluffy.png").write_bytes(b"png")
    (lib / "cats" / "tom.jpg").write_bytes(b"jpg")
    (lib / "readme.txt").write_text("hello")
    return lib


def test_init_writes_config(isolated_config, library):
    result = runner.invoke(main.app, ["init", "--dir", str(library), "--port", "9090"])
    assert result.exit_code == 0
    assert isolated_config.exists()

    from gallery.config import load_config

    config = load_config(isolated_config)
    assert config.library_path == library
    assert config.server_port == 9090


def test_scan_lists_categories(library):
    result = runner.invoke(main.app, ["scan", "--dir", str(library)])
    assert result.exit_code == 0
    assert "cats: 2" in result.output
    assert ".: 1" in result.output
    assert "3 files indexed" in result.output


def test_scan_uses_config_directory(isolated_config, library):
    runner.invoke(main.app, ["init", "--dir", str(library)])
    result = runner.invoke(main.app, ["scan"])
    assert result.exit_code == 0
    assert "3 files indexed" in result.output


def test_stats_counts_images(library):
    result = runner.invoke(main.app, ["stats", "--dir", str(library)])
    assert result.exit_code == 0
    assert "Total files: 3" in result.output
    assert "Categories: 2" in result.output
    assert "Images: 2 / 3" in result.output


def test_serve_missing_directory_exits_before_serving(tmp_path, monkeypatch):
    called = []
    monkeypatch.setattr("main.run_server", lambda *args, **kwargs: called.append(args))

    result = runner.invoke(main.app, ["serve", "--dir", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert called == []


def test_serve_passes_catalog_and_overrides(library, monkeypatch):
    captured = {}

    def fake_run_server(catalog, config, host=None, port=None):
        captured.update(catalog=catalog, config=config, host=host, port=port)

    monkeypatch.setattr("main.run_server", fake_run_server)

    result = runner.invoke(main.app, ["serve", "--dir", str(library), "--port", "9999"])
    assert result.exit_code == 0
    assert len(captured["catalog"]) == 3
    assert captured["config"].library_path == library
    assert captured["port"] == 9999
    assert captured["host"] is None
