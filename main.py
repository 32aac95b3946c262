"""Gallery CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from gallery.catalog import ALL_ASSETS, Catalog
from gallery.config import DEFAULT_CONFIG_PATH, GalleryConfig, load_config, write_config
from gallery.logging_config import setup_logging
from gallery.scanner import is_image, scan_library
from gallery.web import run_server


__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="Gallery image server CLI")
logger = logging.getLogger("gallery")


def _load(directory: Optional[Path]) -> GalleryConfig:
    config = load_config()
    if directory is not None:
        config.library.path = directory.expanduser()
    return config


def _build(config: GalleryConfig) -> Catalog:
    try:
        return scan_library(config)
    except OSError as exc:
        logger.error(f"Unable to index {config.library_path}: {exc}")
        raise typer.Exit(code=1)


@app.command()
def init(
    directory: Path = typer.Option(..., "--dir", help="Directory containing images"),
    name: str = typer.Option("Image Gallery", "--name", help="Gallery name"),
    port: int = typer.Option(8080, "--port", help="Port to listen on"),
    images_only: bool = typer.Option(False, "--images-only", help="Only index image files"),
) -> None:
    """Write config.ini with the given settings."""
    config = GalleryConfig()
    config.library.path = directory
    config.library.name = name
    config.server.port = port
    config.scanner.images_only = images_only
    path = write_config(config, DEFAULT_CONFIG_PATH)
    typer.echo(f"[OK] Config created at {path}")


@app.command()
def scan(
    directory: Optional[Path] = typer.Option(None, "--dir", help="Directory containing images"),
) -> None:
    """Index the directory and list its categories."""
    setup_logging()

    config = _load(directory)
    catalog = _build(config)

    for category, records in catalog.categories().items():
        if category == ALL_ASSETS:
            continue
        typer.echo(f"  {category}: {len(records)}")
    typer.echo(f"✓ Scan completed: {len(catalog)} files indexed.")


@app.command()
def stats(
    directory: Optional[Path] = typer.Option(None, "--dir", help="Directory containing images"),
) -> None:
    """Show gallery statistics."""
    config = _load(directory)
    catalog = _build(config)

    assets = catalog.all_assets()
    images = len([record for record in assets if is_image(record.name)])
    categories = len(catalog.categories()) - 1

    typer.echo("Gallery Statistics:")
    typer.echo(f"  Directory: {config.library_path}")
    typer.echo(f"  Total files: {len(assets)}")
    typer.echo(f"  Categories: {categories}")
    typer.echo(f"  Images: {images} / {len(assets)}")


@app.command()
def serve(
    directory: Optional[Path] = typer.Option(None, "--dir", help="Directory containing images"),
    host: Optional[str] = typer.Option(None, "--host", help="Server host"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on"),
) -> None:
    """Index the directory, then start the gallery server."""
    setup_logging()

    config = _load(directory)
    logger.info(f"Indexing {config.library_path} ...")
    catalog = _build(config)

    try:
        run_server(catalog, config, host=host, port=port)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    app()
