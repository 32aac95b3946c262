"""Filesystem scanner for Gallery.

Walks the library root once and builds the in-memory catalog.

Entries in each directory are visited in lexical order and subdirectories
are descended into where they sort, so the resulting order is stable
between runs. Any OSError raised while walking aborts the build.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

from .catalog import Catalog
from .config import GalleryConfig
from .logging_config import get_logger
from .models import ImageRecord
from .path_utils import category_of, to_asset_url, to_display_text, to_relative

logger = get_logger(__name__)


IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}


def is_image(name: str) -> bool:
    """Return True if the file name has a supported image extension."""
    return Path(name).suffix.lower() in IMAGE_EXTENSIONS


def _should_ignore(name: str, ignore_patterns: Iterable[str]) -> bool:
    return name in ignore_patterns


def walk_files(root: Path, ignore_patterns: tuple[str, ...] = ()) -> Iterator[Path]:
    """Yield every non-directory entry under root in lexical walk order.

    Symlinks are yielded as files and never followed.
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    logger.debug(f"[SCAN] {root} ({len(entries)} entries)")
    for entry in entries:
        if _should_ignore(entry.name, ignore_patterns):
            continue
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from walk_files(path, ignore_patterns)
        else:
            yield path


def build_catalog(
    root: Path,
    *,
    images_only: bool = False,
    ignore_patterns: tuple[str, ...] = (),
) -> Catalog:
    """Scan `root` and return a catalog of every file found.

    :param root: Library directory to index.
    :param images_only: Only index files accepted by `is_image`.
    :param ignore_patterns: File or directory names to skip entirely.
    :raises FileNotFoundError: if root does not exist.
    :raises NotADirectoryError: if root is not a directory.
    :raises OSError: on any failure while walking.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Library path does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Library path is not a directory: {root}")

    catalog = Catalog()
    for file_path in walk_files(root, ignore_patterns):
        if images_only and not is_image(file_path.name):
            continue

        rel_path = to_display_text(to_relative(file_path, root))
        record = ImageRecord(
            path=to_asset_url(rel_path),
            name=to_display_text(file_path.name),
        )
        catalog.add(record, category_of(rel_path))

    categories = catalog.categories()
    logger.info(
        f"Indexed {len(catalog)} files in {len(categories) - 1} categories from {root}"
    )
    return catalog


def scan_library(config: GalleryConfig) -> Catalog:
    """Build the catalog for the configured library."""
    return build_catalog(
        config.library_path,
        images_only=config.scanner.images_only,
        ignore_patterns=config.scanner.ignore_patterns,
    )
