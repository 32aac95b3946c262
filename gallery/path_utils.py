"""Path utilities for converting filesystem paths into catalog keys and URLs.

Catalog paths and categories always use forward slashes, whatever the host
OS separator is, so they can be used directly in URLs.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

ASSET_PREFIX = "/assets/"


def to_relative(absolute_path: Path, library_root: Path) -> str:
    """Convert a path under the library root to a forward-slash relative string.

    Example:
        >>> to_relative(Path("/gallery/cats/fluffy.png"), Path("/gallery"))
        "cats/fluffy.png"

    Raises ValueError if the path is not under the library root.
    """
    return absolute_path.relative_to(library_root).as_posix()


def to_asset_url(relative_path: str) -> str:
    """Return the web path of a relative file path.

    Example:
        >>> to_asset_url("cats/fluffy.png")
        "/assets/cats/fluffy.png"
    """
    return ASSET_PREFIX + relative_path


def category_of(relative_path: str) -> str:
    """Return the cleaned directory portion of a relative path.

    Files directly under the root belong to ".".

    Example:
        >>> category_of("cats/fluffy.png")
        "cats"
        >>> category_of("fluffy.png")
        "."
    """
    return posixpath.normpath(posixpath.dirname(relative_path))


def to_display_text(text: str) -> str:
    """Replace undecodable filename bytes with U+FFFD.

    Names that are not valid UTF-8 reach Python as lone surrogates, which
    cannot be encoded into JSON or HTML responses.

    Example:
        >>> to_display_text(os.fsdecode(b"bad\\xff.png"))
        "bad�.png"
    """
    return os.fsencode(text).decode("utf-8", "replace")
