"""Config management for Gallery.

Reads `config.ini` from DATA_DIR (defaults to the project root beside main.py).
Every setting has a built-in default, so a missing config file is not an error.
"""

from __future__ import annotations

import configparser
import dataclasses
import os
import pathlib
from typing import Optional

from .logging_config import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]

# DATA_DIR holds config.ini and gallery.log.
DATA_DIR = pathlib.Path(os.environ.get("DATA_DIR", str(PROJECT_ROOT)))
DEFAULT_CONFIG_PATH = DATA_DIR / "config.ini"

DEFAULT_LIBRARY_PATH = "./assets"
DEFAULT_LIBRARY_NAME = "Image Gallery"
DEFAULT_PAGE_LIMIT = 20


@dataclasses.dataclass
class LibraryConfig:
    path: pathlib.Path = pathlib.Path(DEFAULT_LIBRARY_PATH)
    name: str = DEFAULT_LIBRARY_NAME


@dataclasses.dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclasses.dataclass
class ScannerConfig:
    """Walk options. Defaults index every file under the library root."""

    images_only: bool = False
    ignore_patterns: tuple[str, ...] = ()


@dataclasses.dataclass
class PaginationConfig:
    default_limit: int = DEFAULT_PAGE_LIMIT


@dataclasses.dataclass
class GalleryConfig:
    library: LibraryConfig = dataclasses.field(default_factory=LibraryConfig)
    server: ServerConfig = dataclasses.field(default_factory=ServerConfig)
    scanner: ScannerConfig = dataclasses.field(default_factory=ScannerConfig)
    pagination: PaginationConfig = dataclasses.field(default_factory=PaginationConfig)

    @property
    def library_path(self) -> pathlib.Path:
        return self.library.path

    @property
    def server_host(self) -> str:
        return self.server.host

    @property
    def server_port(self) -> int:
        return self.server.port


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_list(value: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in value.split(",") if p.strip())


def load_config(config_path: Optional[pathlib.Path] = None) -> GalleryConfig:
    """Load configuration from config.ini.

    Defaults to `config.ini` in DATA_DIR. Returns the built-in defaults
    when the file does not exist.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return GalleryConfig()

    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")

    library = LibraryConfig(
        path=pathlib.Path(
            parser.get("library", "path", fallback=DEFAULT_LIBRARY_PATH)
        ).expanduser(),
        name=parser.get("library", "name", fallback=DEFAULT_LIBRARY_NAME),
    )

    server = ServerConfig(
        host=parser.get("server", "host", fallback="0.0.0.0"),
        port=parser.getint("server", "port", fallback=8080),
    )

    scanner = ScannerConfig(
        images_only=_parse_bool(
            parser.get("scanner", "images_only", fallback=None), False
        ),
        ignore_patterns=_parse_list(
            parser.get("scanner", "ignore_patterns", fallback="")
        ),
    )

    default_limit = parser.getint(
        "pagination", "default_limit", fallback=DEFAULT_PAGE_LIMIT
    )
    if default_limit <= 0:
        logger.warning(
            f"Ignoring pagination.default_limit={default_limit}, "
            f"using {DEFAULT_PAGE_LIMIT}"
        )
        default_limit = DEFAULT_PAGE_LIMIT

    return GalleryConfig(
        library=library,
        server=server,
        scanner=scanner,
        pagination=PaginationConfig(default_limit=default_limit),
    )


def write_config(config: GalleryConfig, config_path: Optional[pathlib.Path] = None) -> pathlib.Path:
    """Persist `config` as an INI file and return its path."""
    path = config_path or DEFAULT_CONFIG_PATH

    parser = configparser.ConfigParser()
    parser["library"] = {
        "path": str(config.library.path.expanduser()),
        "name": config.library.name,
    }
    parser["server"] = {
        "host": config.server.host,
        "port": str(config.server.port),
    }
    parser["scanner"] = {
        "images_only": "true" if config.scanner.images_only else "false",
        "ignore_patterns": ",".join(config.scanner.ignore_patterns),
    }
    parser["pagination"] = {
        "default_limit": str(config.pagination.default_limit),
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        parser.write(handle)
    return path
