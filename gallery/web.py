"""FastAPI server for Gallery.

Exposes:
- GET /                 (home page, every category)
- GET /paginate         (JSON page of the "Assets" list)
- GET /assets/{path}    (raw files from the library root)
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic_core import PydanticSerializationError
import uvicorn

from .catalog import ALL_ASSETS, Catalog, PageNotFoundError
from .config import GalleryConfig
from .logging_config import get_logger
from .models import ImageRecordList

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_PAGE = 1
_INT_RE = re.compile(r"[+-]?[0-9]+")
MAX_QUERY_INT = 2**63 - 1

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def get_gallery_config(request: Request) -> GalleryConfig:
    return request.app.state.config


def first_query_value(request: Request, key: str) -> Optional[str]:
    """Return the first value of a repeated query key, or None."""
    values = request.query_params.getlist(key)
    return values[0] if values else None


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Parse a query value, falling back to `default` when absent, malformed or <= 0.

    Values that do not fit in a signed 64-bit integer count as malformed.
    """
    if value is None or not _INT_RE.fullmatch(value):
        return default
    number = int(value)
    if number > MAX_QUERY_INT:
        return default
    return number if number > 0 else default


@router.get("/", include_in_schema=False)
def home(
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    config: GalleryConfig = Depends(get_gallery_config),
):
    """Render every category with its files."""
    categories = catalog.categories()
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "title": config.library.name,
            "all_assets_key": ALL_ASSETS,
            "categories": categories,
            "total": len(categories[ALL_ASSETS]),
            "page_limit": config.pagination.default_limit,
        },
    )


@router.get("/paginate")
def paginate(
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    config: GalleryConfig = Depends(get_gallery_config),
) -> Response:
    """Return one page of the "Assets" list as a JSON array.

    Invalid or missing `page`/`limit` values fall back to their defaults.
    When a key is repeated, its first value wins.
    """
    page_number = parse_positive_int(first_query_value(request, "page"), DEFAULT_PAGE)
    limit_number = parse_positive_int(
        first_query_value(request, "limit"), config.pagination.default_limit
    )

    try:
        records = catalog.page(page_number, limit_number)
    except PageNotFoundError:
        return PlainTextResponse("Page not found", status_code=404)

    try:
        body = ImageRecordList.dump_json(records) + b"\n"
    except PydanticSerializationError as exc:
        logger.error(f"Failed to encode page {page_number} (limit {limit_number}): {exc}")
        return PlainTextResponse("Internal Server Error", status_code=500)

    return Response(content=body, media_type="application/json")


def create_app(catalog: Catalog, config: GalleryConfig) -> FastAPI:
    """Build the web app around an already populated catalog."""
    app = FastAPI(title="Gallery")
    app.state.catalog = catalog
    app.state.config = config

    app.include_router(router)
    app.mount(
        "/assets",
        StaticFiles(directory=str(config.library_path)),
        name="assets",
    )
    return app


def run_server(
    catalog: Catalog,
    config: GalleryConfig,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Run the FastAPI app with Uvicorn."""
    effective_host = host or config.server_host
    effective_port = port or config.server_port

    app = create_app(catalog, config)
    display_host = "localhost" if effective_host == "0.0.0.0" else effective_host
    logger.info(f"Gallery available at: http://{display_host}:{effective_port}/")

    uvicorn.run(
        app,
        host=effective_host,
        port=effective_port,
        log_level="info",
        log_config=None,
    )
