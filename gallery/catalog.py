"""In-memory catalog of discovered files, grouped by category.

The catalog is filled once by the scanner before the web app starts and is
read-only afterwards. Reads still go through a single lock so that every
request sees a consistent snapshot.
"""

from __future__ import annotations

import threading
from typing import Optional

from .models import ImageRecord

ALL_ASSETS = "Assets"


class PageNotFoundError(LookupError):
    """Raised when a page starts past the end of the asset list."""

    def __init__(self, page: int, limit: int, total: int):
        super().__init__(f"Page {page} (limit {limit}) is out of range for {total} assets")
        self.page = page
        self.limit = limit
        self.total = total


class Catalog:
    """Category name -> ordered records, plus the "Assets" list of everything."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._categories: dict[str, list[ImageRecord]] = {ALL_ASSETS: []}

    def add(self, record: ImageRecord, category: str) -> None:
        """Append a record to "Assets" and to its category.

        Only the scanner calls this, before the catalog is shared.
        """
        with self._lock:
            self._categories[ALL_ASSETS].append(record)
            self._categories.setdefault(category, []).append(record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._categories[ALL_ASSETS])

    def all_assets(self) -> list[ImageRecord]:
        with self._lock:
            return list(self._categories[ALL_ASSETS])

    def category(self, name: str) -> Optional[list[ImageRecord]]:
        with self._lock:
            records = self._categories.get(name)
            return list(records) if records is not None else None

    def categories(self) -> dict[str, list[ImageRecord]]:
        """Snapshot of every list, "Assets" first, then in first-seen order."""
        with self._lock:
            return {name: list(records) for name, records in self._categories.items()}

    def page(self, page: int, limit: int) -> list[ImageRecord]:
        """Return the `page`-th slice of `limit` records from "Assets".

        Pages are 1-based. Raises PageNotFoundError when the page starts at
        or past the end of the list, including when the catalog is empty.
        """
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be positive, got page={page} limit={limit}")

        with self._lock:
            assets = self._categories[ALL_ASSETS]
            total = len(assets)
            start = (page - 1) * limit
            if start >= total:
                raise PageNotFoundError(page, limit, total)
            end = min(start + limit, total)
            return assets[start:end]
