"""Data models for Gallery."""

from __future__ import annotations

from pydantic import BaseModel, TypeAdapter


class ImageRecord(BaseModel):
    """One discovered file: its web path under /assets/ and its base name."""

    model_config = {"frozen": True}

    path: str
    name: str


ImageRecordList = TypeAdapter(list[ImageRecord])
