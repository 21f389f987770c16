"""Data models for the scrape submodule."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

SectionType = Literal["heading", "paragraph", "list"]


class Section(BaseModel):
    """One extracted content unit."""

    type: SectionType
    content: str = ""


class ScrapedContent(BaseModel):
    """Structured text extracted from a single web page."""

    url: str
    title: str = ""
    sections: list[Section] = []
    cached_at: datetime | None = None

    @classmethod
    def empty(cls, url: str) -> ScrapedContent:
        """Degraded result used when every tier failed."""
        return cls(url=url)
