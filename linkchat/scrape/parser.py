"""HTML to typed sections extraction (BeautifulSoup)."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from .models import ScrapedContent, Section, SectionType

logger = logging.getLogger(__name__)

# Each pass appends its matches in document order; passes run in this order.
_PASSES: tuple[tuple[SectionType, list[str]], ...] = (
    ("heading", ["h1", "h2", "h3"]),
    ("paragraph", ["p"]),
    ("list", ["ul", "ol"]),
)


def parse_html(url: str, html: str | None) -> ScrapedContent:
    """Convert raw HTML into a :class:`ScrapedContent`.

    Runs three independent passes over the parsed document (headings,
    paragraphs, lists). A list is emitted as a single section holding the
    whole list's text, not one section per item. ``title`` is the text of
    the first ``h1``, or ``""`` when there is none.

    Never raises for malformed markup: ``html.parser`` is permissive and a
    document with zero matching elements simply yields no sections.
    """
    if not html:
        return ScrapedContent.empty(url)

    soup = BeautifulSoup(html, "html.parser")

    sections: list[Section] = []
    for section_type, tags in _PASSES:
        for element in soup.find_all(tags):
            sections.append(
                Section(type=section_type, content=element.get_text().strip())
            )

    first_h1 = soup.find("h1")
    title = first_h1.get_text().strip() if first_h1 is not None else ""

    logger.debug(
        "html parsed",
        extra={"url": url, "section_count": len(sections), "title": title[:80]},
    )
    return ScrapedContent(url=url, title=title, sections=sections)
