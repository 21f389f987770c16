"""Prompt templates for the chat pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkchat.scrape.models import ScrapedContent

SYSTEM_PROMPT = """\
You are an assistant that analyses and summarizes web articles the user links to.

Response structure:
- Give a clear, academic-style summary with the key details of each article
- State the article title, author (if available) and publication
- Explain the main thesis, then give a short critical analysis
- Note relevant context and any limitations or bias in the source

Formatting:
- Use markdown; the answer is rendered as markdown
- Use bold for article titles and publications, italics for book, game or article titles
- End with a "References" section of markdown links; at least one reference must be the link the user provided

Special instructions:
- If no article content is available for a link, say so clearly
- If several URLs are given, analyse each one separately
- If a page could not be read, fall back on the existing conversation context
- Keep an objective, analytical tone and prefer concise facts over speculation
"""

QUESTION_TEMPLATE = "Question: {message}\n\nScraped Context:\n{context}"

BLOCK_HEADER_TEMPLATE = "Content from {url}:\nTitle: {title}\n"


def format_content_block(content: ScrapedContent) -> str:
    """Render one page as a header followed by ``TYPE: text`` lines."""
    lines = [f"{section.type.upper()}: {section.content}" for section in content.sections]
    return BLOCK_HEADER_TEMPLATE.format(url=content.url, title=content.title) + "\n".join(lines)


def format_question_prompt(message: str, scraped: list[ScrapedContent]) -> str:
    return QUESTION_TEMPLATE.format(
        message=message,
        context="\n\n".join(format_content_block(c) for c in scraped),
    )
