"""Rich-text rendering for posting descriptions.

Descriptions arrive markdown-flavored. The catalog hands them to a
RichTextRenderer and displays whatever comes back; it does not validate or
escape the content itself.
"""

import re
from typing import Optional, Protocol

NO_DESCRIPTION = "No description available."


class RichTextRenderer(Protocol):
    """Anything that turns a description string into display form."""

    def render(self, text: str) -> str:
        ...


class PlainTextRenderer:
    """Render markdown-flavored text as plain terminal text.

    Handles:
    - Code fences and inline code (content kept)
    - Images and links (alt / link text kept)
    - Bold, italic, strikethrough markers
    - Headers (# Header -> Header)
    - Bullets (-, *, + -> •)
    - Runs of blank lines (collapsed to one)
    """

    def __init__(self, bullet: str = "•"):
        self.bullet = bullet

    def render(self, text: str) -> str:
        if not text:
            return ""

        # Fenced blocks first so their content is not treated as markup
        text = re.sub(r"```[^\n]*\n?([\s\S]*?)```", lambda m: m.group(1).rstrip("\n"), text)
        text = re.sub(r"`([^`]+)`", r"\1", text)

        text = re.sub(r"!\[([^\]]*)\]\([^)]+\)", r"\1", text)
        text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)

        text = re.sub(r"\*{3}([^*]+)\*{3}", r"\1", text)
        text = re.sub(r"_{3}([^_]+)_{3}", r"\1", text)
        text = re.sub(r"\*{2}([^*]+)\*{2}", r"\1", text)
        text = re.sub(r"_{2}([^_]+)_{2}", r"\1", text)

        # Bullets before italics, so "* item" is not read as emphasis
        text = re.sub(r"^(\s*)[-*+]\s+", rf"\1{self.bullet} ", text, flags=re.MULTILINE)

        text = re.sub(r"(?<!\w)\*([^*\n]+)\*(?!\w)", r"\1", text)
        text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"\1", text)
        text = re.sub(r"~~([^~]+)~~", r"\1", text)

        text = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
        text = re.sub(r"^\s*[-*_]{3,}\s*$", "", text, flags=re.MULTILINE)

        # Escaped markdown characters
        text = re.sub(r"\\([\\`*_{}\[\]()#+\-.!])", r"\1", text)

        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()


def render_description(description: Optional[str], renderer: RichTextRenderer) -> str:
    """Render a description, substituting the placeholder when it is missing."""
    return renderer.render(description or NO_DESCRIPTION)
