"""Pydantic models for paragraphs, fragments and post drafts.

A document flows through three shapes: ``ParagraphDescriptor`` (what the
extractor reads from the document markup), ``Fragment`` (the flat stream a
renderer hands to the list rebuilder) and ``PostDraft`` (the fields handed to
post creation).
"""

from __future__ import annotations

import html
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class ListStyle(str, Enum):
    BULLET = "bullet"
    NUMBERED = "numbered"

    @property
    def tag(self) -> str:
        """HTML list element for this style."""
        return "ul" if self is ListStyle.BULLET else "ol"

    @classmethod
    def from_marker(cls, value: Optional[str]) -> ListStyle:
        """Map a marker attribute value to a style; anything but bullet is numbered."""
        if value is None or value.strip().lower() == cls.BULLET.value:
            return cls.BULLET
        return cls.NUMBERED


# ---------------------------------------------------------------------------
# Inline formatting
# ---------------------------------------------------------------------------


class TextRun(BaseModel):
    """A span of text with optional inline formatting."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    superscript: bool = False
    subscript: bool = False
    line_break: bool = False  # renders as <br />, text is ignored

    def same_format(self, other: TextRun) -> bool:
        return (
            not self.line_break
            and not other.line_break
            and self.bold == other.bold
            and self.italic == other.italic
            and self.underline == other.underline
            and self.strikethrough == other.strikethrough
            and self.superscript == other.superscript
            and self.subscript == other.subscript
        )


# ---------------------------------------------------------------------------
# Extracted paragraphs
# ---------------------------------------------------------------------------


class ParagraphDescriptor(BaseModel):
    """One paragraph of the source document, in document order."""

    is_list_item: bool = False
    depth: int = Field(default=0, ge=0)
    list_style: ListStyle = ListStyle.BULLET
    numbering_id: Optional[str] = None
    text: str = ""
    rendered_fragment: str = ""
    runs: list[TextRun] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Fragment stream (discriminated union via `kind` field)
# ---------------------------------------------------------------------------


class ListItemFragment(BaseModel):
    kind: Literal["list_item"] = "list_item"
    depth: int = Field(default=0, ge=0)
    style: ListStyle = ListStyle.BULLET
    numbering_id: Optional[str] = None
    html: str = ""

    def to_marker_line(self) -> str:
        """Render as a single marker-annotated ``<li>`` line."""
        return (
            f'<li data-depth="{self.depth}" data-liststyle="{self.style.value}" '
            f'data-numid="{html.escape(self.numbering_id or "")}">{self.html}</li>'
        )


class PlainFragment(BaseModel):
    kind: Literal["plain"] = "plain"
    html: str = ""

    def to_marker_line(self) -> str:
        return self.html


Fragment = Annotated[
    Union[ListItemFragment, PlainFragment],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Post draft
# ---------------------------------------------------------------------------


class PostDraft(BaseModel):
    """Post fields produced from one converted document."""

    post_title: str
    post_content: str = ""
    post_thumbnail_url: str = ""
    current_day: str = ""

    def to_json(self, **kwargs) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(indent=2, **kwargs)
