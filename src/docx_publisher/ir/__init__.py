"""Paragraph, fragment and post models."""

from docx_publisher.ir.report import ConversionReport
from docx_publisher.ir.schema import (
    Fragment,
    ListItemFragment,
    ListStyle,
    ParagraphDescriptor,
    PlainFragment,
    PostDraft,
    TextRun,
)

__all__ = [
    "ConversionReport",
    "Fragment",
    "ListItemFragment",
    "ListStyle",
    "ParagraphDescriptor",
    "PlainFragment",
    "PostDraft",
    "TextRun",
]
