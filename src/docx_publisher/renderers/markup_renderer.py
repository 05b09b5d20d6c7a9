"""Renderer built directly on the extractor's paragraph descriptors."""

from __future__ import annotations

from docx_publisher.ir.schema import (
    Fragment,
    ListItemFragment,
    ParagraphDescriptor,
    PlainFragment,
)
from docx_publisher.package import DocxPackage
from docx_publisher.renderers.base import BaseRenderer


def fragments_from_paragraphs(paragraphs: list[ParagraphDescriptor]) -> list[Fragment]:
    """List items keep their inline HTML bare; other paragraphs get a ``<p>``."""
    fragments: list[Fragment] = []
    for para in paragraphs:
        if para.is_list_item:
            fragments.append(
                ListItemFragment(
                    depth=para.depth,
                    style=para.list_style,
                    numbering_id=para.numbering_id,
                    html=para.rendered_fragment,
                )
            )
        else:
            fragments.append(PlainFragment(html=f"<p>{para.rendered_fragment}</p>"))
    return fragments


class MarkupRenderer(BaseRenderer):
    """Renders from the WordprocessingML markup read by the extractor."""

    @property
    def name(self) -> str:
        return "markup"

    def render(
        self,
        package: DocxPackage,
        paragraphs: list[ParagraphDescriptor],
    ) -> list[Fragment]:
        return fragments_from_paragraphs(paragraphs)
