"""Renderer using python-docx's document object model.

Walks ``Document.paragraphs`` (body-level paragraphs only) and reads run
formatting through python-docx's ``Run``/``Font`` properties rather than
raw markup. List metadata still comes from each paragraph's ``w:numPr``.
"""

from __future__ import annotations

import io
import logging

from docx import Document as open_docx
from docx.text.run import Run

from docx_publisher.exceptions import DocumentOpenError
from docx_publisher.extractor import paragraph_runs, read_num_pr
from docx_publisher.ir.schema import (
    Fragment,
    ListItemFragment,
    ParagraphDescriptor,
    PlainFragment,
    TextRun,
)
from docx_publisher.numbering import NumberingDefinitions
from docx_publisher.package import DocxPackage
from docx_publisher.renderers.base import BaseRenderer
from docx_publisher.renderers.inline import runs_to_html

logger = logging.getLogger(__name__)


def _text_runs(paragraph) -> list[TextRun]:
    runs: list[TextRun] = []
    # paragraph.runs skips runs nested in w:hyperlink, w:ins and w:smartTag
    for run in (Run(r, paragraph) for r in paragraph_runs(paragraph._p)):
        font = run.font
        fmt = dict(
            bold=bool(run.bold),
            italic=bool(run.italic),
            underline=bool(run.underline),
            strikethrough=bool(font.strike),
            superscript=bool(font.superscript),
            subscript=bool(font.subscript),
        )
        # python-docx reports w:br/w:cr as "\n" and w:tab as "\t"
        for i, piece in enumerate(run.text.split("\n")):
            if i:
                runs.append(TextRun(text="", line_break=True))
            if piece:
                runs.append(TextRun(text=piece.replace("\t", " "), **fmt))
    return runs


class PythonDocxRenderer(BaseRenderer):
    """Renders fragments from a python-docx ``Document``."""

    @property
    def name(self) -> str:
        return "python-docx"

    def render(
        self,
        package: DocxPackage,
        paragraphs: list[ParagraphDescriptor],
    ) -> list[Fragment]:
        try:
            doc = open_docx(io.BytesIO(package.raw))
        except Exception as exc:
            raise DocumentOpenError(f"python-docx failed to open document: {exc}") from exc
        numbering = NumberingDefinitions.from_xml(package.numbering_xml)

        fragments: list[Fragment] = []
        for paragraph in doc.paragraphs:
            is_list, depth, num_id = read_num_pr(paragraph._p)
            html = runs_to_html(_text_runs(paragraph))
            if is_list:
                fragments.append(
                    ListItemFragment(
                        depth=depth,
                        style=numbering.list_style(num_id, depth),
                        numbering_id=num_id,
                        html=html,
                    )
                )
            else:
                fragments.append(PlainFragment(html=f"<p>{html}</p>"))

        logger.debug("python-docx rendered %d fragments", len(fragments))
        return fragments
