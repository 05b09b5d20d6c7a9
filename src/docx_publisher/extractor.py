"""Structural extractor: WordprocessingML paragraphs → ParagraphDescriptors.

Reads ``word/document.xml`` directly with lxml. Each ``w:p`` becomes one
descriptor carrying its list metadata (``w:numPr``: level and numbering
definition), its plain text and its inline HTML.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from docx.oxml.ns import qn

from docx_publisher.ir.schema import ListStyle, ParagraphDescriptor, TextRun
from docx_publisher.numbering import NumberingDefinitions, parse_xml
from docx_publisher.renderers.inline import runs_to_html

logger = logging.getLogger(__name__)

# numId 0 means "numbering removed" in Word
_NO_NUMBERING = "0"

_FALSE_VALUES = frozenset({"0", "false", "off", "none"})


def extract_paragraphs(
    document_xml: Union[bytes, object],
    numbering: Optional[NumberingDefinitions] = None,
) -> list[ParagraphDescriptor]:
    """Extract one descriptor per paragraph, in document order.

    Args:
        document_xml: Raw ``word/document.xml`` bytes, or an already parsed
            root element.
        numbering: Numbering definitions used to tell bullet lists from
            numbered ones. Every list is a bullet list when omitted.

    Returns:
        The full list of descriptors. Parsing completes before anything is
        returned, so callers never see a partial result.

    Raises:
        MalformedDocument: If the markup is not well-formed XML.
    """
    if isinstance(document_xml, (bytes, bytearray)):
        root = parse_xml(bytes(document_xml), "word/document.xml")
    else:
        root = document_xml
    numbering = numbering or NumberingDefinitions()

    paragraphs = [_describe(p, numbering) for p in root.iter(qn("w:p"))]
    logger.debug(
        "Extracted %d paragraphs (%d list items)",
        len(paragraphs),
        sum(1 for p in paragraphs if p.is_list_item),
    )
    return paragraphs


def read_num_pr(p) -> tuple[bool, int, Optional[str]]:
    """Return ``(is_list_item, depth, numbering_id)`` for a ``w:p`` element."""
    num_pr = p.find(f"{qn('w:pPr')}/{qn('w:numPr')}")
    if num_pr is None:
        return False, 0, None

    num_id_el = num_pr.find(qn("w:numId"))
    num_id = num_id_el.get(qn("w:val")) if num_id_el is not None else None
    if num_id == _NO_NUMBERING:
        return False, 0, None

    ilvl_el = num_pr.find(qn("w:ilvl"))
    return True, parse_depth(ilvl_el.get(qn("w:val")) if ilvl_el is not None else None), num_id


def parse_depth(value: Optional[str]) -> int:
    """Parse a nesting level; missing, unparsable or negative values give 0."""
    try:
        depth = int(value) if value is not None else 0
    except ValueError:
        return 0
    return max(depth, 0)


def paragraph_runs(p) -> list:
    """All ``w:r`` elements of a paragraph, including those wrapped in
    hyperlinks, insertions or smart tags.

    Runs belonging to a nested paragraph (text box content) are left out;
    that paragraph is extracted on its own.
    """
    return [r for r in p.iter(qn("w:r")) if next(r.iterancestors(qn("w:p")), None) is p]


def _describe(p, numbering: NumberingDefinitions) -> ParagraphDescriptor:
    is_list, depth, num_id = read_num_pr(p)
    runs = _read_runs(p)
    text = "".join(" " if run.line_break else run.text for run in runs)
    return ParagraphDescriptor(
        is_list_item=is_list,
        depth=depth,
        list_style=numbering.list_style(num_id, depth) if is_list else ListStyle.BULLET,
        numbering_id=num_id,
        text=" ".join(text.split()),
        rendered_fragment=runs_to_html(runs),
        runs=runs,
    )


def _is_on(rpr, tag: str) -> bool:
    if rpr is None:
        return False
    el = rpr.find(qn(tag))
    if el is None:
        return False
    return el.get(qn("w:val"), "true").lower() not in _FALSE_VALUES


def _read_runs(p) -> list[TextRun]:
    runs: list[TextRun] = []
    for r in paragraph_runs(p):
        rpr = r.find(qn("w:rPr"))
        vert = rpr.find(qn("w:vertAlign")) if rpr is not None else None
        vert_val = vert.get(qn("w:val")) if vert is not None else None
        fmt = dict(
            bold=_is_on(rpr, "w:b"),
            italic=_is_on(rpr, "w:i"),
            underline=_is_on(rpr, "w:u"),
            strikethrough=_is_on(rpr, "w:strike"),
            superscript=vert_val == "superscript",
            subscript=vert_val == "subscript",
        )
        for child in r:
            if child.tag == qn("w:t"):
                runs.append(TextRun(text=child.text or "", **fmt))
            elif child.tag == qn("w:tab"):
                runs.append(TextRun(text=" ", **fmt))
            elif child.tag in (qn("w:br"), qn("w:cr")):
                runs.append(TextRun(text="", line_break=True))
    return runs
