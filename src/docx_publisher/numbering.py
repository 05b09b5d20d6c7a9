"""Numbering definitions from ``word/numbering.xml``.

Word stores list formatting indirectly: a paragraph references a ``w:num``
by id, which points at a ``w:abstractNum`` holding one ``w:lvl`` per nesting
level. A ``w:num`` may override individual levels with ``w:lvlOverride``.
Only the ``w:numFmt`` of each level matters here: it decides whether the
level renders as a bullet list or a numbered list.
"""

from __future__ import annotations

import logging
from typing import Optional

from docx.oxml.ns import qn
from lxml import etree

from docx_publisher.exceptions import MalformedDocument
from docx_publisher.ir.schema import ListStyle

logger = logging.getLogger(__name__)

_UNORDERED_FORMATS = frozenset({"bullet", "none"})


def parse_xml(data: bytes, part_name: str) -> etree._Element:
    """Parse an XML part, raising MalformedDocument on invalid markup."""
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedDocument(f"Cannot parse {part_name}: {exc}") from exc
    return root


def _level_formats(parent) -> dict[int, str]:
    formats: dict[int, str] = {}
    for lvl in parent.findall(qn("w:lvl")):
        try:
            level = int(lvl.get(qn("w:ilvl"), "0"))
        except ValueError:
            continue
        num_fmt = lvl.find(qn("w:numFmt"))
        if num_fmt is not None:
            formats[level] = num_fmt.get(qn("w:val"), "bullet")
    return formats


class NumberingDefinitions:
    """Lookup of ``numFmt`` by (numId, level)."""

    def __init__(self, formats: Optional[dict[str, dict[int, str]]] = None):
        self._formats = formats or {}

    def __len__(self) -> int:
        return len(self._formats)

    @classmethod
    def from_xml(cls, data: Optional[bytes]) -> NumberingDefinitions:
        """Build from the raw numbering part; an absent part yields no definitions."""
        if not data:
            return cls()
        return cls.from_element(parse_xml(data, "word/numbering.xml"))

    @classmethod
    def from_element(cls, root) -> NumberingDefinitions:
        """Build from a parsed ``w:numbering`` element."""
        abstract: dict[str, dict[int, str]] = {}
        for abstract_num in root.iter(qn("w:abstractNum")):
            abstract_id = abstract_num.get(qn("w:abstractNumId"))
            if abstract_id is not None:
                abstract[abstract_id] = _level_formats(abstract_num)

        formats: dict[str, dict[int, str]] = {}
        for num in root.iter(qn("w:num")):
            num_id = num.get(qn("w:numId"))
            ref = num.find(qn("w:abstractNumId"))
            if num_id is None or ref is None:
                continue
            levels = dict(abstract.get(ref.get(qn("w:val"), ""), {}))
            for override in num.findall(qn("w:lvlOverride")):
                levels.update(_level_formats(override))
            formats[num_id] = levels

        logger.debug("Loaded %d numbering definitions", len(formats))
        return cls(formats)

    def num_format(self, num_id: Optional[str], level: int) -> Optional[str]:
        """Return the ``numFmt`` for a level, or None when undefined."""
        if num_id is None:
            return None
        return self._formats.get(num_id, {}).get(level)

    def list_style(self, num_id: Optional[str], level: int) -> ListStyle:
        """Bullet unless the level is defined with a numbering format."""
        fmt = self.num_format(num_id, level)
        if fmt is None or fmt in _UNORDERED_FORMATS:
            return ListStyle.BULLET
        return ListStyle.NUMBERED
