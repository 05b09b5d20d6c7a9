"""List rebuilder: flat fragment stream → nested ``<ul>``/``<ol>`` HTML.

Renderers flatten every list paragraph into a self-contained ``<li>`` that
carries its nesting depth, its list style and the id of the numbering
definition it belongs to. The rebuilder walks that stream once with a stack
of open lists:

* a change of numbering id closes every open list, so two adjacent lists
  from different definitions never merge;
* the stack is then grown or shrunk until its height is ``depth + 1``,
  opening each new level with the current item's own style;
* a plain fragment closes everything.

Nested lists are placed inside the parent's open ``<li>``::

    <ul><li>A<ul><li>A1</li></ul></li><li>B</li></ul>
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html import unescape
from typing import Callable, Iterable, Optional, Union

from docx_publisher.config import ConverterConfig
from docx_publisher.extractor import parse_depth
from docx_publisher.ir.schema import (
    Fragment,
    ListItemFragment,
    ListStyle,
    PlainFragment,
)

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]

_MARKER_LINE_RE = re.compile(
    r'^\s*<li\s+data-depth="([^"]*)"\s+data-liststyle="([^"]*)"\s+data-numid="([^"]*)"\s*>'
    r"(.*?)(?:</li>)?\s*$",
    re.IGNORECASE | re.DOTALL,
)
_LEADING_TAGS_RE = re.compile(r"^((?:\s*<[^/!][^>]*>)*)")
_TAG_RE = re.compile(r"<[^>]+>")
_EMPTY_PARAGRAPH_RE = re.compile(
    r"^\s*<p(?:\s[^>]*)?>(?:\s|&nbsp;|&#160;|<br\s*/?>)*</p>\s*$", re.IGNORECASE
)
_KEEP_EMPTY_ITEM_RE = re.compile(r"<img\b", re.IGNORECASE)


def parse_fragment_line(line: str) -> Fragment:
    """Classify one line of renderer output.

    Lines carrying the ``data-depth``/``data-liststyle``/``data-numid``
    markers become list items; every other line is passed through as plain.
    """
    match = _MARKER_LINE_RE.match(line)
    if match is None:
        return PlainFragment(html=line)
    depth, style, num_id, inner = match.groups()
    return ListItemFragment(
        depth=parse_depth(depth),
        style=ListStyle.from_marker(style),
        numbering_id=unescape(num_id) or None,
        html=inner,
    )


def clean_item_content(content: str, glyphs: Iterable[str]) -> str:
    """Strip leading bullet glyphs and surrounding whitespace from an item.

    Glyphs are removed even when the content opens with inline tags, e.g.
    ``<strong>• Bold</strong>`` becomes ``<strong>Bold</strong>``.
    """
    content = content.strip()
    glyph_class = "".join(re.escape(g) for g in glyphs)
    if not glyph_class:
        return content
    prefix = _LEADING_TAGS_RE.match(content).group(1)
    rest = re.sub(rf"^[\s{glyph_class}]+", "", content[len(prefix):])
    return (prefix.strip() + rest).strip()


@dataclass
class _ListFrame:
    tag: str
    item_open: bool = False


@dataclass
class ListRebuilder:
    """Stateful stack machine for one rebuild pass.

    Create one per stream; ``feed`` every fragment, then ``finish``.
    """

    config: ConverterConfig = field(default_factory=ConverterConfig)
    sink: Optional[DiagnosticSink] = None

    items_emitted: int = field(default=0, init=False)
    items_skipped: int = field(default=0, init=False)
    lists_opened: int = field(default=0, init=False)
    warnings: list[str] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self._stack: list[_ListFrame] = []
        self._active_numbering_id: Optional[str] = None
        self._blocks: list[str] = []
        self._current: list[str] = []
        self._artifacts = {a.strip() for a in self.config.marker_artifacts}

    @property
    def depth(self) -> int:
        """Number of currently open list elements."""
        return len(self._stack)

    def feed(self, fragment: Union[Fragment, str]) -> None:
        if isinstance(fragment, str):
            fragment = parse_fragment_line(fragment)
        if isinstance(fragment, ListItemFragment):
            self._list_item(fragment)
        else:
            self._plain(fragment)

    def finish(self, separator: str = "") -> str:
        """Close every open list and return the rebuilt HTML."""
        self._close_all()
        self._active_numbering_id = None
        return separator.join(self._blocks)

    # -- fragment handlers ---------------------------------------------------

    def _list_item(self, item: ListItemFragment) -> None:
        content = clean_item_content(item.html, self.config.bullet_glyphs)
        if self._is_empty(content):
            self.items_skipped += 1
            logger.debug("Dropping empty list item %r", item.html)
            return

        if self._stack and (
            item.numbering_id is None or item.numbering_id != self._active_numbering_id
        ):
            self._close_all()

        target = item.depth + 1
        tag = item.style.tag
        # a skipped item must leave the stack as it found it
        if len(self._stack) >= target and self._stack[target - 1].tag != tag:
            self._warn(
                f"Skipping {item.style.value} item at depth {item.depth} inside "
                f"<{self._stack[target - 1].tag}> of numbering {item.numbering_id!r}: {content!r}"
            )
            self.items_skipped += 1
            return

        while len(self._stack) > target:
            self._close_top()
        while len(self._stack) < target:
            self._open(tag)

        top = self._stack[-1]
        if top.item_open:
            self._current.append("</li>")
        self._current.append(f"<li>{content}")
        top.item_open = True
        self.items_emitted += 1
        self._active_numbering_id = item.numbering_id

    def _plain(self, fragment: PlainFragment) -> None:
        self._close_all()
        self._active_numbering_id = None
        if self.config.drop_empty_paragraphs and _EMPTY_PARAGRAPH_RE.match(fragment.html):
            logger.debug("Dropping empty paragraph %r", fragment.html)
            return
        self._blocks.append(fragment.html)

    # -- stack operations ----------------------------------------------------

    def _open(self, tag: str) -> None:
        if self._stack and not self._stack[-1].item_open:
            # depth jump: the new list needs an item to live in
            self._current.append("<li>")
            self._stack[-1].item_open = True
        self._current.append(f"<{tag}>")
        self._stack.append(_ListFrame(tag))
        self.lists_opened += 1

    def _close_top(self) -> None:
        frame = self._stack.pop()
        if frame.item_open:
            self._current.append("</li>")
        self._current.append(f"</{frame.tag}>")
        if not self._stack:
            self._blocks.append("".join(self._current))
            self._current = []

    def _close_all(self) -> None:
        while self._stack:
            self._close_top()

    def _is_empty(self, content: str) -> bool:
        if _KEEP_EMPTY_ITEM_RE.search(content):
            return False
        text = _TAG_RE.sub("", content).replace("&nbsp;", " ").strip()
        return not text or text in self._artifacts

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        (self.sink or logger.warning)(message)


def rebuild_lists(
    fragments: Iterable[Union[Fragment, str]],
    config: Optional[ConverterConfig] = None,
    sink: Optional[DiagnosticSink] = None,
    separator: str = "",
) -> str:
    """Rebuild nested list markup from a flat fragment stream.

    Args:
        fragments: ``ListItemFragment``/``PlainFragment`` objects, or raw
            marker lines which are classified with ``parse_fragment_line``.
        config: Glyph, artifact and empty-paragraph settings.
        sink: Receives diagnostics (mixed list styles). Defaults to the
            module logger.
        separator: Joins top-level blocks (whole lists and plain fragments).

    Returns:
        HTML in which every opened list is closed.
    """
    rebuilder = ListRebuilder(config=config or ConverterConfig(), sink=sink)
    for fragment in fragments:
        rebuilder.feed(fragment)
    return rebuilder.finish(separator)


def rebuild_list_html(
    html: str,
    config: Optional[ConverterConfig] = None,
    sink: Optional[DiagnosticSink] = None,
) -> str:
    """Rebuild lists in a marker-annotated HTML document, one fragment per line."""
    if not html:
        return ""
    lines = [line for line in html.splitlines() if line.strip()]
    return rebuild_lists(lines, config=config, sink=sink, separator="\n")
