"""Tests for the paragraph, fragment and post models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from docx_publisher.ir.schema import (
    Fragment,
    ListItemFragment,
    ListStyle,
    ParagraphDescriptor,
    PlainFragment,
    PostDraft,
    TextRun,
)


class TestListStyle:
    def test_tags(self):
        assert ListStyle.BULLET.tag == "ul"
        assert ListStyle.NUMBERED.tag == "ol"

    @pytest.mark.parametrize("value, expected", [
        ("bullet", ListStyle.BULLET),
        (" Bullet ", ListStyle.BULLET),
        (None, ListStyle.BULLET),
        ("decimal", ListStyle.NUMBERED),
        ("numbered", ListStyle.NUMBERED),
        ("", ListStyle.NUMBERED),
    ])
    def test_from_marker(self, value, expected):
        assert ListStyle.from_marker(value) is expected


class TestTextRun:
    def test_same_format(self):
        assert TextRun(text="a", bold=True).same_format(TextRun(text="b", bold=True))
        assert not TextRun(text="a", bold=True).same_format(TextRun(text="b"))

    def test_line_breaks_never_merge(self):
        br = TextRun(text="", line_break=True)
        assert not br.same_format(TextRun(text="a"))
        assert not TextRun(text="a").same_format(br)


class TestParagraphDescriptor:
    def test_defaults(self):
        para = ParagraphDescriptor()
        assert para.is_list_item is False
        assert para.depth == 0
        assert para.list_style is ListStyle.BULLET
        assert para.numbering_id is None
        assert para.runs == []

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            ParagraphDescriptor(depth=-1)


class TestFragments:
    def test_marker_line(self):
        item = ListItemFragment(depth=2, style=ListStyle.NUMBERED, numbering_id="5", html="<b>x</b>")
        assert item.to_marker_line() == (
            '<li data-depth="2" data-liststyle="numbered" data-numid="5"><b>x</b></li>'
        )

    def test_marker_line_without_numbering_id(self):
        assert 'data-numid=""' in ListItemFragment(html="x").to_marker_line()

    def test_plain_marker_line_is_html(self):
        assert PlainFragment(html="<p>x</p>").to_marker_line() == "<p>x</p>"

    def test_discriminated_union(self):
        adapter = TypeAdapter(list[Fragment])
        fragments = adapter.validate_python([
            {"kind": "plain", "html": "<p>a</p>"},
            {"kind": "list_item", "depth": 1, "style": "numbered", "numbering_id": "3", "html": "b"},
        ])
        assert isinstance(fragments[0], PlainFragment)
        assert isinstance(fragments[1], ListItemFragment)
        assert fragments[1].style is ListStyle.NUMBERED

    def test_json_roundtrip(self):
        adapter = TypeAdapter(list[Fragment])
        original = [PlainFragment(html="<p>a</p>"), ListItemFragment(numbering_id="1", html="b")]
        assert adapter.validate_json(adapter.dump_json(original)) == original

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Fragment).validate_python({"kind": "table", "html": ""})


class TestPostDraft:
    def test_defaults(self):
        post = PostDraft(post_title="T")
        assert post.post_content == ""
        assert post.post_thumbnail_url == ""
        assert post.current_day == ""

    def test_to_json(self):
        assert '"post_title": "T"' in PostDraft(post_title="T").to_json()
