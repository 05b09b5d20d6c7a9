"""Shared fixtures."""

import pytest

from docx_builder import build_docx, para


@pytest.fixture
def list_docx():
    """A paragraph, a nested bullet list, a paragraph and a numbered list."""
    return build_docx(
        [
            para("Intro"),
            para("Apples", num_id=1, ilvl=0),
            para("Green", num_id=1, ilvl=1),
            para("Pears", num_id=1, ilvl=0),
            para("Between"),
            para("First", num_id=2, ilvl=0),
            para("Second", num_id=2, ilvl=0),
        ],
        numbering={"1": ["bullet", "bullet"], "2": ["decimal"]},
    )
