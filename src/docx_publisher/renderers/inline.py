"""Inline HTML for a paragraph's text runs."""

from __future__ import annotations

import html
import re

from docx_publisher.ir.schema import TextRun

_WHITESPACE_RE = re.compile(r"[\n\t]+")

# Outermost first.
_WRAPPERS = (
    ("bold", "strong"),
    ("italic", "em"),
    ("underline", "u"),
    ("strikethrough", "s"),
    ("superscript", "sup"),
    ("subscript", "sub"),
)


def normalize_text(text: str) -> str:
    """Collapse newlines and tabs to single spaces."""
    return _WHITESPACE_RE.sub(" ", text)


def merge_runs(runs: list[TextRun]) -> list[TextRun]:
    """Join adjacent runs that carry identical formatting."""
    merged: list[TextRun] = []
    for run in runs:
        if not run.line_break and not run.text:
            continue
        if merged and merged[-1].same_format(run):
            merged[-1] = merged[-1].model_copy(
                update={"text": merged[-1].text + run.text}
            )
        else:
            merged.append(run)
    return merged


def runs_to_html(runs: list[TextRun]) -> str:
    """Render runs as inline HTML, trimming whitespace at both ends."""
    runs = merge_runs([
        run if run.line_break else run.model_copy(update={"text": normalize_text(run.text)})
        for run in runs
    ])
    while runs and runs[0].line_break:
        runs.pop(0)
    while runs and runs[-1].line_break:
        runs.pop()
    if not runs:
        return ""

    runs[0] = runs[0].model_copy(update={"text": runs[0].text.lstrip()})
    runs[-1] = runs[-1].model_copy(update={"text": runs[-1].text.rstrip()})

    parts = []
    for run in runs:
        if run.line_break:
            parts.append("<br />")
            continue
        if not run.text:
            continue
        piece = html.escape(run.text, quote=False)
        for attr, tag in reversed(_WRAPPERS):
            if getattr(run, attr):
                piece = f"<{tag}>{piece}</{tag}>"
        parts.append(piece)
    return "".join(parts)
