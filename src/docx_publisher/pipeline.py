"""Pipeline orchestrator: open → extract → render → rebuild lists.

``convert`` never hands back partial HTML: any conversion failure is sent to
the diagnostic sink and yields an empty ``html`` with the typed error
attached to the result.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from docx_publisher.config import Config
from docx_publisher.exceptions import ConversionError, DocumentOpenError
from docx_publisher.extractor import extract_paragraphs
from docx_publisher.ir.report import ConversionReport
from docx_publisher.ir.schema import ParagraphDescriptor, PostDraft
from docx_publisher.numbering import NumberingDefinitions
from docx_publisher.package import DocxPackage
from docx_publisher.rebuilder import DiagnosticSink, ListRebuilder
from docx_publisher.renderers.factory import create_renderer

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """HTML from one conversion, or the error that prevented it."""

    html: str = ""
    error: Optional[ConversionError] = None
    report: ConversionReport = field(default_factory=ConversionReport)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the HTML, raising the conversion error if there was one."""
        if self.error is not None:
            raise self.error
        return self.html


class Pipeline:
    """Orchestrates .docx → fragments → list-corrected HTML."""

    def __init__(self, config: Config | None = None, sink: DiagnosticSink | None = None):
        self.config = config or Config.default()
        self.sink = sink or logger.warning
        self.last_report: ConversionReport | None = None

    def convert(self, data: bytes, source_file: str = "") -> ConversionResult:
        """Convert an in-memory .docx document to HTML.

        Args:
            data: The .docx file contents.
            source_file: Name recorded in the report.

        Returns:
            A ConversionResult. On failure ``html`` is empty and ``error``
            holds a DocumentOpenError or MalformedDocument.
        """
        if not data:
            logger.info("Empty input, nothing to convert")
            result = ConversionResult(report=ConversionReport(source_file=source_file))
            self.last_report = result.report
            return result

        try:
            result = self._convert(data, source_file)
        except ConversionError as exc:
            self.sink(f"Conversion failed for {source_file or 'document'}: {exc}")
            result = ConversionResult(
                error=exc, report=ConversionReport(source_file=source_file)
            )
        self.last_report = result.report
        return result

    def _convert(self, data: bytes, source_file: str) -> ConversionResult:
        t0 = time.monotonic()
        package = DocxPackage.open(data)
        paragraphs = self._extract(package)
        t1 = time.monotonic()

        renderer = create_renderer(self.config)
        fragments = renderer.render(package, paragraphs)
        t2 = time.monotonic()

        rebuilder = ListRebuilder(config=self.config.converter, sink=self.sink)
        for fragment in fragments:
            rebuilder.feed(fragment)
        html = rebuilder.finish()
        t3 = time.monotonic()

        report = ConversionReport.from_paragraphs(paragraphs, source_file=source_file)
        report.renderer = renderer.name
        report.lists_opened = rebuilder.lists_opened
        report.items_emitted = rebuilder.items_emitted
        report.items_skipped = rebuilder.items_skipped
        report.warnings.extend(rebuilder.warnings)
        report.extract_time_seconds = t1 - t0
        report.render_time_seconds = t2 - t1
        report.rebuild_time_seconds = t3 - t2
        report.total_time_seconds = t3 - t0

        logger.info(
            "Converted %s: %d paragraphs, %d list items, %d lists",
            source_file or "document",
            report.paragraph_count,
            report.list_item_count,
            report.lists_opened,
        )
        return ConversionResult(html=html, report=report)

    @staticmethod
    def _extract(package: DocxPackage) -> list[ParagraphDescriptor]:
        numbering = NumberingDefinitions.from_xml(package.numbering_xml)
        return extract_paragraphs(package.document_xml, numbering)

    def convert_file(self, path: Path) -> ConversionResult:
        """Read a .docx file from disk and convert it."""
        path = Path(path)
        logger.info("Converting %s", path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            error = DocumentOpenError(f"Cannot read {path}: {exc}")
            self.sink(str(error))
            return ConversionResult(error=error, report=ConversionReport(source_file=str(path)))
        return self.convert(data, source_file=str(path))

    def extract(self, data: bytes) -> list[ParagraphDescriptor]:
        """Open a document and return its paragraph descriptors.

        Raises:
            DocumentOpenError: If the container cannot be opened.
            MalformedDocument: If its XML cannot be parsed.
        """
        return self._extract(DocxPackage.open(data))

    def inspect(self, data: bytes) -> str:
        """Return the paragraph descriptors as a formatted JSON string."""
        paragraphs = self.extract(data)
        return json.dumps(
            [p.model_dump(mode="json", exclude={"runs"}) for p in paragraphs],
            indent=2,
            ensure_ascii=False,
        )

    def to_post(self, result: ConversionResult, now: datetime | None = None) -> PostDraft:
        """Map a conversion result onto post fields."""
        now = now or datetime.now()
        return PostDraft(
            post_title=f"{self.config.post.title_prefix} {now:%Y-%m-%d %H:%M:%S}",
            post_content=result.html,
            current_day=f"{now:%Y-%m-%d}",
        )


def convert(
    document_bytes: bytes,
    config: Config | None = None,
    sink: DiagnosticSink | None = None,
) -> ConversionResult:
    """Convert a .docx document to HTML with correctly nested lists."""
    return Pipeline(config, sink).convert(document_bytes)
