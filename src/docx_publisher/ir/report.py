"""Conversion report — diagnostics and statistics from a conversion run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field


@dataclass
class ConversionReport:
    """Summary of a .docx-to-HTML conversion run."""

    # Source info
    source_file: str = ""
    renderer: str = ""

    # Timing
    extract_time_seconds: float = 0.0
    render_time_seconds: float = 0.0
    rebuild_time_seconds: float = 0.0
    total_time_seconds: float = 0.0

    # Paragraph counts
    paragraph_count: int = 0
    list_item_count: int = 0
    plain_count: int = 0
    max_depth: int = 0
    numbering_ids: list[str] = field(default_factory=list)

    # Rebuild results
    lists_opened: int = 0
    items_emitted: int = 0
    items_skipped: int = 0

    # Warnings collected during conversion
    warnings: list[str] = field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self._to_dict(), indent=indent, ensure_ascii=False)

    def _to_dict(self) -> dict:
        """Convert to a plain dict for JSON serialization."""
        return {
            "source_file": self.source_file,
            "renderer": self.renderer,
            "timing": {
                "extract_seconds": round(self.extract_time_seconds, 3),
                "render_seconds": round(self.render_time_seconds, 3),
                "rebuild_seconds": round(self.rebuild_time_seconds, 3),
                "total_seconds": round(self.total_time_seconds, 3),
            },
            "paragraph_counts": {
                "paragraphs": self.paragraph_count,
                "list_items": self.list_item_count,
                "plain": self.plain_count,
            },
            "lists": {
                "sequences": len(self.numbering_ids),
                "max_depth": self.max_depth,
                "opened": self.lists_opened,
                "items_emitted": self.items_emitted,
                "items_skipped": self.items_skipped,
            },
            "warnings": self.warnings,
        }

    @classmethod
    def from_paragraphs(cls, paragraphs: list, source_file: str = "") -> ConversionReport:
        """Build a report by walking extracted paragraph descriptors."""
        report = cls(source_file=source_file, paragraph_count=len(paragraphs))
        for para in paragraphs:
            if not para.is_list_item:
                report.plain_count += 1
                continue
            report.list_item_count += 1
            report.max_depth = max(report.max_depth, para.depth)
            if para.numbering_id is not None and para.numbering_id not in report.numbering_ids:
                report.numbering_ids.append(para.numbering_id)
        return report
