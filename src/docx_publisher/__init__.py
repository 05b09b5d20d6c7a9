"""Convert .docx documents to post-ready HTML with correctly nested lists."""

from docx_publisher.extractor import extract_paragraphs
from docx_publisher.pipeline import ConversionResult, Pipeline, convert
from docx_publisher.rebuilder import rebuild_list_html, rebuild_lists

__version__ = "0.1.0"

__all__ = [
    "ConversionResult",
    "Pipeline",
    "convert",
    "extract_paragraphs",
    "rebuild_list_html",
    "rebuild_lists",
]
