"""Abstract base class for fragment renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docx_publisher.config import Config
from docx_publisher.ir.schema import Fragment, ParagraphDescriptor
from docx_publisher.package import DocxPackage


class BaseRenderer(ABC):
    """Base class that all renderer implementations must extend.

    A renderer turns a document into the flat fragment stream consumed by the
    list rebuilder: one ``ListItemFragment`` per list paragraph, one
    ``PlainFragment`` per ordinary paragraph, in document order.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config.default()

    @abstractmethod
    def render(
        self,
        package: DocxPackage,
        paragraphs: list[ParagraphDescriptor],
    ) -> list[Fragment]:
        """Render a document to fragments.

        Args:
            package: The opened .docx container.
            paragraphs: Descriptors already extracted from ``package``.

        Returns:
            Fragments in document order.

        Raises:
            ConversionError: If the document cannot be rendered.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the renderer engine name (e.g. 'markup', 'python-docx')."""
