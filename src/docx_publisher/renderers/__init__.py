"""Fragment renderer implementations."""

from docx_publisher.renderers.base import BaseRenderer
from docx_publisher.renderers.factory import create_renderer

__all__ = ["BaseRenderer", "create_renderer"]
