"""Renderer factory — selects a renderer implementation based on config."""

from __future__ import annotations

from docx_publisher.config import Config
from docx_publisher.exceptions import ConfigError
from docx_publisher.renderers.base import BaseRenderer


def create_renderer(config: Config | None = None) -> BaseRenderer:
    """Create a renderer instance based on config.

    Args:
        config: Converter configuration. Uses default if None.

    Returns:
        A BaseRenderer implementation.

    Raises:
        ConfigError: If the configured engine is unknown.
    """
    config = config or Config.default()
    engine = config.renderer.engine.lower()

    if engine == "markup":
        from docx_publisher.renderers.markup_renderer import MarkupRenderer

        return MarkupRenderer(config)
    elif engine in ("python-docx", "python_docx"):
        from docx_publisher.renderers.python_docx_renderer import PythonDocxRenderer

        return PythonDocxRenderer(config)
    else:
        raise ConfigError(
            f"Unknown renderer engine: '{engine}'. Available: markup, python-docx"
        )
