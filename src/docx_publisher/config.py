"""YAML-backed configuration for docx-publisher."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from docx_publisher.exceptions import ConfigError


@dataclass
class ConverterConfig:
    """List rebuilding and clean-up settings."""

    bullet_glyphs: list[str] = field(default_factory=lambda: ["•", "▪", "▶"])
    marker_artifacts: list[str] = field(default_factory=lambda: [":marker"])
    drop_empty_paragraphs: bool = True

    def __post_init__(self) -> None:
        for name in ("bullet_glyphs", "marker_artifacts"):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"converter.{name} must be a list of strings")


@dataclass
class RendererConfig:
    """Renderer selection."""

    engine: str = "markup"


@dataclass
class PostConfig:
    """Post draft settings."""

    title_prefix: str = "DOCX Import"


@dataclass
class Config:
    """Top-level configuration."""

    converter: ConverterConfig = field(default_factory=ConverterConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)
    post: PostConfig = field(default_factory=PostConfig)
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        """Load configuration from a YAML file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}")

        return cls._from_dict(data)

    @classmethod
    def from_yaml_string(cls, text: str) -> Config:
        """Load configuration from a YAML string."""
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> Config:
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        return cls(
            converter=_section(data, "converter", ConverterConfig),
            renderer=_section(data, "renderer", RendererConfig),
            post=_section(data, "post", PostConfig),
            verbose=data.get("verbose", False),
        )

    @classmethod
    def default(cls) -> Config:
        """Return the default configuration."""
        return cls()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Config:
        """Load config from path, or return defaults if path is None."""
        if path is None:
            return cls.default()
        return cls.from_yaml(path)


def _section(data: dict, name: str, section_cls):
    """Build one config section, ignoring keys the section does not define."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    fields = section_cls.__dataclass_fields__
    return section_cls(**{k: v for k, v in section.items() if k in fields})
