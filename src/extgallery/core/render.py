"""Index template rendering.

The renderer sees exactly two bindings: the catalog as plain data and the
extensions directory link prefix.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateSyntaxError,
    select_autoescape,
)

from extgallery.core.catalog import CatalogEntry
from extgallery.core.errors import RenderError

INDEX_TEMPLATE_NAME = "index.html"


@dataclass(frozen=True)
class RenderContext:
    """Values bound into the template evaluation context."""

    extensions: tuple[CatalogEntry, ...]
    extensions_directory: str

    def as_mapping(self) -> dict[str, Any]:
        return {
            "extensions": [entry.to_template_data() for entry in self.extensions],
            "extensions_directory": self.extensions_directory,
        }


class TemplateRenderer(ABC):
    """Abstract template engine.

    Implementations compile template_text under template_name and evaluate
    it once against the render context.
    """

    @abstractmethod
    def render(self, template_name: str, template_text: str, context: RenderContext) -> str:
        """Render a single template.

        Args:
            template_name: Name the template is registered under; its
                extension drives autoescaping
            template_text: Template source
            context: Values bound into the evaluation context

        Returns:
            Rendered text

        Raises:
            RenderError: If the template fails to compile or evaluate
        """
        ...


class JinjaTemplateRenderer(TemplateRenderer):
    """Production renderer backed by jinja2.

    Uses StrictUndefined so a reference to a missing field is an error
    rather than an empty string.
    """

    def render(self, template_name: str, template_text: str, context: RenderContext) -> str:
        env = Environment(
            loader=DictLoader({template_name: template_text}),
            autoescape=select_autoescape(),
            undefined=StrictUndefined,
        )
        try:
            template = env.get_template(template_name)
        except TemplateSyntaxError as e:
            raise RenderError(
                f"Template {template_name} failed to compile (line {e.lineno}): {e.message}"
            ) from e

        # Expressions evaluate as Python, so operators and filters raise plain errors too
        try:
            return template.render(context.as_mapping())
        except (TemplateError, TypeError, ValueError, ArithmeticError, LookupError) as e:
            raise RenderError(f"Template {template_name} failed to render: {e}") from e


def read_template(path: Path) -> str:
    """Read the template source.

    Raises:
        RenderError: If the file is missing or unreadable
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RenderError(f"Could not read template {path}: {e}") from e
