"""
Template Renderer

Renders a resolved term reference with a Jinja2 template.
"""

from typing import Any, Dict
import logging

from jinja2 import Environment, TemplateSyntaxError

from .exceptions import TemplateConfigError
from .models import TermReference
from .schemas import GlossaryEntry

logger = logging.getLogger(__name__)

_TRAIT_SUFFIX = "{% if trait %}#{{ trait }}{% endif %}"


class TemplateRenderer:
    """
    Render glossary entries as links.

    Usage:
        renderer = TemplateRenderer(template="http")
        html = renderer.render(entry, reference)
    """

    TEMPLATES = {
        "default": "[{{ showtext }}]({{ navurl }}" + _TRAIT_SUFFIX + ")",
        "markdown": "[{{ showtext }}]({{ navurl }}" + _TRAIT_SUFFIX + ")",
        "http": '<a href="{{ navurl }}' + _TRAIT_SUFFIX + '">{{ showtext }}</a>',
        "essif": (
            '<a href="{{ navurl }}' + _TRAIT_SUFFIX + '" title="{{ glossaryText }}">'
            "{{ showtext }}</a>"
        ),
    }

    def __init__(self, template: str = "default"):
        """
        Initialize renderer with template.

        Args:
            template: Template name (default, markdown, http, essif) or
                the source of a custom Jinja2 template
        """
        key = str(template).lower()
        if key in self.TEMPLATES:
            self.template_type = key
            self.source = self.TEMPLATES[key]
        else:
            self.template_type = "custom"
            self.source = str(template)

        self.jinja_env = Environment(autoescape=False, keep_trailing_newline=True)
        try:
            self.template = self.jinja_env.from_string(self.source)
        except TemplateSyntaxError as e:
            raise TemplateConfigError(f"Invalid template {self.source!r}: {e}") from e

    @staticmethod
    def merge_fields(entry: GlossaryEntry, reference: TermReference) -> Dict[str, Any]:
        """
        Combine entry and reference fields for rendering.

        Reference fields win on name collisions, but only when they carry
        a value: an absent trait or vsntag never hides the entry's own.
        """
        fields = {k: v for k, v in entry.template_fields().items() if v is not None}
        for name, value in reference.to_dict().items():
            if value:
                fields[name] = value
        return fields

    def render(self, entry: GlossaryEntry, reference: TermReference) -> str:
        """
        Render one resolved reference.

        Returns:
            The rendered text; empty when nothing could be rendered
        """
        fields = self.merge_fields(entry, reference)
        try:
            return self.template.render(fields)
        except Exception as e:
            logger.warning(f"Rendering term '{entry.term}' with {self.template_type} template failed: {e}")
            return ""
