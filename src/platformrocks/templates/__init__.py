"""Template registry and download."""

from types import MappingProxyType

from platformrocks.errors import UnknownTemplateError
from platformrocks.templates.base import TemplateConfig
from platformrocks.templates.fetcher import TemplateFetcher, TemplateSource

__all__ = [
    "TEMPLATES",
    "TemplateConfig",
    "TemplateFetcher",
    "TemplateSource",
    "get_template",
]

WEB = TemplateConfig(
    repo="github:platformrocks/osr.boilerplate-web",
    description="Modern web application boilerplate",
    required_files=("package.json",),
)

TEMPLATES = MappingProxyType({"web": WEB})


def get_template(name: str) -> TemplateConfig:
    """Look up a template by name, raising UnknownTemplateError if missing."""
    template = TEMPLATES.get(name)
    if template is None:
        available = ", ".join(TEMPLATES)
        raise UnknownTemplateError(f"Unknown template: {name}. Available: {available}")
    return template
