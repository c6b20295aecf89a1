"""cgi_helper template rendering.

Jinja2-based rendering of ERB-style templates (<%= expr %>, <% stmt %>).
"""

from jinja2 import TemplateSyntaxError, UndefinedError

from cgi_helper.templates.renderer import (
    MixedNewlinesError,
    TemplateRenderer,
    build_environment,
    detect_newline,
    render,
)

__all__ = [
    "MixedNewlinesError",
    "TemplateRenderer",
    "TemplateSyntaxError",
    "UndefinedError",
    "build_environment",
    "detect_newline",
    "render",
]
