"""Embedded-template rendering for CGI output.

Templates use ERB-style tags on top of Jinja2:

    <%= expression %>       substitute the value of an expression
    <% for x in items %>    statement tags (if/for/set/...)
    <%# comment %>          dropped from the output

ERB's `<%%` escape is not supported; wrap literal tag text in a raw block
instead: `<% raw %><%= shown as is %><% endraw %>`.

Expressions see an explicit context mapping, both as `context.<name>` and
as bare names. A None value renders as the empty string. Literal text is
copied through unchanged, including its line endings, and nothing is
autoescaped; use h() on untrusted values.

A template must use one line-ending style throughout (LF, CRLF or CR).
Mixed line endings raise MixedNewlinesError.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, Undefined

from cgi_helper.config import RenderConfig
from cgi_helper.doctypes import doctype
from cgi_helper.escaping import escape

logger = logging.getLogger(__name__)

BLOCK_START = "<%"
BLOCK_END = "%>"
VARIABLE_START = "<%="
VARIABLE_END = "%>"
COMMENT_START = "<%#"
COMMENT_END = "%>"

# Jinja2 rewrites every line break in template text to newline_sequence
NEWLINE_SEQUENCES = ("\n", "\r\n", "\r")
DEFAULT_NEWLINE = "\n"

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


class MixedNewlinesError(ValueError):
    """Raised when a template mixes LF, CRLF and CR line endings."""

    def __init__(self, found: set[str]) -> None:
        self.found = found
        names = ", ".join(sorted(repr(n) for n in found))
        super().__init__(f"Template mixes line endings ({names}); use one style")


def detect_newline(template: str) -> str:
    """Return the line-ending style of a template.

    Args:
        template: Template text

    Returns:
        "\\n", "\\r\\n" or "\\r"; "\\n" when the text has no line break

    Raises:
        MixedNewlinesError: If more than one style occurs
    """
    found = set(_NEWLINE_RE.findall(template))
    if len(found) > 1:
        raise MixedNewlinesError(found)
    return found.pop() if found else DEFAULT_NEWLINE


def _finalize(value: Any) -> Any:
    """Render None as nothing, like ERB's nil.to_s."""
    return "" if value is None else value


def build_environment(
    config: RenderConfig | None = None,
    newline_sequence: str = DEFAULT_NEWLINE,
) -> Environment:
    """Create the Jinja2 environment used for ERB-style templates.

    Args:
        config: Renderer settings (defaults when omitted)
        newline_sequence: Line ending written for line breaks in the template

    Returns:
        Configured Jinja2 Environment
    """
    config = config or RenderConfig()

    env = Environment(
        block_start_string=BLOCK_START,
        block_end_string=BLOCK_END,
        variable_start_string=VARIABLE_START,
        variable_end_string=VARIABLE_END,
        comment_start_string=COMMENT_START,
        comment_end_string=COMMENT_END,
        autoescape=False,
        trim_blocks=False,
        lstrip_blocks=False,
        newline_sequence=newline_sequence,
        keep_trailing_newline=config.keep_trailing_newline,
        undefined=StrictUndefined if config.strict_undefined else Undefined,
        finalize=_finalize,
    )

    # Helpers callable from inside templates
    env.globals["h"] = escape
    env.globals["escape"] = escape
    env.globals["doctype"] = doctype
    env.filters["h"] = escape

    return env


class TemplateRenderer:
    """Renders ERB-style template strings against an explicit context.

    Templates are compiled on every call; nothing is cached. One Jinja2
    environment is kept per line-ending style so that line breaks in the
    template come out exactly as written.

    Usage:
        renderer = TemplateRenderer()
        html = renderer.render("Hello <%= h(context.name) %>", {"name": name})
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Renderer settings
        """
        self.config = config or RenderConfig()
        self._envs = {
            newline: build_environment(self.config, newline)
            for newline in NEWLINE_SEQUENCES
        }

    @property
    def environment(self) -> Environment:
        """The Jinja2 environment used for LF templates."""
        return self._envs[DEFAULT_NEWLINE]

    def render(
        self,
        template: str,
        context: Mapping[str, Any] | None = None,
    ) -> str:
        """Expand the embedded expressions of a template.

        Args:
            template: Template text
            context: Variables visible to the template

        Returns:
            Rendered text

        Raises:
            jinja2.TemplateSyntaxError: If the template is malformed
            MixedNewlinesError: If the template mixes line-ending styles
            Exception: Whatever an embedded expression raises, unchanged
        """
        variables = _build_context(context)
        env = self._envs[detect_newline(template)]
        compiled = env.from_string(template)
        rendered = compiled.render(variables)
        logger.debug("Rendered template (%d characters)", len(rendered))
        return rendered

    def render_file(
        self,
        path: Path,
        context: Mapping[str, Any] | None = None,
    ) -> str:
        """Read a UTF-8 template file and render it.

        Args:
            path: Template file
            context: Variables visible to the template

        Returns:
            Rendered text
        """
        # newline="" keeps CRLF and CR as written
        with path.open(encoding="utf-8", newline="") as f:
            template = f.read()
        logger.debug("Loaded template from %s", path)
        return self.render(template, context)


def _build_context(context: Mapping[str, Any] | None) -> dict[str, Any]:
    """Expose the caller's mapping as `context` and as bare names."""
    values = dict(context or {})
    variables = dict(values)
    variables["context"] = values
    return variables


_default_renderer = TemplateRenderer()


def render(template: str, context: Mapping[str, Any] | None = None) -> str:
    """Render a template string with the default renderer.

    Args:
        template: Template text
        context: Variables visible to the template

    Returns:
        Rendered text
    """
    return _default_renderer.render(template, context)
