"""cgi_helper - conveniences for CGI-style web scripts.

Three facilities:
- http_header(): print the Content-type line and the blank line after it
- render(): expand ERB-style tags (<%= expr %>) in a text template
- doctype(): return a DOCTYPE declaration from a fixed table

Usage:

    from cgi_helper import doctype, h, http_header, render

    http_header("text/html")
    print(render(
        "<%= doctype() %><body>Hello <%= h(context.name) %></body></html>",
        {"name": name},
    ))
"""

__version__ = "0.1.0"
__author__ = "cgi_helper Contributors"

from cgi_helper.doctypes import DOCTYPES, DoctypeKey, UnknownDoctypeError, doctype
from cgi_helper.escaping import escape, h
from cgi_helper.header import emit_header, http_header
from cgi_helper.templates import (
    MixedNewlinesError,
    TemplateRenderer,
    TemplateSyntaxError,
    render,
)

__all__ = [
    "DOCTYPES",
    "DoctypeKey",
    "MixedNewlinesError",
    "TemplateRenderer",
    "TemplateSyntaxError",
    "UnknownDoctypeError",
    "doctype",
    "emit_header",
    "escape",
    "h",
    "http_header",
    "render",
]
