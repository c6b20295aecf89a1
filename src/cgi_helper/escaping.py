"""HTML entity escaping for values written into CGI output."""

from typing import Any

from markupsafe import escape as _markup_escape


def escape(text: Any) -> str:
    """Escape &, <, >, " and ' as character references.

    None is treated as the empty string. Other non-string values are
    converted with str() first.

    Args:
        text: Value to escape

    Returns:
        Escaped plain string
    """
    if text is None:
        return ""
    return str(_markup_escape(str(text)))


# Short name for use inside scripts and templates
h = escape
