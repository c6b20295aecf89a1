"""DOCTYPE declarations for CGI-generated documents.

These DOCTYPES are copied from http://www.w3.org/QA/2002/04/valid-dtd-list.html.

The DOCTYPE tells the browser which set of rules to apply when it lays out
the document. Without one, browsers fall back to quirks mode.

Every entry also opens the root <html> element, so callers should not
write their own opening tag after it.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class DoctypeKey(str, Enum):
    """Identifiers of the known DOCTYPE declarations."""

    HTML5 = "html5"
    XHTML_STRICT = "xhtml_strict"
    XHTML_TRANSITIONAL = "xhtml_transitional"
    HTML4STR = "html4str"
    LOOSE = "loose"
    HTML4L = "html4l"
    TRANSITIONAL = "transitional"
    HTML4TR = "html4tr"
    FRAMESET = "frameset"
    HTML4FR = "html4fr"
    HTML_3 = "html_3"


class UnknownDoctypeError(KeyError):
    """Raised when a DOCTYPE identifier is not in the table (a LookupError)."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Unknown doctype: {key!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


DOCTYPES: Mapping[DoctypeKey, str] = MappingProxyType({
    DoctypeKey.HTML5: '<!doctype html><html lang="en-us">',
    DoctypeKey.XHTML_STRICT: (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN"\n'
        '    "http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">\n'
        '<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en" lang="en">'
    ),
    DoctypeKey.XHTML_TRANSITIONAL: (
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN"\n'
        '    "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">\n'
        '<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en" lang="en">'
    ),
    DoctypeKey.HTML4STR: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN"\n'
        '    "http://www.w3.org/TR/html4/strict.dtd">\n'
        '<html>'
    ),
    # Points at strict.dtd; kept byte-identical for existing documents.
    DoctypeKey.LOOSE: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN"\n'
        '    "http://www.w3.org/TR/html4/strict.dtd">\n'
        '<html>'
    ),
    DoctypeKey.HTML4L: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN"\n'
        '    "http://www.w3.org/TR/html4/loose.dtd">\n'
        '<html>'
    ),
    DoctypeKey.TRANSITIONAL: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN">\n'
        '<html>'
    ),
    DoctypeKey.HTML4TR: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN">\n'
        '<html>'
    ),
    DoctypeKey.FRAMESET: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Frameset//EN"\n'
        '    "http://www.w3.org/TR/html4/frameset.dtd">\n'
        '<html>'
    ),
    DoctypeKey.HTML4FR: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Frameset//EN"\n'
        '    "http://www.w3.org/TR/html4/frameset.dtd">\n'
        '<html>'
    ),
    DoctypeKey.HTML_3: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 3.2 Final//EN">\n'
        '<html>'
    ),
})


def normalize_key(key: DoctypeKey | str) -> DoctypeKey:
    """Convert a doctype identifier to a DoctypeKey.

    Args:
        key: DoctypeKey member or its string value (e.g. "html5")

    Returns:
        Matching DoctypeKey

    Raises:
        UnknownDoctypeError: If the identifier is not known
    """
    if isinstance(key, DoctypeKey):
        return key
    try:
        return DoctypeKey(key)
    except ValueError:
        raise UnknownDoctypeError(key) from None


def doctype(key: DoctypeKey | str = DoctypeKey.HTML5) -> str:
    """Return the DOCTYPE declaration (and opening <html> tag) for a key.

    Args:
        key: Doctype identifier, HTML5 by default

    Returns:
        Literal declaration string

    Raises:
        UnknownDoctypeError: If the identifier is not known
    """
    normalized = normalize_key(key)
    logger.debug("Looked up doctype %s", normalized.value)
    return DOCTYPES[normalized]


def available_doctypes() -> tuple[str, ...]:
    """Return the known doctype identifiers in table order."""
    return tuple(key.value for key in DOCTYPES)
