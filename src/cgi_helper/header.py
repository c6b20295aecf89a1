"""HTTP response header emission for CGI scripts.

A CGI script answers by writing a header block to standard output,
terminated by a blank line, followed by the body:

    Content-type: text/html

    <!doctype html>...
"""

import logging
import sys
from typing import TextIO

from cgi_helper.doctypes import DoctypeKey

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "text/html"


def emit_header(
    content_type: str = DEFAULT_CONTENT_TYPE,
    doctype_key: DoctypeKey | str = DoctypeKey.HTML5,
    stream: TextIO | None = None,
) -> None:
    """Write the Content-type line and the terminating blank line.

    Call once, before any other output. Repeated calls are not detected.

    Args:
        content_type: MIME type for the response
        doctype_key: Accepted for compatibility; not written
        stream: Output stream (default: sys.stdout at call time)
    """
    out = stream if stream is not None else sys.stdout
    print(f"Content-type: {content_type}", file=out)
    print(file=out)
    logger.debug("Emitted header for %s", content_type)


http_header = emit_header
