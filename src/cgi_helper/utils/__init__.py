"""cgi_helper utility modules.

- logging: stderr logging with human/verbose/JSON modes
"""

from cgi_helper.utils.logging import LogMode, configure_from_cli, get_logger, setup_logging

__all__ = [
    "LogMode",
    "configure_from_cli",
    "get_logger",
    "setup_logging",
]
