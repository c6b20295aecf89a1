"""Test fixtures for cgi_helper.

Templates:
- templates/greeting.html.erb: doctype + escaped name
- templates/broken.html.erb: unterminated expression tag
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to template fixtures
TEMPLATES_DIR = FIXTURES_DIR / "templates"

GREETING_TEMPLATE = TEMPLATES_DIR / "greeting.html.erb"
BROKEN_TEMPLATE = TEMPLATES_DIR / "broken.html.erb"
