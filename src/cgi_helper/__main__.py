"""Entry point for running cgi_helper as a module.

Usage:
    python -m cgi_helper

Prints a text/html header and a rendered sample template, which is
enough to check that a web server runs the interpreter as a CGI handler.
The full command line is available as `cgi-helper`.
"""

from cgi_helper.cli import run_selftest

if __name__ == "__main__":
    run_selftest()
