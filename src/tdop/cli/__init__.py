"""
tdop Command-Line Interface
===========================

This package provides the command-line tools for the parsing engine:

- **tdop-parse**: parse source files and print their trees

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["tdparse"]
