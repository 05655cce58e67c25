"""
mmscan Command-Line Interface
=============================

- **mmscan**: scan a Metamath database and report its statements

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["mmscan"]
