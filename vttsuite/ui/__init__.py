"""
User interface modules.

This package contains the command-line interface.
"""

from .cli import CLIHandler, main

__all__ = [
    'CLIHandler',
    'main',
]
