# newshub/__init__.py
"""
NewsHub package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point; newshub.cli stays the module
from .cli import cli as main_cli  # noqa: E402
