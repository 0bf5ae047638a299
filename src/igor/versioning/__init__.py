# src/igor/versioning/__init__.py
"""Built-in versioning blocks, one module per release series."""

from igor.versioning.v400 import V400Migrations
from igor.versioning.v401 import V401Migrations
from igor.versioning.v402 import V402Migrations

BUILTIN_PLUGINS = (V400Migrations(), V401Migrations(), V402Migrations())

__all__ = ["BUILTIN_PLUGINS", "V400Migrations", "V401Migrations", "V402Migrations"]
