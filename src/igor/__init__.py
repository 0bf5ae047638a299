"""
Igor: versioned document migration for node-based scene files.

Takes documents deserialized from an older file format and stitches them,
in place, into the shape the current schema expects.
"""

__version__ = "0.1.0"
