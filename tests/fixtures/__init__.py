# tests/fixtures/__init__.py
"""Shared test helpers for igor tests.

Factories live in tests.fixtures.factories (re-exporting igor.testing).
"""
