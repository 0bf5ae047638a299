# tests/property/__init__.py
"""Property-based tests for igor.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Migration blocks rewrite user
files in place, so graph well-formedness and classification rules must hold
for every tree a loader can hand over.

Test categories:
- core/: Node tree well-formedness, version gating
- engine/: Alpha analysis, interface migration, runner gating
"""
