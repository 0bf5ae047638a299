# tests/strategies/ids.py
"""Strategies for names, identifiers and version tags."""

from hypothesis import strategies as st

from igor.contracts.version import VersionTag

# Socket and panel display names
item_names = st.text(
    min_size=1,
    max_size=12,
    alphabet="abcdefghijklmnopqrstuvwxyz ",
).filter(lambda s: s.strip() != "")

# Legacy identifiers; a tiny alphabet makes input/output collisions likely
legacy_identifiers = st.text(min_size=1, max_size=2, alphabet="ab")

# Stored file versions around the built-in block range
version_tags = st.builds(
    VersionTag,
    major=st.integers(min_value=0, max_value=403),
    minor=st.integers(min_value=0, max_value=60),
)

# Versions written by the 4.x series only
series_version_tags = st.builds(
    VersionTag,
    major=st.sampled_from([400, 401, 402]),
    minor=st.integers(min_value=0, max_value=60),
)
