# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import rows, column_schemas

    @given(schema=column_schemas, batch=rows)
    def test_translation(schema, batch) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

# Column names as users type them: spaces and mixed case included
display_names = st.from_regex(r"[A-Za-z][A-Za-z0-9 _]{0,15}", fullmatch=True)

storage_names = st.from_regex(r"[a-z][a-z0-9_]{0,15}", fullmatch=True)

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**53), max_value=2**53),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=20),
)

column_specs = st.one_of(
    st.sampled_from(["string", "number", "boolean", "dateTime"]),
    st.fixed_dictionaries({"type": st.sampled_from(["string", "number"])}),
    st.fixed_dictionaries({"name": storage_names}, optional={"type": st.sampled_from(["string", "number"])}),
)

column_schemas = st.dictionaries(display_names, column_specs, max_size=8)

rows = st.lists(st.dictionaries(display_names, scalars, max_size=8), max_size=20)
