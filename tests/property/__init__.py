# tests/property/__init__.py
"""Property-based tests for glide-tables.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- test_naming_properties: display-name translation of outgoing rows
- test_chunking_properties: chunk boundaries, ordering and fail-fast dispatch
"""
