# tests/conftest.py
"""Shared test fixtures.

HTTP traffic is mocked with respx (the ``respx_mock`` fixture comes from
respx's pytest plugin). Every test talks to tests.helpers.BASE_URL.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from glide_tables.core.config import GlideSettings
from tests.helpers import BASE_URL, TEST_TOKEN


@pytest.fixture
def glide_settings() -> GlideSettings:
    """Settings pointing at the mocked endpoint with two rows per chunk."""
    return GlideSettings(token=TEST_TOKEN, endpoint=BASE_URL, max_mutations=2)


@pytest.fixture(autouse=True)
def _isolate_glide_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep GLIDE_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("GLIDE_"):
            monkeypatch.delenv(key)
    yield


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
