"""
Pytest configuration for pyoptic tests.

Provides:
- a fixture restoring the default registry's settings after every test
- Hypothesis profiles ("default", and a faster "dev" selected with
  HYPOTHESIS_PROFILE=dev)
"""
import os

import pytest
from hypothesis import settings

from pyoptic import default_registry

settings.register_profile("default", print_blob=True)
settings.register_profile("dev", max_examples=20, print_blob=True)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture(autouse=True)
def registry():
    """The default registry; any configure() made by a test is undone."""
    saved = dict(default_registry.settings)
    yield default_registry
    default_registry.configure(**saved)
