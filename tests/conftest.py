import os
import sys

import pytest

# Ensure the project root is on sys.path so tests can import ``randproj``
# without installing the package.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def _fresh_shared_source():
    """Start and finish each test without a shared random source."""
    from randproj.projection import random_source

    random_source._reset_shared_source()
    yield
    random_source._reset_shared_source()
