import os
import sys

import numpy as np
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def rng():
    """Deterministic generator for the randomized algorithms."""
    return np.random.default_rng(1234)
