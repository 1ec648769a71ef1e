import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tictree.synthesis import synthesize  # noqa: E402


@pytest.fixture(scope="session")
def full_tree():
    """Unreduced tree from the empty board (255168 games)."""
    return synthesize()
