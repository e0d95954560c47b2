import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from models import GeneratorConfig  # noqa: E402


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def small_config():
    """Generator settings that keep file-slot tests fast."""
    return GeneratorConfig(max_maps=3)
