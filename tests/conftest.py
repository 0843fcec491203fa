from __future__ import annotations

from collections.abc import Iterator

import pytest

from burgh.util import rng


@pytest.fixture(autouse=True)
def reset_global_rng() -> Iterator[None]:
    """Reseed the shared RNG streams before and after each test."""
    rng.init("42")
    yield
    rng.init("42")
