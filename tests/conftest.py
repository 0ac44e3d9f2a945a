import random

import pytest


class StubRandom(random.Random):
    """random() is always 0.0: uniform(a, b) == a, randint(a, b) == a,
    choice() picks the first element."""

    def random(self):
        return 0.0


@pytest.fixture
def stub_rng():
    return StubRandom()
