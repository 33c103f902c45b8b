"""Shared fixtures: deterministic randomness and sample key pairs."""

import hashlib

import pytest

from dlogproof import Scalar, Statement, multiply_base


class CountingRng:
    """Deterministic byte source: SHA-256(seed ‖ counter) blocks."""

    def __init__(self, seed=b"dlogproof/tests"):
        self._seed = seed
        self._counter = 0

    def __call__(self, n):
        out = b""
        while len(out) < n:
            block = self._seed + self._counter.to_bytes(8, "big")
            out += hashlib.sha256(block).digest()
            self._counter += 1
        return out[:n]


@pytest.fixture
def rng():
    return CountingRng()


@pytest.fixture
def keypair():
    x = Scalar(0x1F2E3D4C5B6A79881F2E3D4C5B6A79881F2E3D4C5B6A7988)
    return x, multiply_base(x)


@pytest.fixture
def statement(keypair):
    _, Y = keypair
    return Statement(Y, b"session-1", b"participant-7")
