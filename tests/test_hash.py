import hashlib

import pytest

from dlogproof import G, InvalidPoint, INFINITY, ORDER, Scalar, challenge, multiply_base

Y = multiply_base(0xA11CE)
T = multiply_base(0xB0B)


def test_challenge_is_deterministic():
    assert challenge(b"s1", b"alice", G, Y, T) == challenge(b"s1", b"alice", G, Y, T)


def test_challenge_is_reduced_scalar():
    c = challenge(b"s1", b"alice", G, Y, T)
    assert isinstance(c, Scalar)
    assert 0 <= c.value < ORDER


def test_challenge_matches_tagged_sha256_layout():
    tag = hashlib.sha256(b"dlogproof/v1/challenge").digest()
    data = (
        tag + tag
        + (2).to_bytes(4, "big") + b"s1"
        + (5).to_bytes(4, "big") + b"alice"
        + G.to_bytes() + Y.to_bytes() + T.to_bytes()
    )
    expected = int.from_bytes(hashlib.sha256(data).digest(), "big") % ORDER
    assert challenge(b"s1", b"alice", G, Y, T).value == expected


@pytest.mark.parametrize("args", [
    (b"s2", b"alice", G, Y, T),
    (b"s1", b"bob", G, Y, T),
    (b"s1", b"alice", Y, G, T),
    (b"s1", b"alice", G, T, T),
    (b"s1", b"alice", G, Y, Y),
])
def test_every_input_is_bound(args):
    assert challenge(*args) != challenge(b"s1", b"alice", G, Y, T)


def test_identifier_boundaries_are_unambiguous():
    assert challenge(b"ab", b"c", G, Y, T) != challenge(b"a", b"bc", G, Y, T)


def test_identity_cannot_be_hashed():
    with pytest.raises(InvalidPoint):
        challenge(b"s1", b"alice", G, Y, INFINITY)


def test_unsupported_item_type():
    with pytest.raises(TypeError):
        challenge("s1", b"alice", G, Y, T)
