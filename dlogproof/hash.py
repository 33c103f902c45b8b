"""
Domain-separated Fiat-Shamir challenge for the discrete-log proof.

Convention follows BIP-340 tagged hashes:

    H_tag(x) = SHA-256( SHA-256(tag) ‖ SHA-256(tag) ‖ x )

The transcript is

    x = len‖sid ‖ len‖pid ‖ enc(G) ‖ enc(Y) ‖ enc(T)

where ``len`` is a 4-byte big-endian length prefix and ``enc`` is the
33-byte SEC 1 compressed point encoding.  Length-prefixing keeps the
two identifiers unambiguous (``"ab" ‖ "c"`` and ``"a" ‖ "bc"`` hash
differently).  The 256-bit digest is reduced modulo *n*.
"""

from __future__ import annotations

import hashlib
from typing import Any

from .field import Scalar
from .point import AffinePoint

# ── domain tags ─────────────────────────────────────────────────────────
_TAG_CHALLENGE = b"dlogproof/v1/challenge"


# ── internal helpers ────────────────────────────────────────────────────
def _tagged_hasher(tag: bytes) -> hashlib._Hash:
    """Return a SHA-256 context pre-loaded with the BIP-340 tag prefix."""
    tag_hash = hashlib.sha256(tag).digest()
    h = hashlib.sha256()
    h.update(tag_hash)
    h.update(tag_hash)
    return h


def _encode_item(item: Any) -> bytes:
    """Canonical encoding of a transcript element."""
    if isinstance(item, (bytes, bytearray)):
        return len(item).to_bytes(4, "big") + bytes(item)
    if isinstance(item, AffinePoint):
        return item.to_bytes(compressed=True)
    raise TypeError(f"cannot encode {type(item).__name__} for hashing")


def _tagged_hash(tag: bytes, *args: Any) -> bytes:
    h = _tagged_hasher(tag)
    for a in args:
        h.update(_encode_item(a))
    return h.digest()


# ── public hash functions ───────────────────────────────────────────────
def challenge(
    session_id: bytes,
    participant_id: bytes,
    G: AffinePoint,
    Y: AffinePoint,
    T: AffinePoint,
) -> Scalar:
    r"""
    Fiat-Shamir challenge  c = H(sid, pid, G, Y, T) mod n.

    Deterministic: identical inputs always give the same scalar.  All
    three points must be non-identity (the identity has no encoding).
    """
    digest = _tagged_hash(_TAG_CHALLENGE, session_id, participant_id, G, Y, T)
    return Scalar.from_bytes_reduce(digest)
