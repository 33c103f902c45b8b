"""
Scalar multiplication  k·P  on secp256k1.

Two algorithms that must agree bit for bit:

1. ``multiply`` — baseline left-to-right double-and-add in Jacobian
   coordinates.  The loop always runs over all ``n.bit_length()`` bits
   and computes the addition at every step, selecting the result by the
   bit, so the sequence of field operations does not depend on *k*
   (constant structure, not a constant-time guarantee under CPython).

2. ``multiply_glv`` — GLV endomorphism method.  Split

       k ≡ k1 + k2·λ  (mod n),   |k1|, |k2| < 2^129

   then evaluate  k1·P + k2·φ(P)  with one interleaved double-and-add
   (Shamir's trick), halving the number of doublings.

Negative halves are handled by negating the corresponding base point,
so the interleaved loop only ever sees non-negative integers.
"""

from __future__ import annotations

from typing import Tuple, Union

from .curve import SECP256K1, CurveParams
from .field import Scalar
from .point import INFINITY, AffinePoint, JacobianPoint

ScalarLike = Union[Scalar, int]

_SCALAR_BITS = SECP256K1.n.bit_length()
# upper bound on |k1|, |k2| from the rounding error of the basis coefficients
_GLV_BITS = (_SCALAR_BITS + 1) // 2 + 1


def _scalar_int(k: ScalarLike, n: int = SECP256K1.n) -> int:
    if isinstance(k, Scalar):
        return k.value
    if isinstance(k, int):
        return k % n
    raise TypeError(f"scalar must be Scalar or int, not {type(k).__name__}")


def _div_nearest(a: int, b: int) -> int:
    """round(a / b) for b > 0, halves rounded up."""
    return (2 * a + b) // (2 * b)


# ── baseline ────────────────────────────────────────────────────────────
def multiply(k: ScalarLike, point: AffinePoint) -> AffinePoint:
    """Compute  k·P  by MSB-first double-and-add (always add, then select)."""
    k = _scalar_int(k)
    if k == 0 or point.is_identity():
        return INFINITY

    acc = JacobianPoint.identity()
    for i in reversed(range(_SCALAR_BITS)):
        acc = acc.double()
        added = acc.add_affine(point)
        acc = (acc, added)[(k >> i) & 1]
    return acc.to_affine()


# ── GLV ─────────────────────────────────────────────────────────────────
def endomorphism(point: AffinePoint, params: CurveParams = SECP256K1) -> AffinePoint:
    """φ(x, y) = (β·x, y), which equals  λ·P."""
    if point.is_identity():
        return point
    return AffinePoint(point.x.value * params.beta, point.y)


def split_scalar(
    k: ScalarLike,
    params: CurveParams = SECP256K1,
) -> Tuple[int, int]:
    """
    Decompose *k* into signed halves with  k ≡ k1 + k2·λ (mod n).

    c1 = round(b2·k / n),   c2 = round(−b1·k / n)
    k1 = k − c1·a1 − c2·a2
    k2 =   − c1·b1 − c2·b2
    """
    k = _scalar_int(k, params.n)
    c1 = _div_nearest(params.b2 * k, params.n)
    c2 = _div_nearest(-params.b1 * k, params.n)
    k1 = k - c1 * params.a1 - c2 * params.a2
    k2 = -c1 * params.b1 - c2 * params.b2
    return k1, k2


def multiply_glv(
    k: ScalarLike,
    point: AffinePoint,
    params: CurveParams = SECP256K1,
) -> AffinePoint:
    """Compute  k·P  as  k1·P + k2·φ(P)  with a shared doubling chain."""
    k = _scalar_int(k, params.n)
    if k == 0 or point.is_identity():
        return INFINITY

    k1, k2 = split_scalar(k, params)
    phi = endomorphism(point, params)
    # a negative half negates its base point, picked by index
    p1 = (point, -point)[k1 < 0]
    p2 = (phi, -phi)[k2 < 0]
    return _interleaved(abs(k1), p1, abs(k2), p2)


def _interleaved(
    k1: int, p1: AffinePoint, k2: int, p2: AffinePoint,
) -> AffinePoint:
    """
    k1·P1 + k2·P2 for 0 <= k1, k2 < 2^_GLV_BITS (Shamir's trick).

    Every step doubles and adds, then selects the sum by the bit pair,
    so the operation count does not depend on k1 or k2.
    """
    p12 = (p1.to_jacobian() + p2).to_affine()
    # index = bit of k1 | (bit of k2) << 1; slot 0 is a dummy addend
    table = (p12, p1, p2, p12)

    acc = JacobianPoint.identity()
    for i in reversed(range(_GLV_BITS)):
        acc = acc.double()
        idx = ((k1 >> i) & 1) | (((k2 >> i) & 1) << 1)
        added = acc.add_affine(table[idx])
        acc = (acc, added)[idx != 0]
    return acc.to_affine()


def multiply_base(k: ScalarLike) -> AffinePoint:
    """k·G  via the GLV path."""
    return multiply_glv(k, SECP256K1.G)
