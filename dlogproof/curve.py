"""
secp256k1 domain parameters, including the GLV endomorphism data.

``SECP256K1`` is built once at import time and never mutated; every
module shares the same frozen instance.

Endomorphism
------------
secp256k1 has  j-invariant 0, so  φ(x, y) = (β·x, y)  with  β³ ≡ 1 (mod p)
is a group automorphism acting as multiplication by  λ  (λ³ ≡ 1 mod n):

    φ(P) = λ·P   for every P.

The lattice  {(a, b) : a + b·λ ≡ 0 (mod n)}  has the short basis
``(a1, b1), (a2, b2)`` below (GECC Algorithm 3.74), which lets any scalar
be written as  k ≡ k1 + k2·λ  with  |k1|, |k2| ≈ √n.

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
- Gallant, Lambert, Vanstone (2001). "Faster Point Multiplication on
  Elliptic Curves with Efficient Endomorphisms."  CRYPTO 2001.
- Hankerson, Menezes, Vanstone. "Guide to Elliptic Curve Cryptography",
  Algorithm 3.74.
"""

from __future__ import annotations

from dataclasses import dataclass

from .field import FIELD_PRIME, ORDER, CURVE_B
from .point import AffinePoint

G_X = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
G_Y = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

BETA = 0x7AE96A2B657C07106E64479EAC3434E99CF0497512F58995C1396C28719501EE
LAMBDA = 0x5363AD4CC05C30E0A5261C028812645A122E22EA20816678DF02967C1B23BD72

A1 = 0x3086D221A7D46BCDE86C90E49284EB15
B1 = -0xE4437ED6010E88286F547FA90ABFE4C3
A2 = 0x114CA50F7A8E2F3F657C1108D9D44CFD8
B2 = A1


@dataclass(frozen=True)
class CurveParams:
    """Immutable short-Weierstrass (a = 0) curve with a GLV endomorphism."""

    p: int
    n: int
    b: int
    G: AffinePoint
    beta: int
    lam: int
    a1: int
    b1: int
    a2: int
    b2: int

    def validate(self) -> None:
        """
        Check the algebraic relations the multiplier relies on.

        Raises ``ValueError`` naming the first relation that fails.
        """
        if not self.G.is_on_curve() or self.G.is_identity():
            raise ValueError("generator is not a curve point")
        if self.beta == 1 or pow(self.beta, 3, self.p) != 1:
            raise ValueError("beta is not a primitive cube root of unity mod p")
        if self.lam == 1 or pow(self.lam, 3, self.n) != 1:
            raise ValueError("lambda is not a primitive cube root of unity mod n")
        for a, b in ((self.a1, self.b1), (self.a2, self.b2)):
            if (a + b * self.lam) % self.n != 0:
                raise ValueError(f"({a:#x}, {b:#x}) is not in the GLV lattice")
        if self.a1 * self.b2 - self.a2 * self.b1 != self.n:
            raise ValueError("GLV basis does not span the lattice")


SECP256K1 = CurveParams(
    p=FIELD_PRIME,
    n=ORDER,
    b=CURVE_B,
    G=AffinePoint(G_X, G_Y),
    beta=BETA,
    lam=LAMBDA,
    a1=A1,
    b1=B1,
    a2=A2,
    b2=B2,
)

G = SECP256K1.G
