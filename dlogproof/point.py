"""
Point arithmetic on secp256k1:  y² = x³ + 7  over GF(p).

Two representations:

- ``AffinePoint``   — the caller-visible value type.  Coordinates are
  ``FieldElement``s; the identity is a sentinel with no coordinates.
- ``JacobianPoint`` — the working representation used inside scalar
  multiplication.  ``(X, Y, Z)`` stands for ``(X/Z², Y/Z³)`` and
  ``Z = 0`` is the identity.  Coordinates are kept as canonical ints in
  ``[0, p)`` so the inner loops avoid wrapper allocation; every
  operation returns a new point.

Addition and doubling use the Explicit-Formulas Database formulas for
short Weierstrass curves with  a = 0:

- doubling:        dbl-2009-l
- full addition:   add-2007-bl
- mixed addition:  madd-2007-bl  (Jacobian + affine, Z₂ = 1)

Encoding follows SEC 1 v2 §2.3.3/§2.3.4: compressed (33 B, default) and
uncompressed (65 B).  The identity has no encoding.
"""

from __future__ import annotations

from typing import Optional, Union

from .errors import DeserializationError, InvalidOperand, InvalidPoint
from .field import FIELD_PRIME, FIELD_BYTES, CURVE_B, FieldElement, Scalar

P = FIELD_PRIME

COMPRESSED_BYTES = 1 + FIELD_BYTES
UNCOMPRESSED_BYTES = 1 + 2 * FIELD_BYTES

Coordinate = Union[int, FieldElement]


# ── AffinePoint ─────────────────────────────────────────────────────────
class AffinePoint:
    """
    Point on secp256k1 in affine coordinates, or the identity.

    The constructor does not check the curve equation, so a verifier can
    hold (and reject) an attacker-supplied point.  ``from_bytes`` always
    validates.
    """

    __slots__ = ("_x", "_y")

    def __init__(
        self,
        x: Optional[Coordinate] = None,
        y: Optional[Coordinate] = None,
    ) -> None:
        if (x is None) != (y is None):
            raise InvalidPoint("both coordinates or neither must be given")
        self._x: Optional[FieldElement] = _as_field(x)
        self._y: Optional[FieldElement] = _as_field(y)

    # constructors -----------------------------------------------------------
    @classmethod
    def identity(cls) -> AffinePoint:
        """Point at infinity — additive identity."""
        return cls()

    @classmethod
    def from_bytes(cls, data: bytes) -> AffinePoint:
        """Deserialise SEC 1 compressed (33 B) or uncompressed (65 B)."""
        if not isinstance(data, (bytes, bytearray)):
            raise DeserializationError("point encoding must be bytes")
        data = bytes(data)
        if len(data) == COMPRESSED_BYTES:
            return cls._decode_compressed(data)
        if len(data) == UNCOMPRESSED_BYTES:
            return cls._decode_uncompressed(data)
        raise DeserializationError(
            f"need {COMPRESSED_BYTES} or {UNCOMPRESSED_BYTES} bytes, "
            f"got {len(data)}"
        )

    @classmethod
    def from_hex(cls, text: str) -> AffinePoint:
        try:
            data = bytes.fromhex(text)
        except (TypeError, ValueError) as e:
            raise DeserializationError("invalid hex point encoding") from e
        return cls.from_bytes(data)

    @classmethod
    def _decode_compressed(cls, data: bytes) -> AffinePoint:
        prefix = data[0]
        if prefix not in (0x02, 0x03):
            raise DeserializationError(f"bad compressed prefix 0x{prefix:02x}")
        x = FieldElement.from_bytes(data[1:])
        y_sq = x * x * x + FieldElement(CURVE_B)
        try:
            y = y_sq.sqrt()
        except InvalidOperand as e:
            raise InvalidPoint("x-coordinate is not on the curve") from e
        if y.is_odd() != (prefix == 0x03):
            y = -y
        return cls(x, y)

    @classmethod
    def _decode_uncompressed(cls, data: bytes) -> AffinePoint:
        if data[0] != 0x04:
            raise DeserializationError(
                f"bad uncompressed prefix 0x{data[0]:02x}"
            )
        point = cls(
            FieldElement.from_bytes(data[1:1 + FIELD_BYTES]),
            FieldElement.from_bytes(data[1 + FIELD_BYTES:]),
        )
        if not point.is_on_curve():
            raise InvalidPoint("point is not on the curve")
        return point

    # serialisation ----------------------------------------------------------
    def to_bytes(self, compressed: bool = True) -> bytes:
        if self.is_identity():
            raise InvalidPoint("the identity has no encoding")
        if compressed:
            prefix = b"\x03" if self._y.is_odd() else b"\x02"
            return prefix + self._x.to_bytes()
        return b"\x04" + self._x.to_bytes() + self._y.to_bytes()

    def to_hex(self, compressed: bool = True) -> str:
        return self.to_bytes(compressed).hex()

    @property
    def x(self) -> Optional[FieldElement]:
        return self._x

    @property
    def y(self) -> Optional[FieldElement]:
        return self._y

    def is_identity(self) -> bool:
        return self._x is None

    def is_on_curve(self) -> bool:
        """
        Check  y² = x³ + 7.  The identity counts as a curve point; callers
        that need a non-identity point test ``is_identity`` separately.
        """
        if self.is_identity():
            return True
        x, y = self._x.value, self._y.value
        return (y * y - x * x * x - CURVE_B) % P == 0

    def to_jacobian(self) -> JacobianPoint:
        return JacobianPoint.from_affine(self)

    # group operations -------------------------------------------------------
    def __neg__(self) -> AffinePoint:
        if self.is_identity():
            return self
        return AffinePoint(self._x, -self._y)

    def __add__(self, o: AffinePoint) -> AffinePoint:
        if not isinstance(o, AffinePoint):
            return NotImplemented
        return self.to_jacobian().add_affine(o).to_affine()

    def __sub__(self, o: AffinePoint) -> AffinePoint:
        if not isinstance(o, AffinePoint):
            return NotImplemented
        return self + (-o)

    def double(self) -> AffinePoint:
        return self.to_jacobian().double().to_affine()

    def __rmul__(self, k) -> AffinePoint:
        from .multiply import multiply_glv

        if isinstance(k, (Scalar, int)):
            return multiply_glv(k, self)
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        if isinstance(o, JacobianPoint):
            return o == self
        if not isinstance(o, AffinePoint):
            return False
        return self._x == o._x and self._y == o._y

    def __hash__(self) -> int:
        if self.is_identity():
            return hash(None)
        return hash((self._x.value, self._y.value))

    def __repr__(self) -> str:
        if self.is_identity():
            return "AffinePoint(∞)"
        return f"AffinePoint(0x{self._x.value:064x})"[:42] + "…)"


# ── JacobianPoint ───────────────────────────────────────────────────────
class JacobianPoint:
    """Point in Jacobian coordinates  (X : Y : Z)  ↦  (X/Z², Y/Z³)."""

    __slots__ = ("_X", "_Y", "_Z")

    def __init__(self, X: int, Y: int, Z: int) -> None:
        self._X = X % P
        self._Y = Y % P
        self._Z = Z % P

    @classmethod
    def identity(cls) -> JacobianPoint:
        return cls(0, 1, 0)

    @classmethod
    def from_affine(cls, point: AffinePoint) -> JacobianPoint:
        if point.is_identity():
            return cls.identity()
        return cls(point.x.value, point.y.value, 1)

    @property
    def X(self) -> int:
        return self._X

    @property
    def Y(self) -> int:
        return self._Y

    @property
    def Z(self) -> int:
        return self._Z

    def is_identity(self) -> bool:
        return self._Z == 0

    def is_on_curve(self) -> bool:
        """Check  Y² = X³ + 7·Z⁶  without normalising."""
        if self.is_identity():
            return True
        z2 = self._Z * self._Z % P
        z6 = z2 * z2 * z2 % P
        lhs = self._Y * self._Y
        rhs = self._X * self._X * self._X + CURVE_B * z6
        return (lhs - rhs) % P == 0

    def to_affine(self) -> AffinePoint:
        """Normalise with a single field inversion."""
        if self.is_identity():
            return AffinePoint.identity()
        z_inv = pow(self._Z, P - 2, P)
        z_inv2 = z_inv * z_inv % P
        return AffinePoint(
            self._X * z_inv2 % P,
            self._Y * z_inv2 * z_inv % P,
        )

    def negate(self) -> JacobianPoint:
        return JacobianPoint(self._X, -self._Y, self._Z)

    def __neg__(self) -> JacobianPoint:
        return self.negate()

    def double(self) -> JacobianPoint:
        """dbl-2009-l.  Vertical tangent (Y = 0) gives the identity."""
        if self._Z == 0 or self._Y == 0:
            return JacobianPoint.identity()
        X1, Y1, Z1 = self._X, self._Y, self._Z
        A = X1 * X1 % P
        B = Y1 * Y1 % P
        C = B * B % P
        t = X1 + B
        D = 2 * (t * t - A - C) % P
        E = 3 * A % P
        F = E * E % P
        X3 = (F - 2 * D) % P
        Y3 = (E * (D - X3) - 8 * C) % P
        Z3 = 2 * Y1 * Z1 % P
        return JacobianPoint(X3, Y3, Z3)

    def add(self, o: JacobianPoint) -> JacobianPoint:
        """add-2007-bl, with explicit identity / doubling / inverse cases."""
        if o._Z == 0:
            return self
        if self._Z == 0:
            return o
        X1, Y1, Z1 = self._X, self._Y, self._Z
        X2, Y2, Z2 = o._X, o._Y, o._Z
        Z1Z1 = Z1 * Z1 % P
        Z2Z2 = Z2 * Z2 % P
        U1 = X1 * Z2Z2 % P
        U2 = X2 * Z1Z1 % P
        S1 = Y1 * Z2 * Z2Z2 % P
        S2 = Y2 * Z1 * Z1Z1 % P
        H = (U2 - U1) % P
        r = (S2 - S1) % P
        if H == 0:
            if r == 0:
                return self.double()
            return JacobianPoint.identity()
        HH = H * H % P
        HHH = H * HH % P
        V = U1 * HH % P
        X3 = (r * r - HHH - 2 * V) % P
        Y3 = (r * (V - X3) - S1 * HHH) % P
        Z3 = Z1 * Z2 * H % P
        return JacobianPoint(X3, Y3, Z3)

    def add_affine(self, o: AffinePoint) -> JacobianPoint:
        """madd-2007-bl: mixed addition with an affine point (Z₂ = 1)."""
        if o.is_identity():
            return self
        if self._Z == 0:
            return JacobianPoint.from_affine(o)
        X1, Y1, Z1 = self._X, self._Y, self._Z
        X2, Y2 = o.x.value, o.y.value
        Z1Z1 = Z1 * Z1 % P
        U2 = X2 * Z1Z1 % P
        S2 = Y2 * Z1 * Z1Z1 % P
        H = (U2 - X1) % P
        r = (S2 - Y1) % P
        if H == 0:
            if r == 0:
                return self.double()
            return JacobianPoint.identity()
        HH = H * H % P
        HHH = H * HH % P
        V = X1 * HH % P
        X3 = (r * r - HHH - 2 * V) % P
        Y3 = (r * (V - X3) - Y1 * HHH) % P
        Z3 = Z1 * H % P
        return JacobianPoint(X3, Y3, Z3)

    def __add__(self, o):
        if isinstance(o, JacobianPoint):
            return self.add(o)
        if isinstance(o, AffinePoint):
            return self.add_affine(o)
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        """
        Projective equality by cross-multiplication:
        X₁·Z₂² = X₂·Z₁²  and  Y₁·Z₂³ = Y₂·Z₁³.
        """
        if isinstance(o, AffinePoint):
            o = JacobianPoint.from_affine(o)
        if not isinstance(o, JacobianPoint):
            return False
        if self._Z == 0 or o._Z == 0:
            return self._Z == 0 and o._Z == 0
        Z1Z1 = self._Z * self._Z % P
        Z2Z2 = o._Z * o._Z % P
        if (self._X * Z2Z2 - o._X * Z1Z1) % P != 0:
            return False
        return (self._Y * Z2Z2 * o._Z - o._Y * Z1Z1 * self._Z) % P == 0

    def __hash__(self) -> int:
        return hash(self.to_affine())

    def __repr__(self) -> str:
        if self.is_identity():
            return "JacobianPoint(∞)"
        return f"JacobianPoint(X=0x{self._X:x}, Y=0x{self._Y:x}, Z=0x{self._Z:x})"


def _as_field(v: Optional[Coordinate]) -> Optional[FieldElement]:
    if v is None or isinstance(v, FieldElement):
        return v
    if isinstance(v, int):
        return FieldElement(v)
    raise InvalidPoint(f"unsupported coordinate type {type(v).__name__}")


INFINITY = AffinePoint.identity()
