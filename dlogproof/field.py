"""
Modular arithmetic for secp256k1.

Two parallel instantiations of the same capability:

- ``FieldElement`` — integers modulo the base-field prime *p*.
- ``Scalar``       — integers modulo the group order *n*.

Both share ``_Residue`` and therefore the same operator surface.  Values
are canonically reduced on construction, so ``0 <= value < modulus``
always holds.

Timing
------
Inversion uses Fermat's little theorem (a fixed-exponent ``pow``) rather
than the extended Euclidean algorithm, so there is no data-dependent
division loop.  CPython big integers do not give hardware-level constant
time guarantees, so this is best-effort only: treat the module as
*constant structure*, not *constant time*.

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
"""

from __future__ import annotations

from typing import Callable, List

from .errors import (
    DeserializationError,
    InvalidOperand,
    InvalidScalar,
    RandomnessUnavailable,
)

# ── secp256k1 constants ─────────────────────────────────────────────────
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
CURVE_B = 7
FIELD_BYTES = 32
SCALAR_BYTES = 32

# rejection sampling gives up after this many out-of-range draws; an honest
# source fails a single draw with probability < 2^-127
_MAX_DRAWS = 64

RandomSource = Callable[[int], bytes]


class _Residue:
    """Integer modulo ``MODULUS``; subclasses pick the modulus."""

    __slots__ = ("_v",)

    MODULUS: int = 0
    NBYTES: int = 32

    def __init__(self, value: int) -> None:
        self._v = value % self.MODULUS

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def one(cls):
        return cls(1)

    @classmethod
    def from_bytes_reduce(cls, data: bytes):
        """Reduce arbitrary-length big-endian bytes modulo the modulus."""
        return cls(int.from_bytes(data, "big"))

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes(self.NBYTES, "big")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    # arithmetic -------------------------------------------------------------
    def __add__(self, o):
        if not isinstance(o, type(self)):
            return NotImplemented
        return type(self)(self._v + o._v)

    def __radd__(self, o):
        if isinstance(o, int) and o == 0:
            return self                       # for sum()
        return NotImplemented

    def __sub__(self, o):
        if not isinstance(o, type(self)):
            return NotImplemented
        return type(self)(self._v - o._v)

    def __mul__(self, o):
        if isinstance(o, type(self)):
            return type(self)(self._v * o._v)
        return NotImplemented

    def __rmul__(self, o):
        if isinstance(o, int):
            return type(self)(o * self._v)
        return NotImplemented

    def __neg__(self):
        return type(self)(-self._v)

    def __truediv__(self, o):
        if not isinstance(o, type(self)):
            return NotImplemented
        return self * o.inv()

    def __pow__(self, e: int):
        if e < 0:
            return self.inv() ** (-e)
        return type(self)(pow(self._v, e, self.MODULUS))

    def inv(self):
        """Multiplicative inverse via Fermat's little theorem."""
        if self._v == 0:
            raise InvalidOperand(f"cannot invert zero {type(self).__name__}")
        return type(self)(pow(self._v, self.MODULUS - 2, self.MODULUS))

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, type(self)):
            return self._v == o._v
        if isinstance(o, int):
            return self._v == o % self.MODULUS
        return False

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._v))

    def __bool__(self) -> bool:
        return self._v != 0

    def __int__(self) -> int:
        return self._v

    def __repr__(self) -> str:
        h = hex(self._v)
        name = type(self).__name__
        return f"{name}(0x{h[2:10]}…)" if len(h) > 14 else f"{name}({h})"


# ── FieldElement  (GF(p)) ───────────────────────────────────────────────
class FieldElement(_Residue):
    """Element of the base field  GF(p)  where *p* = ``FIELD_PRIME``."""

    __slots__ = ()

    MODULUS = FIELD_PRIME
    NBYTES = FIELD_BYTES

    @classmethod
    def from_bytes(cls, data: bytes) -> FieldElement:
        """Strict decoding: exactly 32 bytes, value below *p*."""
        if len(data) != FIELD_BYTES:
            raise DeserializationError(
                f"need {FIELD_BYTES} bytes, got {len(data)}"
            )
        v = int.from_bytes(data, "big")
        if v >= FIELD_PRIME:
            raise DeserializationError("field element out of range")
        return cls(v)

    def is_odd(self) -> bool:
        return self._v & 1 == 1

    def sqrt(self) -> FieldElement:
        """
        Square root, valid because  p ≡ 3 (mod 4).

        Raises ``InvalidOperand`` if the element is a quadratic non-residue.
        """
        root = pow(self._v, (FIELD_PRIME + 1) // 4, FIELD_PRIME)
        if root * root % FIELD_PRIME != self._v:
            raise InvalidOperand("field element has no square root")
        return FieldElement(root)


# ── Scalar  (Z_n) ───────────────────────────────────────────────────────
class Scalar(_Residue):
    """Element of the scalar field  Z_n  where *n* = ``ORDER``."""

    __slots__ = ()

    MODULUS = ORDER
    NBYTES = SCALAR_BYTES

    @classmethod
    def random(cls, rng: RandomSource) -> Scalar:
        """
        Uniform in [1, n-1] via rejection sampling.

        *rng* is called as ``rng(32)`` and must return 32 bytes from a
        cryptographically secure source, e.g. ``secrets.token_bytes``.
        """
        for _ in range(_MAX_DRAWS):
            try:
                data = rng(SCALAR_BYTES)
            except Exception as e:
                raise RandomnessUnavailable(
                    "randomness source raised an error"
                ) from e
            if not isinstance(data, (bytes, bytearray)) or len(data) != SCALAR_BYTES:
                raise RandomnessUnavailable(
                    f"randomness source must return {SCALAR_BYTES} bytes"
                )
            c = int.from_bytes(data, "big")
            if 0 < c < ORDER:
                return cls(c)
        raise RandomnessUnavailable(
            f"no in-range value after {_MAX_DRAWS} draws"
        )

    @classmethod
    def from_int(cls, value: int) -> Scalar:
        """Strict constructor: refuses values outside [0, n)."""
        if not 0 <= value < ORDER:
            raise InvalidScalar("scalar out of range")
        return cls(value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        if len(data) != SCALAR_BYTES:
            raise DeserializationError(
                f"need {SCALAR_BYTES} bytes, got {len(data)}"
            )
        v = int.from_bytes(data, "big")
        if v >= ORDER:
            raise InvalidScalar("scalar out of range")
        return cls(v)


# ── batch inverse (Montgomery's trick) ──────────────────────────────────
def batch_inverse(values: List[_Residue]) -> List[_Residue]:
    """
    Invert a list of non-zero residues using a single modular
    exponentiation (Montgomery's trick).

    Cost: 3(n-1) multiplications + 1 inversion  vs  n inversions naïvely.

    Raises ``InvalidOperand`` if any element is zero.
    """
    n = len(values)
    if n == 0:
        return []
    if n == 1:
        return [values[0].inv()]

    # prefix products  p[i] = v[0] * v[1] * … * v[i]
    prefix = [values[0]] * n
    for i in range(1, n):
        prefix[i] = prefix[i - 1] * values[i]

    # single inversion of the total product
    inv_all = prefix[-1].inv()

    # back-substitution
    result = [values[0]] * n
    for i in range(n - 1, 0, -1):
        result[i] = prefix[i - 1] * inv_all
        inv_all = inv_all * values[i]
    result[0] = inv_all
    return result
