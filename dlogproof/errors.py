"""
Error taxonomy for dlogproof.

Every condition the library raises derives from ``ProofError`` (itself a
``ValueError``), so callers can catch the whole family in one place.

A proof that simply fails the verification equation is *not* an error:
``Verifier.verify`` reports it as an ordinary rejection.  The classes
below are reserved for misuse and malformed input.
"""

from __future__ import annotations


class ProofError(ValueError):
    """Base class for all dlogproof errors."""


class InvalidOperand(ProofError):
    """Arithmetic on a non-invertible or out-of-range value."""


class InvalidPoint(ProofError):
    """Point is off the curve, or the identity where that is not allowed."""


class InvalidScalar(ProofError):
    """Scalar outside ``[0, n)``."""


class InvalidWitness(InvalidScalar):
    """Witness is degenerate (zero) or inconsistent with the statement."""


class RandomnessUnavailable(ProofError):
    """The randomness source could not supply a usable nonce."""


class DeserializationError(ProofError):
    """External bytes cannot be decoded into a point, scalar or proof."""
