"""
Non-interactive Schnorr proof of knowledge of a discrete logarithm.

Proves knowledge of  x  such that  Y = x·G  without revealing x.

Interactive protocol::

    Prover                              Verifier
    r ←$ [1, n-1],  T = r·G   ── T ──▶
                              ◀── c ──  c ←$ Z_n
    s = r + c·x  (mod n)      ── s ──▶  check  s·G == T + c·Y

Fiat-Shamir replaces the verifier's random  c  with

    c = H(sid, pid, G, Y, T)

so the prover runs commit → challenge → respond in one call and the
proof is the pair  (T, s).  The session and participant identifiers
bind the proof to its context: replaying it under another context
changes  c  and the check fails.

The nonce  r  must be fresh for every proof.  Two proofs under the same
key with the same  r  reveal  x = (s₁ − s₂)/(c₁ − c₂).

References
----------
- Schnorr (1989). "Efficient Identification and Signatures for Smart
  Cards."  CRYPTO 1989.
- Fiat, Shamir (1986). "How to Prove Yourself."  CRYPTO 1986.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .curve import SECP256K1, CurveParams
from .errors import (
    DeserializationError,
    InvalidPoint,
    InvalidScalar,
    InvalidWitness,
    ProofError,
)
from .field import ORDER, SCALAR_BYTES, RandomSource, Scalar
from .hash import challenge
from .multiply import multiply_glv
from .point import COMPRESSED_BYTES, AffinePoint

logger = logging.getLogger(__name__)

PROOF_BYTES = COMPRESSED_BYTES + SCALAR_BYTES

Identifier = Union[bytes, str]


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Statement:
    """
    Public claim "I know x with Y = x·G", plus domain-separation context.

    ``session_id`` and ``participant_id`` are opaque to this library; text
    is encoded as UTF-8.
    """

    Y: AffinePoint
    session_id: bytes
    participant_id: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "session_id", _as_bytes(self.session_id))
        object.__setattr__(
            self, "participant_id", _as_bytes(self.participant_id),
        )


@dataclass
class Witness:
    """The prover's secret  x.  Never serialised; ``repr`` is redacted."""

    x: Scalar = field(repr=False)

    @classmethod
    def from_int(cls, value: int) -> Witness:
        return cls(Scalar.from_int(value))

    def clear(self) -> None:
        """Overwrite the secret (best-effort in Python)."""
        self.x = Scalar.zero()


@dataclass(frozen=True)
class Proof:
    """
    Proof transcript  (T, s).

    T = r·G  is the commitment,  s = r + c·x  the response.
    Verification:  s·G  ==  T + c·Y.
    """

    T: AffinePoint
    s: Scalar

    def to_bytes(self) -> bytes:
        """Serialise to 65 bytes: compressed T (33) + s (32)."""
        return self.T.to_bytes(compressed=True) + self.s.to_bytes()

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data: bytes) -> Proof:
        if not isinstance(data, (bytes, bytearray)):
            raise DeserializationError("proof encoding must be bytes")
        if len(data) != PROOF_BYTES:
            raise DeserializationError(
                f"expected {PROOF_BYTES} bytes, got {len(data)}"
            )
        T = AffinePoint.from_bytes(bytes(data[:COMPRESSED_BYTES]))
        s = Scalar.from_bytes(bytes(data[COMPRESSED_BYTES:]))
        return cls(T=T, s=s)

    @classmethod
    def from_hex(cls, text: str) -> Proof:
        try:
            data = bytes.fromhex(text)
        except (TypeError, ValueError) as e:
            raise DeserializationError("invalid hex proof encoding") from e
        return cls.from_bytes(data)


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of ``Verifier.verify``.  Truthy iff the proof was accepted.

    ``error`` is set when the input was rejected before the equation was
    checked (malformed scalar, bad point, undecodable bytes).  A proof
    that is well-formed but wrong has ``accepted=False, error=None``.
    """

    accepted: bool
    error: Optional[ProofError] = None

    def __bool__(self) -> bool:
        return self.accepted

    @property
    def reason(self) -> Optional[str]:
        if self.error is None:
            return None if self.accepted else "equation mismatch"
        return type(self.error).__name__


# ── prover ──────────────────────────────────────────────────────────────

class Prover:
    """
    Produces proofs for a fixed curve.

    Parameters
    ----------
    params : CurveParams
        Domain parameters (defaults to secp256k1).
    check_consistency : bool
        Also check  Y == x·G  before proving (one extra multiplication).
    """

    def __init__(
        self,
        params: CurveParams = SECP256K1,
        check_consistency: bool = False,
    ) -> None:
        self.params = params
        self.check_consistency = check_consistency

    def prove(
        self,
        witness: Union[Witness, Scalar, int],
        statement: Statement,
        rng: RandomSource,
    ) -> Proof:
        """
        Commit, derive the challenge and respond in one step.

        *rng* is called as ``rng(32)`` and must be a cryptographically
        secure source (``secrets.token_bytes`` in production).  Raises
        ``RandomnessUnavailable`` when it cannot supply a nonce.
        """
        x = _witness_scalar(witness)
        if x.is_zero():
            raise InvalidWitness("witness must be non-zero")
        Y = statement.Y
        _require_curve_point(Y, "public key")
        G = self.params.G

        if self.check_consistency and multiply_glv(x, G, self.params) != Y:
            raise InvalidWitness("witness does not match the public key")

        # commit
        r = Scalar.random(rng)
        T = multiply_glv(r, G, self.params)
        # challenge
        c = challenge(statement.session_id, statement.participant_id, G, Y, T)
        # respond
        s = r + c * x
        del r

        logger.debug(
            "proof produced for session=%r participant=%r",
            statement.session_id, statement.participant_id,
        )
        return Proof(T=T, s=s)


# ── verifier ────────────────────────────────────────────────────────────

class Verifier:
    """
    Checks proofs for a fixed curve.

    Every input is treated as attacker-controlled: malformed proofs and
    statements come back as a rejected ``VerificationResult`` and never
    raise.
    """

    def __init__(self, params: CurveParams = SECP256K1) -> None:
        self.params = params

    def verify(self, proof: Proof, statement: Statement) -> VerificationResult:
        try:
            accepted = self._check(proof, statement)
        except ProofError as e:
            logger.debug(
                "proof rejected for session=%r participant=%r: %s",
                *_context(statement), type(e).__name__,
            )
            return VerificationResult(accepted=False, error=e)

        logger.debug(
            "proof %s for session=%r participant=%r",
            "accepted" if accepted else "rejected", *_context(statement),
        )
        return VerificationResult(accepted=accepted)

    def verify_bytes(self, data: bytes, statement: Statement) -> VerificationResult:
        """Decode a 65-byte wire proof, then verify it."""
        try:
            proof = Proof.from_bytes(data)
        except ProofError as e:
            logger.debug("undecodable proof: %s", e)
            return VerificationResult(accepted=False, error=e)
        return self.verify(proof, statement)

    def _check(self, proof: Proof, statement: Statement) -> bool:
        if not isinstance(proof, Proof):
            raise DeserializationError("not a Proof")
        if not isinstance(statement, Statement):
            raise DeserializationError("not a Statement")
        s = _response_scalar(proof.s)
        T, Y = proof.T, statement.Y
        _require_curve_point(T, "commitment")
        _require_curve_point(Y, "public key")
        G = self.params.G

        c = challenge(statement.session_id, statement.participant_id, G, Y, T)
        lhs = multiply_glv(s, G, self.params)
        rhs = T.to_jacobian().add_affine(multiply_glv(c, Y, self.params))
        return rhs == lhs


# ── helpers ─────────────────────────────────────────────────────────────

def _as_bytes(value: Identifier) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError(f"identifier must be bytes or str, not {type(value).__name__}")


def _context(statement: Statement) -> Tuple[Optional[bytes], Optional[bytes]]:
    return (
        getattr(statement, "session_id", None),
        getattr(statement, "participant_id", None),
    )


def _witness_scalar(witness: Union[Witness, Scalar, int]) -> Scalar:
    if isinstance(witness, Witness):
        witness = witness.x
    if isinstance(witness, Scalar):
        return witness
    if isinstance(witness, int) and not isinstance(witness, bool):
        return Scalar.from_int(witness)
    raise InvalidWitness(f"unsupported witness type {type(witness).__name__}")


def _response_scalar(s: Union[Scalar, int]) -> Scalar:
    if isinstance(s, Scalar):
        return s
    if isinstance(s, int) and not isinstance(s, bool) and 0 <= s < ORDER:
        return Scalar(s)
    raise InvalidScalar("response is outside [0, n)")


def _require_curve_point(point: AffinePoint, what: str) -> None:
    if not isinstance(point, AffinePoint):
        raise InvalidPoint(f"{what} is not a point")
    if point.is_identity():
        raise InvalidPoint(f"{what} is the identity")
    if not point.is_on_curve():
        raise InvalidPoint(f"{what} is not on the curve")


# ── module-level API ────────────────────────────────────────────────────

_PROVER = Prover()
_VERIFIER = Verifier()


def prove(
    witness: Union[Witness, Scalar, int],
    statement: Statement,
    rng: RandomSource,
) -> Proof:
    """Produce a proof with the default secp256k1 prover."""
    return _PROVER.prove(witness, statement, rng)


def verify(proof: Proof, statement: Statement) -> VerificationResult:
    """Verify a proof with the default secp256k1 verifier."""
    return _VERIFIER.verify(proof, statement)


def verify_bytes(data: bytes, statement: Statement) -> VerificationResult:
    """Decode and verify a 65-byte wire proof."""
    return _VERIFIER.verify_bytes(data, statement)
