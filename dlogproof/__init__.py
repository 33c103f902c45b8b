"""
dlogproof: non-interactive zero-knowledge proofs of discrete-log knowledge.

A Schnorr Σ-protocol on secp256k1 made non-interactive with a
Fiat-Shamir challenge, built on a pure-Python curve engine:

- **Modular arithmetic** over GF(p) and Z_n
- **Jacobian point arithmetic** with explicit identity handling
- **GLV endomorphism** scalar multiplication (half-length scalars,
  shared doubling chain)

Quick start
-----------
::

    import secrets
    from dlogproof import G, Statement, prove, verify

    x = 0xC0FFEE
    stmt = Statement(Y=x * G, session_id=b"s1", participant_id=b"alice")

    proof = prove(x, stmt, rng=secrets.token_bytes)
    assert verify(proof, stmt)

Pure Python: the arithmetic is constant *structure*, not constant
time.  Do not use it where timing side channels matter.
"""

import logging

__version__ = "0.1.0"

# ── core types ──────────────────────────────────────────────────────────
from .field import FieldElement, Scalar, ORDER, FIELD_PRIME, batch_inverse
from .point import AffinePoint, JacobianPoint, INFINITY
from .curve import CurveParams, SECP256K1, G

# ── scalar multiplication ───────────────────────────────────────────────
from .multiply import (
    multiply,
    multiply_glv,
    multiply_base,
    split_scalar,
    endomorphism,
)

# ── Fiat-Shamir ─────────────────────────────────────────────────────────
from .hash import challenge

# ── protocol ────────────────────────────────────────────────────────────
from .proofs import (
    Statement,
    Witness,
    Proof,
    Prover,
    Verifier,
    VerificationResult,
    prove,
    verify,
    verify_bytes,
)

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    ProofError,
    InvalidOperand,
    InvalidPoint,
    InvalidScalar,
    InvalidWitness,
    RandomnessUnavailable,
    DeserializationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # version
    "__version__",
    # core
    "FieldElement", "Scalar", "ORDER", "FIELD_PRIME", "batch_inverse",
    "AffinePoint", "JacobianPoint", "INFINITY",
    "CurveParams", "SECP256K1", "G",
    # multiplication
    "multiply", "multiply_glv", "multiply_base", "split_scalar",
    "endomorphism",
    # hashing
    "challenge",
    # protocol
    "Statement", "Witness", "Proof", "Prover", "Verifier",
    "VerificationResult", "prove", "verify", "verify_bytes",
    # errors
    "ProofError", "InvalidOperand", "InvalidPoint", "InvalidScalar",
    "InvalidWitness", "RandomnessUnavailable", "DeserializationError",
]
