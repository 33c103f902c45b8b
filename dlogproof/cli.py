"""
Command-line driver.

    dlogproof demo
    dlogproof prove  --secret HEX --session-id S --participant-id P
    dlogproof verify --public-key HEX --proof HEX --session-id S --participant-id P
"""

import argparse
import logging
import secrets
import sys
import time

from .curve import G
from .errors import ProofError
from .field import Scalar
from .multiply import multiply_base
from .point import AffinePoint
from .proofs import Proof, Statement, prove, verify

logger = logging.getLogger(__name__)


def demo(args):
    """Prove, verify, then show that a tampered proof is rejected."""
    x = Scalar.random(secrets.token_bytes)
    Y = multiply_base(x)
    stmt = Statement(Y, args.session_id, args.participant_id)
    print("1. Public key Y = x·G:", Y.to_hex())

    start = time.perf_counter()
    proof = prove(x, stmt, rng=secrets.token_bytes)
    prove_ms = (time.perf_counter() - start) * 1000
    print("2. Proof:", proof.to_hex())

    start = time.perf_counter()
    result = verify(proof, stmt)
    verify_ms = (time.perf_counter() - start) * 1000
    print("3. Verification:", "VALID" if result else "INVALID")

    wrong = prove(x + Scalar.one(), stmt, rng=secrets.token_bytes)
    print("4. Proof with the wrong secret:",
          "VALID" if verify(wrong, stmt) else "INVALID")

    other = Statement(Y, args.session_id + "-replay", args.participant_id)
    print("5. Proof replayed in another session:",
          "VALID" if verify(proof, other) else "INVALID")

    print(f"\nprove: {prove_ms:.2f} ms   verify: {verify_ms:.2f} ms")
    return 0 if result else 1


def prove_cmd(args):
    try:
        x = Scalar.from_bytes(bytes.fromhex(args.secret.rjust(64, "0")))
    except ValueError as e:
        print(f"error: bad secret: {e}", file=sys.stderr)
        return 2
    Y = x * G
    try:
        proof = prove(x, Statement(Y, args.session_id, args.participant_id),
                      rng=secrets.token_bytes)
    except ProofError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print("public-key:", Y.to_hex())
    print("proof:", proof.to_hex())
    return 0


def verify_cmd(args):
    try:
        Y = AffinePoint.from_hex(args.public_key)
        proof = Proof.from_hex(args.proof)
    except ProofError as e:
        print(f"INVALID ({type(e).__name__}: {e})")
        return 1
    result = verify(proof, Statement(Y, args.session_id, args.participant_id))
    if result:
        print("VALID")
        return 0
    print(f"INVALID ({result.reason})")
    return 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog="dlogproof",
        description="Non-interactive Schnorr proofs of discrete-log knowledge.",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging.")
    subparsers = parser.add_subparsers()

    def add_context(p):
        p.add_argument("--session-id", type=str, default="example_session",
                       help="Session identifier bound into the challenge.")
        p.add_argument("--participant-id", type=str, default="1",
                       help="Participant identifier bound into the challenge.")

    parser_demo = subparsers.add_parser("demo", help="Run an end-to-end example.")
    add_context(parser_demo)
    parser_demo.set_defaults(func=demo)

    parser_prove = subparsers.add_parser("prove", help="Prove knowledge of a secret.")
    parser_prove.add_argument("--secret", type=str, required=True,
                              help="Secret scalar as hex.")
    add_context(parser_prove)
    parser_prove.set_defaults(func=prove_cmd)

    parser_verify = subparsers.add_parser("verify", help="Verify a proof.")
    parser_verify.add_argument("--public-key", type=str, required=True,
                               help="SEC 1 encoded public key as hex.")
    parser_verify.add_argument("--proof", type=str, required=True,
                               help="65-byte proof as hex.")
    add_context(parser_verify)
    parser_verify.set_defaults(func=verify_cmd)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
