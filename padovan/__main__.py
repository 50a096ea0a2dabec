"""Prove and verify a Padovan sequence from the command line.

    python -m padovan -n 48 --hash blake3_256
"""

import argparse
import logging
import sys
import time

from primitives.hashing import HashFunction
from protocol.errors import ProverError, VerifierError
from padovan import get_example
from padovan.example import ExampleOptions

logger = logging.getLogger("padovan")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="padovan",
        description="Generate and verify a STARK proof of the Padovan sequence",
    )
    parser.add_argument(
        "-n", "--sequence-length",
        type=int,
        default=1536,
        help="Number of terms to compute; a multiple of 3 with n/3 a power of 2",
    )
    parser.add_argument(
        "--hash",
        type=HashFunction,
        choices=list(HashFunction),
        default=HashFunction.BLAKE3_256,
        metavar="{" + ",".join(h.value for h in HashFunction) + "}",
        help="Hash function for commitments and the transcript",
    )
    parser.add_argument("-q", "--queries", type=int, default=None, help="Number of queries")
    parser.add_argument("-b", "--blowup", type=int, default=None, help="Blowup factor")
    parser.add_argument("-g", "--grinding", type=int, default=16, help="Grinding factor in bits")
    parser.add_argument(
        "-e", "--field-extension",
        type=int,
        choices=[1, 2, 3],
        default=1,
        help="Degree of the field extension challenges are drawn from",
    )
    parser.add_argument("-f", "--folding", type=int, default=8, help="FRI folding factor")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log prover and verifier timings")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    options = ExampleOptions(
        hash_fn=args.hash,
        num_queries=args.queries,
        blowup_factor=args.blowup,
        grinding_factor=args.grinding,
        field_extension=args.field_extension,
        folding_factor=args.folding,
    )

    try:
        example = get_example(options, args.sequence_length)
    except ValueError as e:
        logger.error("Error: %s", e)
        return 2

    logger.info("============================================================")
    now = time.perf_counter()
    try:
        proof = example.prove()
    except ProverError as e:
        logger.error("Proof generation failed: %s", e)
        return 1
    logger.info("Proof generated in %d ms", (time.perf_counter() - now) * 1000)
    logger.info("Proof size: %.1f KB", len(proof.to_bytes()) / 1024)

    logger.info("------------------------------------------------------------")
    now = time.perf_counter()
    try:
        example.verify(proof)
    except VerifierError as e:
        logger.error("Failed to verify proof: %s", e)
        return 1
    logger.info("Proof verified in %.1f ms", (time.perf_counter() - now) * 1000)

    try:
        example.verify_with_wrong_inputs(proof)
    except VerifierError:
        logger.info("Proof rejected for wrong public inputs, as expected")
    else:
        logger.error("Proof verified against wrong public inputs")
        return 1
    logger.info("============================================================")
    return 0


if __name__ == "__main__":
    sys.exit(main())
