"""Exceptions raised by proof generation and verification."""


class InvalidArgumentError(ValueError):
    """Caller-supplied input is outside the domain of an operation."""


class ProverError(Exception):
    """Proof generation could not complete."""


class VerifierError(Exception):
    """A proof was rejected. The message names the check that failed."""
