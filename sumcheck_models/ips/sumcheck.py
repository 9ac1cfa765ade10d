from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..finite_fields.prime_field import PrimeFieldElem
from ..polynomials.multilinear import MultilinearPolynomial
from ..transcript.fiat_shamir import Transcript
from ..utils.utils import decode_u64, encode_u64
from .oracle import DirectOracle

F = TypeVar("F", bound=PrimeFieldElem)

logger = logging.getLogger(__name__)


class SumcheckVerificationError(Exception):
    """A sumcheck proof was rejected. `Verifier.verify` reports every subclass as a plain False."""


class ProofShapeError(SumcheckVerificationError):
    pass


class RoundConsistencyError(SumcheckVerificationError):
    pass


class OracleMismatchError(SumcheckVerificationError):
    pass


@dataclass(frozen=True)
class SumcheckProof(Generic[F]):
    initial_claimed_sum: F
    initial_poly: MultilinearPolynomial[F]
    round_polynomials: tuple[MultilinearPolynomial[F], ...]

    def to_bytes(self) -> bytes:
        # claimed sum ‖ initial polynomial ‖ u64 round count ‖ round polynomials, each polynomial length-prefixed.
        parts = [bytes(self.initial_claimed_sum), self.initial_poly.convert_to_bytes()]
        parts.append(encode_u64(len(self.round_polynomials)))
        parts.extend(round_polynomial.convert_to_bytes() for round_polynomial in self.round_polynomials)
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, field: type[F], data: bytes) -> SumcheckProof[F]:
        width = field.field.bytes_len
        if len(data) < width:
            raise ValueError("unexpected end of data while reading the claimed sum")
        initial_claimed_sum = field.from_bytes(data[:width])
        initial_poly, offset = MultilinearPolynomial.decode(field, data, width)
        rounds, offset = decode_u64(data, offset)
        round_polynomials = []
        for _ in range(rounds):
            round_polynomial, offset = MultilinearPolynomial.decode(field, data, offset)
            round_polynomials.append(round_polynomial)
        if offset != len(data):
            raise ValueError(f"{len(data) - offset} trailing bytes after encoded proof")
        return cls(initial_claimed_sum, initial_poly, tuple(round_polynomials))


class Prover(Generic[F]):
    """
    Non-interactive sumcheck prover for a single multilinear polynomial, given by its evaluations on the hypercube.

    Round i sends the univariate restriction [gᵢ(0), gᵢ(1)] of the running polynomial to its leading variable,
    then folds that variable at the transcript's challenge rᵢ. After ν rounds the running polynomial is the constant
    g(r₀, …, r_{ν - 1}), which is exactly what the verifier's oracle check recomputes.
    """

    def __init__(self, field: type[F], evaluations: Sequence[F], transcript: Transcript | None = None) -> None:
        self.field = field
        self.initial_poly = MultilinearPolynomial(field, evaluations)  # raises on a non-power-of-two table.
        self.initial_claimed_sum = self.initial_poly.sum()
        self.oracle = DirectOracle(self.initial_poly)
        self.transcript = transcript if transcript is not None else Transcript()
        self.round_polynomials: list[MultilinearPolynomial[F]] = []
        self.challenges: list[F] = []
        self.round = 0

    def prove(self) -> SumcheckProof[F]:
        assert self.round == 0, "a prover runs exactly once"
        self.transcript.append(self.oracle.commit())
        self.transcript.append_field_element(self.initial_claimed_sum)

        current_polynomial = self.initial_poly
        for _ in range(self.initial_poly.variables):
            round_polynomial = current_polynomial.round_polynomial()
            self.transcript.append(round_polynomial.convert_to_bytes())
            self.round_polynomials.append(round_polynomial)

            challenge = self.transcript.random_challenge_as_field_element(self.field)
            self.challenges.append(challenge)
            logger.debug("prover round %d: sent %r, challenge %r", self.round, round_polynomial, challenge)

            current_polynomial = current_polynomial.partial_evaluate(challenge)
            self.round += 1

        # current_polynomial is now the constant initial_poly(challenges); the verifier gets it from the oracle.
        return SumcheckProof(self.initial_claimed_sum, self.initial_poly, tuple(self.round_polynomials))


class Verifier(Generic[F]):
    def __init__(self, field: type[F], transcript: Transcript | None = None) -> None:
        self.field = field
        self.transcript = transcript if transcript is not None else Transcript()
        self.challenges: list[F] = []
        self.used = False

    def check(self, proof: SumcheckProof[F]) -> None:
        """Replays the prover's transcript and raises a SumcheckVerificationError at the first failed check."""
        assert not self.used, "a verifier runs exactly once"
        self.used = True

        if (
            type(proof.initial_claimed_sum) is not self.field
            or proof.initial_poly.field is not self.field
            or any(round_polynomial.field is not self.field for round_polynomial in proof.round_polynomials)
        ):
            raise ProofShapeError(f"proof is not over {self.field.__name__}")
        if len(proof.round_polynomials) != proof.initial_poly.variables:
            raise ProofShapeError(
                f"{len(proof.round_polynomials)} round polynomials for {proof.initial_poly.variables} variables"
            )
        if any(round_polynomial.variables != 1 for round_polynomial in proof.round_polynomials):
            raise ProofShapeError("every round polynomial must be univariate")

        oracle = DirectOracle(proof.initial_poly)
        current_claim = proof.initial_claimed_sum
        self.transcript.append(oracle.commit())
        self.transcript.append_field_element(current_claim)

        zero = [self.field.zero()]
        one = [self.field.one()]
        for i, round_polynomial in enumerate(proof.round_polynomials):
            if round_polynomial.evaluate(zero) + round_polynomial.evaluate(one) != current_claim:
                raise RoundConsistencyError(f"round {i}: g(0) + g(1) does not match the running claim")

            self.transcript.append(round_polynomial.convert_to_bytes())
            challenge = self.transcript.random_challenge_as_field_element(self.field)
            self.challenges.append(challenge)
            current_claim = round_polynomial.evaluate([challenge])
            logger.debug("verifier round %d: challenge %r, claim %r", i, challenge, current_claim)

        if oracle.query(self.challenges) != current_claim:
            raise OracleMismatchError("initial polynomial does not evaluate to the final claim")

    def verify(self, proof: SumcheckProof[F]) -> bool:
        try:
            self.check(proof)
        except SumcheckVerificationError as e:
            logger.debug("sumcheck proof rejected: %s", e)
            return False
        return True
