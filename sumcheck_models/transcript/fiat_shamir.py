from __future__ import annotations

from hashlib import shake_256
from typing import TypeVar

from sumcheck_models.finite_fields.prime_field import PrimeFieldElem

from ..utils.utils import encode_u64

F = TypeVar("F", bound=PrimeFieldElem)

# extra bytes squeezed per field challenge, so that reducing modulo p is biased by less than 2⁻¹²⁸.
CHALLENGE_SECURITY_BYTES = 16


class Transcript:
    """Fiat–Shamir transcript.

    The transcript is an append-only byte log, held as a running shake-256 sponge. Challenges are a deterministic
    function of everything absorbed so far; every challenge is itself absorbed once squeezed, so two consecutive
    challenges never coincide. A prover and a verifier that absorb the same bytes in the same order derive the same
    challenges without ever sharing a transcript object.
    """

    def __init__(self, label: bytes = b"") -> None:
        self._state = shake_256()
        self.absorbed = 0  # total bytes in the log, challenges included.
        if label:
            # length-prefixed, so the label cannot run on into the first appended message.
            self.append(encode_u64(len(label)) + label)

    def append(self, data: bytes) -> None:
        # raw absorption, no framing: callers hand in self-delimiting encodings.
        self._state.update(data)
        self.absorbed += len(data)

    def append_field_element(self, elem: PrimeFieldElem) -> None:
        self.append(bytes(elem))

    def challenge_bytes(self, length: int) -> bytes:
        if length <= 0:
            raise ValueError("length must be positive")
        output = self._state.copy().digest(length)
        self.append(output)
        return output

    def random_challenge_as_field_element(self, field: type[F]) -> F:
        return field.from_bytes_mod_order(self.challenge_bytes(field.field.bytes_len + CHALLENGE_SECURITY_BYTES))

    def copy(self) -> Transcript:
        clone = Transcript()
        clone._state = self._state.copy()
        clone.absorbed = self.absorbed
        return clone
