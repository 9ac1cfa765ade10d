from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from sumcheck_models.finite_fields.finite_field import FiniteFieldElem

from ..utils.utils import decode_u64, encode_u64, is_power_of_two, log2_exact
from .equality import EqualityIndicator, evaluate_multilinear_extension

F = TypeVar("F", bound=FiniteFieldElem)


def linearly_interpolate(points: tuple[F, F], r: F) -> F:
    return points[0] + (points[1] - points[0]) * r


def partially_evaluate(evaluations: Sequence[F], r: F) -> list[F]:
    # fixes variable 0, ie. the most-significant index bit. entries i and i + half differ only in that bit.
    assert len(evaluations) >= 2 and is_power_of_two(len(evaluations))
    half = len(evaluations) >> 1
    return [linearly_interpolate((evaluations[i], evaluations[half | i]), r) for i in range(half)]


def split_and_reduce(field: type[F], evaluations: Sequence[F]) -> list[F]:
    # [p(0), p(1)]: the leading variable fixed to 0 resp. 1, every other variable summed over the cube.
    assert len(evaluations) >= 2 and is_power_of_two(len(evaluations))
    half = len(evaluations) >> 1
    return [sum(evaluations[:half], field.zero()), sum(evaluations[half:], field.zero())]


class MultilinearPolynomial(Generic[F]):
    """
    A multilinear polynomial in ν variables, given by its 2ᵛ values on the boolean hypercube.

    evaluations[i] is the value at the point whose coordinates are the bits of i, most-significant bit first; so the
    first half of the table is where variable 0 is 0 and the second half is where it is 1. The table is never modified;
    operations that shrink the polynomial return a new instance.
    """

    def __init__(self, field: type[F], evaluations: Sequence[F]) -> None:
        if not is_power_of_two(len(evaluations)):
            raise ValueError(f"number of evaluations must be a power of two, got {len(evaluations)}")
        self.field = field
        self.evaluations: tuple[F, ...] = tuple(evaluations)
        self.variables = log2_exact(len(evaluations))

    def __len__(self) -> int:
        return len(self.evaluations)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MultilinearPolynomial):
            return NotImplemented
        return self.field is other.field and self.evaluations == other.evaluations

    def __repr__(self) -> str:
        return f"MultilinearPolynomial({self.field.__name__}, {list(self.evaluations)!r})"

    def sum(self) -> F:
        return sum(self.evaluations, self.field.zero())

    def evaluate(self, point: Sequence[F]) -> F:
        assert len(point) == self.variables, f"arguments: {len(point)}, variables: {self.variables}"
        indicator = EqualityIndicator(self.field, self.variables)
        return evaluate_multilinear_extension(indicator, list(self.evaluations), list(point))

    def partial_evaluate(self, r: F) -> MultilinearPolynomial[F]:
        """Fixes the leading variable to `r`, returning a polynomial in one fewer variable."""
        assert self.variables > 0, "cannot partially evaluate a constant polynomial"
        return MultilinearPolynomial(self.field, partially_evaluate(self.evaluations, r))

    def round_polynomial(self) -> MultilinearPolynomial[F]:
        """Returns the univariate restriction to the leading variable, summed over all other variables."""
        assert self.variables > 0, "a constant polynomial has no round polynomial"
        return MultilinearPolynomial(self.field, split_and_reduce(self.field, self.evaluations))

    def convert_to_bytes(self) -> bytes:
        # u64 entry count, then each entry in its canonical fixed-width encoding.
        return encode_u64(len(self.evaluations)) + b"".join(bytes(value) for value in self.evaluations)

    def __bytes__(self) -> bytes:
        return self.convert_to_bytes()

    @classmethod
    def decode(cls, field: type[F], data: bytes, offset: int = 0) -> tuple[MultilinearPolynomial[F], int]:
        """Parses one encoded polynomial starting at `offset`; returns it with the offset just past it."""
        length, offset = decode_u64(data, offset)
        if not is_power_of_two(length):
            raise ValueError(f"encoded polynomial length {length} is not a power of two")
        width = field.field.bytes_len
        end = offset + length * width
        if end > len(data):
            raise ValueError("unexpected end of data while reading polynomial evaluations")
        evaluations = [field.from_bytes(data[i : i + width]) for i in range(offset, end, width)]
        return cls(field, evaluations), end

    @classmethod
    def from_bytes(cls, field: type[F], data: bytes) -> MultilinearPolynomial[F]:
        polynomial, offset = cls.decode(field, data)
        if offset != len(data):
            raise ValueError(f"{len(data) - offset} trailing bytes after encoded polynomial")
        return polynomial
