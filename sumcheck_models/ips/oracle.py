from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from ..finite_fields.finite_field import FiniteFieldElem
from ..polynomials.multilinear import MultilinearPolynomial

F = TypeVar("F", bound=FiniteFieldElem)


class PolynomialOracle(ABC, Generic[F]):
    """Access to the sumcheck's initial polynomial: a commitment to absorb, and evaluations at arbitrary points."""

    @property
    @abstractmethod
    def variables(self) -> int:
        pass

    @abstractmethod
    def commit(self) -> bytes:
        pass

    @abstractmethod
    def query(self, point: Sequence[F]) -> F:
        pass


class DirectOracle(PolynomialOracle[F]):
    # the "commitment" is the whole table, and queries are answered by evaluating it in the clear.
    # there is no hiding or binding here; whoever holds this oracle holds the polynomial.

    def __init__(self, polynomial: MultilinearPolynomial[F]) -> None:
        self.polynomial = polynomial

    @property
    def variables(self) -> int:
        return self.polynomial.variables

    def commit(self) -> bytes:
        return self.polynomial.convert_to_bytes()

    def query(self, point: Sequence[F]) -> F:
        return self.polynomial.evaluate(point)
