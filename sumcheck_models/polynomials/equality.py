from typing import TypeVar

from sumcheck_models.finite_fields.finite_field import FiniteFieldElem

F = TypeVar("F", bound=FiniteFieldElem)


def eq(field: type[F], x: F, y: F) -> F:
    """
    Evaluation of the multilinear polynomial which indicates the condition x == y.
    """
    return x * y + (field.one() - x) * (field.one() - y)


class EqualityIndicator:
    def __init__(self, field: type[F], v: int) -> None:
        """Constructs an equality indicator polynomial.

        Variable 0 is the most significant bit of a hypercube index, matching the layout of evaluation tables.

        :param field: the field
        :param v: number of variables
        """
        self.field = field
        self.v = v

    def evaluate_at_point(self, x: list[F], y: list[F]) -> F:
        """Evaluates the equality indicator polynomial at a point."""
        # O(ν)-time alg
        assert len(x) == self.v
        assert len(y) == self.v
        value = self.field.one()
        for k in range(self.v):
            value *= eq(self.field, x[k], y[k])
        return value

    def evaluate_over_hypercube(self, r: list[F]) -> list[F]:
        """Evaluates the equality indicator polynomial over the entire hypercube."""
        assert len(r) == self.v
        array = [self.field.one()]
        for k in range(self.v):
            # appending a less-significant bit: entry i splits into 2i (bit 0) and 2i + 1 (bit 1).
            expanded = []
            for value in array:
                high = value * r[k]
                expanded.append(value - high)
                expanded.append(high)
            array = expanded
        return array


def evaluate_multilinear_extension(indicator: EqualityIndicator, f: list[F], r: list[F]) -> F:
    assert len(f) == 1 << indicator.v
    array = indicator.evaluate_over_hypercube(r)
    return sum((f[i] * array[i] for i in range(1 << indicator.v)), indicator.field.zero())
