from ..finite_fields.bn254 import Fq
from ..polynomials.multilinear import MultilinearPolynomial
from .oracle import DirectOracle, PolynomialOracle


def test_direct_oracle() -> None:
    polynomial = MultilinearPolynomial(Fq, [Fq.from_int(x) for x in [0, 0, 3, 8]])
    oracle = DirectOracle(polynomial)
    assert isinstance(oracle, PolynomialOracle)
    assert oracle.variables == 2
    assert oracle.commit() == polynomial.convert_to_bytes()

    point = [Fq.random(), Fq.random()]
    assert oracle.query(point) == polynomial.evaluate(point)
    assert oracle.query([Fq.one(), Fq.one()]) == Fq.from_int(8)
