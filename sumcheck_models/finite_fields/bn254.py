# (C) 2024 Irreducible Inc.

from .prime_field import PrimeFieldElem, PrimeFieldGalois, PrimeFieldNative

BN254_BASE_MODULUS = 21888242871839275222246405745257275088696311157297823662689037894645226208583
BN254_SCALAR_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617

# multiplicative generators, as used by arkworks for these two fields.
BN254_BASE_GENERATOR = 3
BN254_SCALAR_GENERATOR = 5


class Fq(PrimeFieldElem[int]):  # BN254 base field.
    field = PrimeFieldNative(BN254_BASE_MODULUS)


class Fr(PrimeFieldElem[int]):  # BN254 scalar field.
    field = PrimeFieldNative(BN254_SCALAR_MODULUS)


class FqGalois(PrimeFieldElem):  # same field as `Fq`, elements held as galois arrays.
    field = PrimeFieldGalois(BN254_BASE_MODULUS, BN254_BASE_GENERATOR)
