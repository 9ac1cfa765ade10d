# (C) 2024 Irreducible Inc.

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from random import randrange
from typing import ClassVar, Self, TypeVar

from galois import GF, FieldArray

from .finite_field import FiniteField, FiniteFieldElem

R = TypeVar("R")
RR = TypeVar("RR")


class PrimeFieldElem(FiniteFieldElem[R]):
    field: ClassVar[PrimeField]

    @classmethod
    def max(cls) -> Self:
        return cls(cls.field.max())

    @classmethod
    def from_bytes_mod_order(cls, serialized: bytes) -> Self:
        """Interprets arbitrary-length big-endian bytes as an integer and reduces it modulo p."""
        return cls.from_int(int.from_bytes(serialized, byteorder="big"))

    def to_int(self) -> int:
        return self.field.to_int(self.value)

    def __int__(self) -> int:
        return self.to_int()


class PrimeField(FiniteField[R], ABC):
    """A subclass of FiniteField representing fields with prime order by a single integer.

    Elements serialize canonically as big-endian integers of a fixed width, `bytes_len` bytes.
    """

    def __init__(self, prime: int):
        self.p = prime
        self.bitlen = self.p.bit_length()
        hexlen = (self.bitlen + 3) // 4
        self.fmt = f"{{:#0{hexlen + 2:d}x}}"

    @property
    def characteristic(self) -> int:
        return self.p

    @property
    def dimension(self) -> int:
        return 1

    @property
    def prime(self) -> int:
        return self.p

    @property
    def bytes_len(self) -> int:
        return (self.bitlen + 7) // 8

    def max(self) -> R:
        return self.from_int(self.p - 1)

    def random(self) -> R:
        return self.from_int(randrange(0, self.p))

    @abstractmethod
    def to_int(self, elem: R) -> int:
        """Converts from a field element to an integer in the range [0, p)"""
        pass

    def format_str(self, elem: R) -> str:
        return str(self.to_int(elem))

    def format_repr(self, elem: R) -> str:
        return self.fmt.format(self.to_int(elem))

    def to_bytes(self, elem: R) -> bytes:
        return self.to_int(elem).to_bytes(self.bytes_len, byteorder="big")

    def from_bytes(self, serialized: bytes) -> R:
        if len(serialized) != self.bytes_len:
            raise ValueError(f"serialized element must be {self.bytes_len} bytes")
        val = int.from_bytes(serialized, byteorder="big")
        if val >= self.p:
            raise ValueError("serialized element is not reduced modulo the field prime")
        return self.from_int(val)

    def convert_repr(self, elem: R, field: FiniteField[RR]) -> RR:
        if not self.is_isomorphic(field):
            raise ValueError("cannot convert to non-isomorphic field")
        return field.from_int(self.to_int(elem))


class PrimeFieldNative(PrimeField[int]):
    """Elements are Python ints in [0, p)."""

    def add(self, left: int, right: int) -> int:
        return (left + right) % self.p

    def subtract(self, left: int, right: int) -> int:
        return (left - right) % self.p

    def negate(self, operand: int) -> int:
        return -operand % self.p

    def multiply(self, left: int, right: int) -> int:
        return (left * right) % self.p

    def pow(self, base: int, exponent: int) -> int:
        return pow(base, exponent, self.p)

    def inverse(self, operand: int) -> int:
        if operand == 0:
            raise ZeroDivisionError("cannot invert zero")
        return pow(operand, -1, self.p)

    def from_int(self, val: int) -> int:
        return val % self.p

    def to_int(self, elem: int) -> int:
        return elem


class PrimeFieldGalois(PrimeField[FieldArray]):
    """Elements are 0-dimensional `galois` field arrays over GF(p).

    The galois class is built on first use; for large primes its construction is only cheap when the primitive
    element is supplied up front, since otherwise galois has to factor p - 1 to find one.
    """

    def __init__(self, prime: int, primitive_element: int):
        super().__init__(prime)
        self.primitive_element = primitive_element

    @cached_property
    def gf(self) -> type[FieldArray]:
        return GF(self.p, primitive_element=self.primitive_element, verify=False)

    def add(self, left: FieldArray, right: FieldArray) -> FieldArray:
        return left + right

    def subtract(self, left: FieldArray, right: FieldArray) -> FieldArray:
        return left - right

    def negate(self, operand: FieldArray) -> FieldArray:
        return -operand

    def multiply(self, left: FieldArray, right: FieldArray) -> FieldArray:
        return left * right

    # exponents go through python ints; galois power ufuncs want machine-sized exponents.
    def pow(self, base: FieldArray, exponent: int) -> FieldArray:
        return self.gf(pow(int(base), exponent, self.p))

    def inverse(self, operand: FieldArray) -> FieldArray:
        if int(operand) == 0:
            raise ZeroDivisionError("cannot invert zero")
        return self.gf(pow(int(operand), -1, self.p))

    def from_int(self, val: int) -> FieldArray:
        return self.gf(val % self.p)

    def to_int(self, elem: FieldArray) -> int:
        return int(elem)
