# (C) 2024 Irreducible Inc.

from typing import TypeVar

from hypothesis import strategies as st

from sumcheck_models.finite_fields.prime_field import PrimeFieldElem

F = TypeVar("F", bound=PrimeFieldElem)


def random_integers_strategy(
    min_value: int,
    max_value: int,
) -> st.SearchStrategy[int]:
    return st.builds(lambda rng: rng.randint(min_value, max_value), st.randoms(use_true_random=True))


def field_elements_strategy(field: type[F]) -> st.SearchStrategy[F]:
    # small values and values near p are where reduction bugs live; st.integers already favours both ends.
    return st.integers(0, field.field.prime - 1).map(field.from_int)


def evaluation_tables_strategy(field: type[F], min_vars: int = 0, max_vars: int = 5) -> st.SearchStrategy[list[F]]:
    return st.integers(min_vars, max_vars).flatmap(
        lambda v: st.lists(field_elements_strategy(field), min_size=1 << v, max_size=1 << v)
    )


def points_strategy(field: type[F], v: int) -> st.SearchStrategy[list[F]]:
    return st.lists(field_elements_strategy(field), min_size=v, max_size=v)
