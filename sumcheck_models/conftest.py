# (C) 2024 Irreducible Inc.

import functools
import pathlib
import types
from typing import Callable, Iterable

import pytest


def pytest_pycollect_makemodule(module_path: pathlib.Path, parent) -> pytest.Module | None:
    """
    Collects test modules, expanding functions marked with @pytest.mark.parametrize_hypothesis.

    Args:
        module_path (pathlib.Path): path of the module being collected
        parent: the collector that owns the module

    Returns:
        pytest.Module: Created module, or None to leave package collection to pytest.
    """
    if module_path.name == "__init__.py":
        return None
    mod: pytest.Module = pytest.Module.from_parent(parent, path=module_path)
    expand_parametrize_hypothesis(mod)
    return mod


def expand_parametrize_hypothesis(mod: pytest.Module) -> None:
    """
    Replaces every test marked @pytest.mark.parametrize_hypothesis(name=[decorators...], ...) by one copy per keyword:
    the copy is named `<test>_<name>`, decorated with the listed hypothesis decorators and marked @pytest.mark.<name>.

    Typical use is a `slow` variant running the full hypothesis search and a `fast` variant running a single example,
    so `-m fast` gives a quick smoke run of the same test body.

    Args:
        mod (pytest.Module): pytest module
    """
    marked = {
        name: obj
        for name, obj in list(getattr(mod.obj, "__dict__", {}).items())
        if callable(obj) and any(mark.name == "parametrize_hypothesis" for mark in getattr(obj, "pytestmark", []))
    }

    for test_func_name, test_func in marked.items():
        delattr(mod.obj, test_func_name)
        mark: pytest.Mark = next(m for m in test_func.pytestmark if m.name == "parametrize_hypothesis")

        if mark.args:
            raise ValueError(
                f"@pytest.mark.parametrize_hypothesis for '{mod.name}.{test_func_name}' only takes keyword arguments"
            )

        for variant, decorators in mark.kwargs.items():
            if not isinstance(decorators, (list, tuple)) or not all(callable(d) for d in decorators):
                raise ValueError(
                    f"@pytest.mark.parametrize_hypothesis for '{mod.name}.{test_func_name}': "
                    + f"value for '{variant}' must be a list of decorators, got {decorators!r}"
                )
            new_name = f"{test_func_name}_{variant}"
            new_test_func = getattr(pytest.mark, variant)(copy_with_decorators(test_func, new_name, decorators))
            setattr(mod.obj, new_name, new_test_func)


def copy_with_decorators(test_func: Callable, new_name: str, decorators: Iterable[Callable]) -> Callable:
    """
    Copies a test function under a new name and applies the given decorators to the copy.

    The remaining pytest marks (eg. parametrize) travel along through functools.update_wrapper, but the
    parametrize_hypothesis mark itself is dropped so the copy is not expanded again.
    """
    new_test_func = types.FunctionType(
        code=test_func.__code__,
        globals=test_func.__globals__,
        name=new_name,
        argdefs=test_func.__defaults__,
        closure=test_func.__closure__,
    )
    new_test_func = functools.update_wrapper(new_test_func, test_func)
    new_test_func.__name__ = new_name
    new_test_func.pytestmark = [m for m in test_func.pytestmark if m.name != "parametrize_hypothesis"]
    for decorator in decorators:
        new_test_func = decorator(new_test_func)
    return new_test_func
