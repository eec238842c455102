"""
Various function programming tools.
"""
import logging
from functools import reduce
from typing import *

from .exceptions import ParamError


def identity(x):
    return x


class Composition:
    """
    Composed function kept as a flat tuple of `stages` in the order of application.
    The first stage gets all call arguments, every other stage the result of the previous one.
    Calling runs a loop, so the stack depth does not grow with the number of stages.
    """
    def __init__(self, stages: Tuple[Callable, ...]):
        self.stages = stages

    def __call__(self, *args, **kwargs):
        stages = iter(self.stages)
        result = next(stages)(*args, **kwargs)
        for f in stages:
            result = f(result)
        return result


def _stages(f):
    if f is identity:
        return ()
    if isinstance(f, Composition):
        return f.stages
    return (f,)


def compose_left(outer: Callable, inner: Callable) -> Callable:
    """
    Return composition of two functions:
    compose_left(f, g)(any args) is equivalent to f(g(any args))

    No checks are done here, a wrong argument count fails when the composition is called.
    """
    stages = _stages(inner) + _stages(outer)
    return Composition(stages or (identity,))


def compose_right(first: Callable, second: Callable) -> Callable:
    """
    Same as compose_left with swapped arguments, the `first` is applied first:
    compose_right(f, g)(any args) is equivalent to g(f(any args))
    """
    return compose_left(second, first)


def _flatten(items, idx):
    for i, item in enumerate(items):
        item_idx = (*idx, i)
        if callable(item):
            yield item
        elif isinstance(item, (str, bytes)) or not isinstance(item, Iterable):
            raise ParamError("Element at index {} of type {}, expected callable.".format(item_idx, type(item)),
                             index=item_idx)
        else:
            yield from _flatten(item, item_idx)


def flatten(functions: Iterable) -> Tuple[Callable, ...]:
    """
    Flatten nested sequences of functions into a single tuple, keeping the order.
    flatten([a, [b, (c,)], d]) == (a, b, c, d)
    Callables are never expanded, any other element raises ParamError with its position.
    """
    if isinstance(functions, (str, bytes)) or not isinstance(functions, Iterable):
        raise ParamError("Expected a sequence of callables, get {}.".format(type(functions)), index=())
    return tuple(_flatten(functions, ()))


def compose(*functions) -> Callable:
    """
    Return composition of functions:
    compose(A,B,C)(any args) is equivalent to A(B(C(any args))

    Functions can be given also as (nested) lists:
    compose(A, B, C) == compose([A, B, C]) == compose([A, B], C)
    Empty composition is the identity.

    Useful for functional programming and dependency injection.
    """
    functions = flatten(functions)
    logging.debug(f"compose: {len(functions)} functions")
    # The accumulated composition is always the outer one, so the last function is applied first.
    return reduce(compose_left, functions, identity)


def pipe(*functions) -> Callable:
    """
    Composition in the pipeline order:
    pipe(A,B,C)(any args) is equivalent to C(B(A(any args))

    Accepts the same arguments as `compose`.
    """
    functions = flatten(functions)
    logging.debug(f"pipe: {len(functions)} functions")
    return reduce(compose_right, functions, identity)
