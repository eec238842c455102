"""
Operator syntax for the function composition.
"""
from typing import *
import attrs

from .fn import compose_left, compose_right


def _unwrap(f):
    # Composable operands are replaced by the wrapped function, so chains stay flat.
    return f.fn if isinstance(f, Composable) else f


@attrs.define(eq=False)
class Composable:
    """
    Wrapper of a callable providing composition operators:

        (f @ g)(x) == f(g(x))       # compose_left, `g` is applied first
        (f >> g)(x) == g(f(x))      # compose_right, `f` is applied first

    It is enough that one of the operands is Composable, e.g.

        to_str = Composable(str)
        count_unique = to_str @ len @ set
        count_unique = Composable(set) >> len >> str

    The result is Composable again. Instances are hashable by identity, as plain functions are.
    """
    fn: Callable = attrs.field(validator=attrs.validators.is_callable())

    def __call__(self, *args, **kwargs):
        return self.fn(*args, **kwargs)

    def __matmul__(self, other):
        if not callable(other):
            return NotImplemented
        return Composable(compose_left(self.fn, _unwrap(other)))

    def __rmatmul__(self, other):
        if not callable(other):
            return NotImplemented
        return Composable(compose_left(_unwrap(other), self.fn))

    def __rshift__(self, other):
        if not callable(other):
            return NotImplemented
        return Composable(compose_right(self.fn, _unwrap(other)))

    def __rrshift__(self, other):
        if not callable(other):
            return NotImplemented
        return Composable(compose_right(_unwrap(other), self.fn))


# decorator form:
# @composable
# def f(x): ...
composable = Composable
