from functools import wraps
from time import perf_counter
import logging

__report_indent_level = 0


class catch_time:
    """
    Measure wall time of the block, `t` is the duration in seconds.
    Usage:
    with catch_time() as t:
        ...
    logging.info(f"... time: {t}")
    """
    def __enter__(self):
        self.t = 0.0
        self._start = perf_counter()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.t = perf_counter() - self._start

    def __str__(self):
        return f"{self.t:.4f} s"


def report(fn):
    """
    Log duration of every call of `fn` to logging.info.
    Nested reported calls are indented. Failed calls are not logged.
    """
    @wraps(fn)
    def do_report(*args, **kwargs):
        global __report_indent_level
        __report_indent_level += 1
        try:
            with catch_time() as t:
                result = fn(*args, **kwargs)
        finally:
            __report_indent_level -= 1
        indent = (__report_indent_level * 2) * " "
        name = f"{getattr(fn, '__module__', None)}.{getattr(fn, '__name__', repr(fn))}"
        logging.info(f"{indent}DONE {name} @ {t}")
        return result
    return do_report
