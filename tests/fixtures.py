"""
Common code for tests.
"""

years = [2021, 2021, 2022, 2023]


def unique(items):
    """
    Remove duplicates, keep order of the first occurrence.
    """
    return list(dict.fromkeys(items))


def length(items):
    return len(items)


def to_string(x):
    return str(x)


def inc(x):
    return x + 1


def double(x):
    return 2 * x


def square(x):
    return x * x


def add(a, b):
    return a + b


class Recorder:
    """
    Callable recording the order of calls, passes the value through.
    """
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def __call__(self, x):
        self.log.append(self.name)
        return x
