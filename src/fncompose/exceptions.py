"""
Exceptions of the composition tools.
"""


class ParamError(TypeError):
    """
    Invalid element passed to a composer, e.g. compose(len, 3).
    `index` is the position of the element in the (possibly nested) input.
    """
    def __init__(self, msg, index=()):
        super().__init__(msg)
        self.index = index


class ConfigError(ValueError):
    pass
