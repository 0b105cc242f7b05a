"""
Exceptions raised by pyoptic.

Absence of a focus is never an error; these only signal a path that
cannot make sense for the values or arguments it was built from.
"""


class OpticError(TypeError):
    """
    An optic was built or applied in a way its kind does not allow,
    e.g. `get` through a partial optic or composing with a non-optic.
    """


class UnsupportedContainerError(OpticError):
    """
    A value along a path cannot act as a container (or the active
    fallback policy refuses to rebuild it).
    """
    def __init__(self, value: object, reason: str = ""):
        self.value = value
        message = f"{type(value).__name__} cannot be used as a container"
        super().__init__(f"{message}: {reason}" if reason else message)
