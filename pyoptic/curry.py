from functools import wraps
from typing import Callable


def curry_n(f: Callable) -> Callable:
    """
    Curry any function f of N positional arguments.
    Arguments may be supplied one at a time or several at once:
    curried(a)(b)(c) == curried(a, b)(c) == curried(a, b, c)
    """
    arity = f.__code__.co_argcount

    @wraps(f)
    def curried(*args):
        if len(args) >= arity:
            return f(*args)
        return lambda *more: curried(*args, *more)
    return curried
