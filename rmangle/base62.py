"""Base-62 integers as used by the v0 mangling scheme.

The alphabet is ``0-9``, ``a-z``, ``A-Z``. Every number is terminated by
``_``, and the value is shifted down by one before it is written so that 0
costs a single character:

    0    -> "_"
    1    -> "0_"
    11   -> "a_"
    62   -> "Z_"
    63   -> "10_"
    1000 -> "g7_"

Python integers are unbounded, so crate hashes larger than 64 bits encode
the same way.
"""

from rmangle.emit import Emitter
from rmangle.exc import InvalidArgument

CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _check_non_negative(x: int) -> None:
    # bool is an int subclass, but True/False is never a meaningful count
    if isinstance(x, bool) or not isinstance(x, int):
        raise InvalidArgument(f"expected a non-negative integer, got {x!r}")
    if x < 0:
        raise InvalidArgument(f"expected a non-negative integer, got {x}")


def to_base_62(x: int) -> str:
    """Digits of ``x`` in base 62, most significant first, with no terminator."""
    _check_non_negative(x)
    if x == 0:
        return CHARS[0]
    digits = []
    while x > 0:
        x, digit = divmod(x, 62)
        digits.append(CHARS[digit])
    return "".join(reversed(digits))


def push_integer_62(x: int, out: Emitter) -> None:
    _check_non_negative(x)
    if x > 0:
        out.emit(to_base_62(x - 1))
    out.emit("_")


def push_opt_integer_62(tag: str, x: int, out: Emitter) -> None:
    """Push ``tag`` followed by ``x - 1``, or nothing at all when ``x`` is 0."""
    _check_non_negative(x)
    if x > 0:
        out.emit(tag)
        push_integer_62(x - 1, out)


def encode_integer_62(x: int) -> str:
    out = Emitter()
    push_integer_62(x, out)
    return out.get()
