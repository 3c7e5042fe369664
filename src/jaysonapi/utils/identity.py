import collections.abc
import math
import numbers
import typing

from ..serde.models import Missing


def _is_number(value: typing.Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _to_number(value: str) -> typing.Optional[numbers.Number]:
    """
    Reads a string the way a numeric comparison does, or returns ``None`` if it
    does not denote a finite number.
    """
    s = value.strip()
    if not s or "_" in s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def _canonical_int(value: str) -> typing.Optional[int]:
    try:
        i = int(value)
    except ValueError:
        return None
    return i if str(i) == value else None


def identity_key(value: typing.Any) -> typing.Hashable:
    """
    Normalises an identifier into a hashable key for deduplication.

    Numbers are keyed by value (``3 == 3.0``), and so are strings spelling an
    integer in canonical form (``"3"``). Any other string is keyed as itself, so
    ``"007"`` and ``"7"`` stay distinct. Booleans never collide with numbers.
    """
    if isinstance(value, bool):
        return ("bool", value)
    if _is_number(value):
        if isinstance(value, float) and value.is_integer():
            return ("number", int(value))
        return ("number", value)
    if isinstance(value, str):
        i = _canonical_int(value)
        if i is not None:
            return ("number", i)
        return ("str", value)
    if isinstance(value, collections.abc.Hashable):
        return ("other", value)
    return ("other", repr(value))


def loosely_equal(a: typing.Any, b: typing.Any) -> bool:
    """
    Compares two identifiers: a string and a number compare numerically,
    two strings compare as strings, and booleans only equal booleans.
    """
    # an absent identifier never refers to anything
    if a is Missing or b is Missing or a is None or b is None:
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, str) and _is_number(b):
        a = _to_number(a)
        return a is not None and a == b
    if _is_number(a) and isinstance(b, str):
        b = _to_number(b)
        return b is not None and a == b
    return a == b


def is_collection(value: typing.Any) -> bool:
    return isinstance(value, collections.abc.Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def is_meta(value: typing.Any) -> bool:
    """
    Tells if ``value`` qualifies as a ``meta`` member, which is the case only
    for key/value mappings.
    """
    return isinstance(value, collections.abc.Mapping)
