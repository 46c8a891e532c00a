"""Best-effort conversion of stored values to requested types.

Every converter takes an opaque stored value and either returns the
converted value or raises ValueError/TypeError/OverflowError. ``coerce`` and
``coerce_list`` turn those failures into defaults and dropped elements, so
nothing raised here ever reaches a caller of the accessor API.
"""

import copy
import math
import struct
from collections.abc import Callable
from collections.abc import Iterable
from typing import Any
from typing import TypeVar

T = TypeVar("T")

Converter = Callable[[Any], T]

_FAILURES = (ValueError, TypeError, OverflowError)


def stringify(value: Any) -> str:
    """Render a value the way text-only formats store it.

    Examples:
        >>> stringify(True)
        'true'

        >>> stringify(None)
        'null'

        >>> stringify([1, 2, 3])
        '1,2,3'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def wrap_integer(value: int, bits: int) -> int:
    """Narrow an integer to a signed two's-complement width, no overflow check.

    Examples:
        >>> wrap_integer(300, 8)
        44

        >>> wrap_integer(2**31, 32)
        -2147483648
    """
    span = 1 << bits
    value &= span - 1
    if value >= span >> 1:
        value -= span
    return value


def _integral(raw: Any) -> int:
    if isinstance(raw, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw)
    if isinstance(raw, str):
        return int(raw.strip())
    raise TypeError(f"cannot convert {type(raw).__name__} to an integer")


def as_long(raw: Any) -> int:
    return wrap_integer(_integral(raw), 64)


def as_int(raw: Any) -> int:
    return wrap_integer(_integral(raw), 32)


def as_short(raw: Any) -> int:
    return wrap_integer(_integral(raw), 16)


def as_byte(raw: Any) -> int:
    return wrap_integer(_integral(raw), 8)


def as_double(raw: Any) -> float:
    if isinstance(raw, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        return float(raw.strip())
    raise TypeError(f"cannot convert {type(raw).__name__} to a float")


def as_float(raw: Any) -> float:
    """Convert to a float rounded through IEEE single precision."""
    value = as_double(raw)
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def as_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    raise TypeError(f"cannot convert {type(raw).__name__} to a boolean")


def as_char(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError(f"cannot convert {type(raw).__name__} to a character")
    text = raw.strip()
    if not text:
        raise ValueError("empty string has no character")
    return text[0]


def as_string(raw: Any) -> str:
    if raw is None or isinstance(raw, (dict, list)):
        raise TypeError(f"cannot convert {type(raw).__name__} to a string")
    return stringify(raw)


def as_map(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"cannot convert {type(raw).__name__} to a mapping")
    return copy.deepcopy(raw)


def parse_inline_map(text: str) -> dict[str, str]:
    """Parse a ``key=value;key=value`` string into a dict.

    Pairs without exactly one ``=`` are skipped.

    Examples:
        >>> parse_inline_map("host=localhost; port=8080;broken")
        {'host': 'localhost', 'port': '8080'}
    """
    result = {}
    for pair in text.split(";"):
        parts = pair.split("=")
        if len(parts) == 2:
            result[parts[0].strip()] = parts[1].strip()
    return result


def coerce(raw: Any, converter: Converter[T], default: T) -> T:
    """Convert a stored value, falling back to ``default``.

    Absent values (None) and failed conversions both yield the default.
    """
    if raw is None:
        return default
    try:
        return converter(raw)
    except _FAILURES:
        return default


def coerce_list(items: Iterable[Any], converter: Converter[T]) -> list[T]:
    """Convert every element, silently dropping the ones that fail.

    Examples:
        >>> coerce_list(["1", "x", "3"], as_int)
        [1, 3]
    """
    result = []
    for item in items:
        if item is None:
            continue
        try:
            result.append(converter(item))
        except _FAILURES:
            continue
    return result
