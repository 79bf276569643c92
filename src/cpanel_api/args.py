"""
Call argument encoding per protocol generation.

UAPI and API2 send every argument as ``key=value``. API1 is positional: call
sites pack ``name=value`` into the key itself, so the key is split on its
first ``=`` and the mapped value is dropped. A key without ``=`` is sent with
an empty value. This mirrors what the service has always accepted and is kept
as is.
"""

import enum
import math
from decimal import Decimal
from typing import Any, Union

ArgValue = Union[str, int, float, bool]
Args = dict[str, ArgValue]


class Generation(str, enum.Enum):
    """Protocol generation. Values are the wire ``apiversion`` numbers."""

    API1 = "1"
    API2 = "2"
    UAPI = "3"


def _format_float(value: float) -> str:
    # Shortest round-trip digits, exponent form outside [1e-4, 1e6)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"
    dec = Decimal(repr(abs(value))).normalize()
    digits = "".join(str(d) for d in dec.as_tuple().digits)
    exp = dec.adjusted()
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    return sign + format(dec, "f")


def format_value(value: Any) -> str:
    """Default textual form of an argument value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def encode_args(args: Args, generation: Generation) -> list[tuple[str, str]]:
    """Encode ``args`` into ordered (key, value) pairs for ``generation``."""
    pairs: list[tuple[str, str]] = []
    for key, value in args.items():
        if generation is Generation.API1:
            name, sep, packed = key.partition("=")
            pairs.append((name, packed if sep else ""))
        else:
            pairs.append((key, format_value(value)))
    return pairs


def api1_arguments(args: Args) -> list[str]:
    """Positional API1 argument strings, in call order."""
    # "flag=" and "flag" both encode to ("flag", ""), so both are sent as "flag"
    return [f"{name}={value}" if value else name for name, value in encode_args(args, Generation.API1)]
