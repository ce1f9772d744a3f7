"""Conversion between decimal snowflake strings and their 64-bit layout.

Fields, most significant first: 42 bits of milliseconds since the epoch,
5 bits worker id, 5 bits process id, 12 bits increment.
"""

import re
from typing import Tuple

from .errors import InvalidInputError

TIMESTAMP_BITS = 42
WORKER_ID_BITS = 5
PROCESS_ID_BITS = 5
INCREMENT_BITS = 12
TOTAL_BITS = TIMESTAMP_BITS + WORKER_ID_BITS + PROCESS_ID_BITS + INCREMENT_BITS

WORKER_ID_SHIFT = PROCESS_ID_BITS + INCREMENT_BITS
PROCESS_ID_SHIFT = INCREMENT_BITS
TIMESTAMP_SHIFT = WORKER_ID_BITS + PROCESS_ID_BITS + INCREMENT_BITS

MAX_TIMESTAMP_DELTA = (1 << TIMESTAMP_BITS) - 1
MAX_WORKER_ID = (1 << WORKER_ID_BITS) - 1
MAX_PROCESS_ID = (1 << PROCESS_ID_BITS) - 1
MAX_INCREMENT = (1 << INCREMENT_BITS) - 1
MAX_SNOWFLAKE = (1 << TOTAL_BITS) - 1

ZERO_BITS = "0" * TOTAL_BITS

_BINARY_RE = re.compile(r"[01]+")
_DECIMAL_RE = re.compile(r"[0-9]+")


def decimal_from_binary(bits: str) -> str:
    """Render a string of 0/1 characters as a decimal digit string.

    The value zero produces no digits, so it is rejected like empty input;
    callers handle the literal "0" themselves.
    """
    if not isinstance(bits, str) or not _BINARY_RE.fullmatch(bits):
        raise InvalidInputError(f"not a binary string: {bits!r}", bits)
    value = int(bits, 2)
    if value == 0:
        raise InvalidInputError(f"binary string has no decimal digits: {bits!r}", bits)
    try:
        return str(value)
    except ValueError as exc:
        raise InvalidInputError(f"binary string is too long to convert ({len(bits)} digits)", bits) from exc


def binary_from_decimal(decimal: str) -> str:
    """Render a decimal digit string as 0/1 characters without leading zeros."""
    if not isinstance(decimal, str) or not _DECIMAL_RE.fullmatch(decimal):
        raise InvalidInputError(f"not a decimal string: {decimal!r}", decimal)
    try:
        value = int(decimal)
    except ValueError as exc:
        raise InvalidInputError(f"decimal string is too long to convert ({len(decimal)} digits)", decimal) from exc
    if value == 0:
        raise InvalidInputError(f"decimal string has no binary digits: {decimal!r}", decimal)
    return format(value, "b")


def _field(value: int, width: int, name: str) -> str:
    if value < 0 or value >= (1 << width):
        raise InvalidInputError(f"{name} {value} does not fit in {width} bits", value)
    return format(value, "b").zfill(width)


def compose(delta: int, worker_id: int, process_id: int, increment: int) -> str:
    return (
        _field(delta, TIMESTAMP_BITS, "timestamp delta")
        + _field(worker_id, WORKER_ID_BITS, "worker id")
        + _field(process_id, PROCESS_ID_BITS, "process id")
        + _field(increment, INCREMENT_BITS, "increment")
    )


def split(bits: str) -> Tuple[int, int, int, int]:
    if len(bits) != TOTAL_BITS or not _BINARY_RE.fullmatch(bits):
        raise InvalidInputError(f"expected {TOTAL_BITS} binary digits, got {bits!r}", bits)
    worker_start = TIMESTAMP_BITS
    process_start = worker_start + WORKER_ID_BITS
    increment_start = process_start + PROCESS_ID_BITS
    return (
        int(bits[:worker_start], 2),
        int(bits[worker_start:process_start], 2),
        int(bits[process_start:increment_start], 2),
        int(bits[increment_start:], 2),
    )
