"""Parsing of hostlist expressions such as ``tux[0-5,12],login1``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .hostrange import HostRange, parse_hostname

__all__ = [
    "DEFAULT_SEPARATORS",
    "MAX_RANGE",
    "MAX_RANGES",
    "HostlistError",
    "NumericRange",
    "RangeTooLargeError",
    "host_range_from_name",
    "parse_hostlist",
    "parse_range_list",
    "parse_single_range",
    "tokenize",
]

DEFAULT_SEPARATORS = "\t, "

# Largest number of hosts accepted in one numeric range.
MAX_RANGE = 16384

# Largest number of comma separated ranges accepted between brackets.
MAX_RANGES = 10240

_DIGITS = frozenset("0123456789")


class HostlistError(ValueError):
    """Raised when a hostlist expression cannot be parsed."""


class RangeTooLargeError(HostlistError):
    """Raised when a numeric range holds more than MAX_RANGE hosts."""


@dataclass(frozen=True)
class NumericRange:
    """A numeric range ``lo``..``hi`` written with ``width`` characters."""

    lo: int
    hi: int
    width: int


def _advance_past_brackets(text: str, start: int, pos: int) -> Optional[int]:
    """If an unclosed '[' lies in text[start:pos], return the index past its ']'."""
    segment = text[start:pos]
    if "[" in segment and "]" not in segment:
        close = text.find("]", pos)
        if close != -1 and "[" not in text[pos:close]:
            return close + 1
    return None


def tokenize(text: str, separators: str = DEFAULT_SEPARATORS) -> Iterator[str]:
    """Yield the tokens of ``text`` split at any character of ``separators``.

    Separators enclosed in brackets do not split, so ``foo[1,3]`` is one token.
    """
    seps = set(separators)
    end = len(text)
    pos = 0
    while True:
        while pos < end and text[pos] in seps:
            pos += 1
        if pos >= end:
            return
        start = pos
        while True:
            while pos < end and text[pos] not in seps:
                pos += 1
            advanced = _advance_past_brackets(text, start, pos)
            if advanced is None:
                break
            pos = advanced
        yield text[start:pos]


def _strtoul(text: str) -> tuple[int, int]:
    """Read an unsigned decimal number at the start of ``text``.

    Returns the value and the index just past it; the index is 0 when no
    number was found.  Leading whitespace and a '+' sign are accepted.
    """
    pos = 0
    while pos < len(text) and text[pos] in " \t\n\r\f\v":
        pos += 1
    if pos < len(text) and text[pos] == "+":
        pos += 1
    digits_start = pos
    while pos < len(text) and text[pos] in _DIGITS:
        pos += 1
    if pos == digits_start:
        return 0, 0
    return int(text[digits_start:pos]), pos


def parse_single_range(text: str) -> NumericRange:
    """Parse ``N`` or ``N-M`` into a :class:`NumericRange`.

    Raises HostlistError for a malformed range and RangeTooLargeError when
    the range holds more than MAX_RANGE numbers.
    """
    lo_text, dash, hi_text = text.partition("-")
    invalid = HostlistError(f"Invalid range: `{text}'")
    if dash and hi_text.startswith("-"):
        raise invalid

    lo, lo_end = _strtoul(lo_text)
    if lo_end == 0:
        raise invalid

    if dash and hi_text:
        hi, hi_end = _strtoul(hi_text)
        if hi_end == 0 or hi_end != len(hi_text):
            raise invalid
    else:
        hi = lo
        if lo_end != len(lo_text):
            raise invalid

    if lo > hi:
        raise invalid
    if hi - lo + 1 > MAX_RANGE:
        raise RangeTooLargeError(f"Too many hosts in range `{text}'")
    return NumericRange(lo, hi, len(lo_text))


def parse_range_list(text: str, max_ranges: int = MAX_RANGES) -> list[NumericRange]:
    """Parse comma separated ranges such as ``0-5,12,20-25``.

    Raises HostlistError if any range is malformed or there are more than
    ``max_ranges`` of them.
    """
    pieces = text.split(",")
    if len(pieces) > max_ranges:
        raise HostlistError(f"Too many ranges in `{text}'")
    return [parse_single_range(piece) for piece in pieces]


def host_range_from_name(name: str) -> HostRange:
    """Build the range holding the single host ``name``."""
    hn = parse_hostname(name)
    if hn.has_suffix():
        return HostRange(hn.prefix, hn.num, hn.num, hn.suffix_width())
    return HostRange.single(name)


def parse_hostlist(
    text: Optional[str], separators: str = DEFAULT_SEPARATORS
) -> list[HostRange]:
    """Parse a hostlist expression into host ranges, in order of appearance.

    ``None`` or an empty string gives an empty list.  Raises HostlistError if
    a bracketed range list is malformed.
    """
    if text is None:
        return []
    ranges: list[HostRange] = []
    for token in tokenize(text, separators):
        prefix, bracket, rest = token.partition("[")
        if not bracket or "]" not in rest:
            ranges.append(host_range_from_name(token))
            continue
        inner, _, suffix = rest.partition("]")
        numeric = parse_range_list(inner)
        if suffix:
            ranges.extend(
                HostRange.single(f"{prefix}{str(num).zfill(rng.width)}{suffix}")
                for rng in numeric
                for num in range(rng.lo, rng.hi + 1)
            )
        else:
            ranges.extend(
                HostRange(prefix, rng.lo, rng.hi, rng.width) for rng in numeric
            )
    return ranges