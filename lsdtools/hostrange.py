"""Hostnames with numeric suffixes and ranges of such hosts sharing a prefix."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

__all__ = [
    "MAX_HOST_SUFFIX",
    "Hostname",
    "HostRange",
    "parse_hostname",
    "width_equiv",
    "zero_padded",
]

MAX_HOST_SUFFIX = 1 << 25

_DIGITS = frozenset("0123456789")


def _is_digit(char: str) -> bool:
    return char in _DIGITS


def _format_num(num: int, width: int) -> str:
    return str(num).zfill(width)


def zero_padded(num: int, width: int) -> int:
    """Return the number of zeros needed to pad ``num`` to ``width`` digits."""
    digits = len(str(num))
    return width - digits if width > digits else 0


def width_equiv(n: int, wn: int, m: int, wm: int) -> Optional[tuple[int, int]]:
    """Check whether format widths ``wn`` (for ``n``) and ``wm`` (for ``m``) agree.

    Two widths are equivalent when applying either one to both numbers leaves
    the zero padding of both unchanged.  Returns the adjusted pair
    ``(wn, wm)`` when they are equivalent, or None when they are not.
    """
    npad = zero_padded(n, wn)
    nmpad = zero_padded(n, wm)
    mpad = zero_padded(m, wm)
    mnpad = zero_padded(m, wn)

    if npad != nmpad and mpad != mnpad:
        return None
    if npad != nmpad:
        return wn, wn
    return wm, wm


def _prefix_end(text: str) -> int:
    idx = len(text) - 1
    while idx >= 0 and _is_digit(text[idx]):
        idx -= 1
    return idx


@dataclass(frozen=True)
class Hostname:
    """A single hostname split into prefix and optional numeric suffix."""

    hostname: str
    prefix: str
    num: int = 0
    suffix: Optional[str] = None

    def has_suffix(self) -> bool:
        """Return True if the hostname has a valid numeric suffix."""
        return self.suffix is not None

    def suffix_width(self) -> int:
        """Return the width in characters of the numeric suffix."""
        if self.suffix is None:
            raise ValueError(f"hostname {self.hostname!r} has no numeric suffix")
        return len(self.suffix)


def parse_hostname(text: str, prefix_end: Optional[int] = None) -> Hostname:
    """Split ``text`` into prefix and numeric suffix.

    ``prefix_end`` is the index of the last prefix character; by default it
    is the character before the trailing run of digits.  A suffix larger
    than :data:`MAX_HOST_SUFFIX` is not treated as numeric.
    """
    idx = _prefix_end(text) if prefix_end is None else prefix_end
    if idx == len(text) - 1:
        return Hostname(text, text)

    suffix = text[idx + 1:]
    if suffix and all(_is_digit(c) for c in suffix):
        num = int(suffix)
        if num <= MAX_HOST_SUFFIX:
            return Hostname(text, text[: idx + 1], num, suffix)
    return Hostname(text, text)


@dataclass
class HostRange:
    """Hosts ``prefix`` + lo..hi, each suffix zero-padded to ``width``.

    A ``singlehost`` range holds exactly one host named ``prefix``; its
    ``lo`` and ``hi`` only serve to mark it as consumed.
    """

    prefix: str
    lo: int = 0
    hi: int = 0
    width: int = 0
    singlehost: bool = False

    @classmethod
    def single(cls, name: str) -> "HostRange":
        """Create a range holding the single host ``name``."""
        return cls(name, 0, 0, 0, True)

    def count(self) -> int:
        """Return the number of hosts in the range."""
        if self.singlehost:
            return 1
        return max(self.hi - self.lo + 1, 0)

    def copy(self) -> "HostRange":
        """Return an independent copy of the range."""
        return dataclasses.replace(self)

    def delete_host(self, n: int) -> Optional["HostRange"]:
        """Remove suffix ``n`` from the range.

        If the range is split in two, this range keeps the lower part and
        the upper part is returned; otherwise None is returned.
        """
        if not self.lo <= n <= self.hi:
            raise ValueError(f"{n} is outside the range {self.lo}-{self.hi}")
        if n == self.lo:
            self.lo += 1
            return None
        if n == self.hi:
            self.hi -= 1
            return None
        upper = self.copy()
        self.hi = n - 1
        upper.lo = n + 1
        return upper

    def compare(self, other: "HostRange") -> int:
        """Three-way sort comparison: prefix, then lowest suffix or width."""
        result = self.prefix_cmp(other)
        if result == 0:
            if self.width_combine(other):
                result = self.lo - other.lo
            else:
                result = self.width - other.width
        return result

    def prefix_cmp(self, other: Optional["HostRange"]) -> int:
        """Compare prefixes; equal prefixes differ if only one is a single host."""
        if other is None:
            return -1
        if self.prefix < other.prefix:
            return -1
        if self.prefix > other.prefix:
            return 1
        return int(other.singlehost) - int(self.singlehost)

    def within_range(self, other: Optional["HostRange"]) -> bool:
        """Return True if both ranges belong in the same bracketed list."""
        if self.prefix_cmp(other) != 0:
            return False
        return not (self.singlehost or other.singlehost)

    def width_combine(self, other: "HostRange") -> bool:
        """Return True if the widths are compatible, adjusting them to agree."""
        widths = width_equiv(self.lo, self.width, other.lo, other.width)
        if widths is None:
            return False
        self.width, other.width = widths
        return True

    def is_empty(self) -> bool:
        """Return True if no hosts remain in the range."""
        return self.hi < self.lo

    def host_at(self, depth: int) -> str:
        """Return the name of the host ``depth`` places after the first."""
        if self.singlehost:
            return self.prefix
        return self.prefix + _format_num(self.lo + depth, self.width)

    def pop(self) -> Optional[str]:
        """Remove and return the last host, or None if the range is used up."""
        if self.singlehost:
            self.lo += 1
            return self.prefix
        if self.count() > 0:
            host = self.prefix + _format_num(self.hi, self.width)
            self.hi -= 1
            return host
        return None

    def shift(self) -> Optional[str]:
        """Remove and return the first host, or None if the range is used up."""
        if self.singlehost:
            self.lo += 1
            return self.prefix
        if self.count() > 0:
            host = self.prefix + _format_num(self.lo, self.width)
            self.lo += 1
            return host
        return None

    def join(self, other: "HostRange") -> int:
        """Merge ``other`` into this range, which must not sort after it.

        Returns -1 if the ranges do not touch, 0 for a perfect join, or the
        number of hosts duplicated between the two.
        """
        if self.prefix_cmp(other) != 0 or not self.width_combine(other):
            return -1
        if self.singlehost and other.singlehost:
            return 1
        if self.hi == other.lo - 1:
            self.hi = other.hi
            return 0
        if self.hi >= other.lo:
            if self.hi < other.hi:
                duplicated = self.hi - other.lo + 1
                self.hi = other.hi
                return duplicated
            return other.count()
        return -1

    def intersect(self, other: "HostRange") -> Optional["HostRange"]:
        """Return the hosts common to this range and ``other``, or None."""
        if self.singlehost or other.singlehost:
            return None
        if (
            self.prefix_cmp(other) == 0
            and self.hi > other.lo
            and self.width_combine(other)
        ):
            common = self.copy()
            common.lo = other.lo
            common.hi = min(other.hi, self.hi)
            return common
        return None

    def hn_within(self, hn: Hostname) -> int:
        """Return the offset of ``hn`` within this range, or -1 if absent."""
        if self.singlehost:
            return 0 if hn.hostname == self.prefix else -1

        if not hn.has_suffix():
            return -1

        len_hn = len(hn.prefix)
        if self.prefix[:len_hn] != hn.prefix:
            return -1

        len_hr = len(self.prefix)
        width = hn.suffix_width()
        # The range prefix may end in digits (as in f00[1-2]); move digits
        # from the hostname's suffix into its prefix and try again.
        if (
            len_hn < len_hr
            and width > 1
            and _is_digit(self.prefix[len_hr - 1])
            and self.prefix[len_hn] == hn.suffix[0]
        ):
            return self.hn_within(parse_hostname(hn.hostname, len_hn))

        if self.lo <= hn.num <= self.hi:
            widths = width_equiv(self.lo, self.width, hn.num, width)
            if widths is None:
                return -1
            self.width = widths[0]
            return hn.num - self.lo
        return -1

    def to_string(self, separator: Optional[str] = None) -> str:
        """List every host explicitly, joined by the first char of ``separator``."""
        if self.singlehost:
            return self.prefix
        sep = "," if not separator else separator[0]
        return sep.join(
            self.prefix + _format_num(i, self.width)
            for i in range(self.lo, self.hi + 1)
        )

    def numstr(self) -> str:
        """Return the numeric part as ``lo`` or ``lo-hi``; empty for a single host."""
        if self.singlehost:
            return ""
        text = _format_num(self.lo, self.width)
        if self.lo < self.hi:
            text += "-" + _format_num(self.hi, self.width)
        return text