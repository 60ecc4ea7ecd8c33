"""Sorted, duplicate-free sets of hostnames kept as compact ranges."""

from __future__ import annotations

from typing import Iterator, Optional

from .hostlist import HostList, HostListIterator
from .hostrange import HostRange, parse_hostname

__all__ = ["HostSet"]


class HostSet:
    """A set of hostnames that is always sorted and never holds duplicates.

    Sorting is by alphanumeric prefix first and then by the value of the
    numeric suffix.  Raises HostlistError when ``hosts`` is not a valid
    hostlist expression.
    """

    def __init__(self, hosts: Optional[str] = None) -> None:
        self._hl = HostList(hosts)
        self._hl.uniq()

    def _insert_range(self, hr: HostRange) -> int:
        """Merge one range into the set; return the number of new hosts."""
        hl = self._hl
        ranges = hl._ranges
        hr = hr.copy()
        nhosts = hr.count()

        for i, existing in enumerate(ranges):
            if hr.compare(existing) <= 0:
                ndups = hr.join(existing)
                if ndups >= 0:
                    hl._delete_range(i)
                else:
                    ndups = 0
                hl._insert_range(hr, i)
                hl._nhosts += nhosts - ndups
                if i > 0:
                    # The join already removes its duplicates from the count.
                    joined = hl._attempt_range_join(i)
                    if joined > 0:
                        ndups += joined
                return nhosts - ndups

        ranges.append(hr)
        hl._nhosts += nhosts
        ndups = 0
        if len(ranges) > 1:
            ndups = max(hl._attempt_range_join(len(ranges) - 1), 0)
        return nhosts - ndups

    def _find_host(self, host: str) -> bool:
        hn = parse_hostname(host)
        with self._hl._lock:
            return any(hr.hn_within(hn) >= 0 for hr in self._hl._ranges)

    def copy(self) -> "HostSet":
        """Return an independent copy of the set."""
        new = HostSet()
        new._hl = self._hl.copy()
        return new

    def __len__(self) -> int:
        return len(self._hl)

    def __iter__(self) -> Iterator[str]:
        return iter(self._hl)

    def __str__(self) -> str:
        return self._hl.ranged_string()

    def __repr__(self) -> str:
        return f"HostSet({self._hl.ranged_string()!r})"

    def __contains__(self, host: object) -> bool:
        if not isinstance(host, str):
            return False
        return self._find_host(host)

    def nranges(self) -> int:
        """Return the number of ranges currently held."""
        return self._hl.nranges()

    def insert(self, hosts: str) -> int:
        """Add the hosts of a hostlist expression; return how many were new."""
        incoming = HostList(hosts)
        incoming.uniq()
        with incoming._lock:
            ranges = [hr.copy() for hr in incoming._ranges]
        with self._hl._lock:
            return sum(self._insert_range(hr) for hr in ranges)

    def delete(self, hosts: str) -> int:
        """Delete the hosts named by ``hosts``; return how many were removed."""
        return self._hl.delete(hosts)

    def delete_host(self, hostname: str) -> bool:
        """Delete ``hostname``; return True if it was in the set."""
        return self._hl.delete_host(hostname)

    def within(self, hosts: str) -> bool:
        """Return True if every host named by ``hosts`` is in the set."""
        wanted = HostList(hosts)
        total = len(wanted)
        found = 0
        while (hostname := wanted.pop()) is not None:
            found += self._find_host(hostname)
        return total == found

    def shift(self) -> Optional[str]:
        """Remove and return the first host, or None if the set is empty."""
        return self._hl.shift()

    def pop(self) -> Optional[str]:
        """Remove and return the last host, or None if the set is empty."""
        return self._hl.pop()

    def shift_range(self) -> Optional[str]:
        """Remove the first bracketed list of hosts and return it, or None."""
        return self._hl.shift_range()

    def pop_range(self) -> Optional[str]:
        """Remove the last bracketed list of hosts and return it, or None."""
        return self._hl.pop_range()

    def ranged_string(self) -> str:
        """Return the set in bracketed form, e.g. ``tux[0-5,12]``."""
        return self._hl.ranged_string()

    def deranged_string(self) -> str:
        """Return every host written out explicitly, separated by commas."""
        return self._hl.deranged_string()

    def iterator(self) -> HostListIterator:
        """Create an iterator over the set that tracks changes to it."""
        return HostListIterator(self._hl)