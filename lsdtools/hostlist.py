"""Ordered lists of hostnames stored as compact numeric ranges."""

from __future__ import annotations

import functools
import threading
from typing import Iterator, Optional

from .hostrange import HostRange, parse_hostname
from .parsing import host_range_from_name, parse_hostlist

__all__ = ["HostList", "HostListIterator"]


class HostList:
    """A list of hostnames, kept as ranges such as ``tux[0-5,12]``.

    Hosts keep the order in which they were pushed; duplicates are allowed
    until :meth:`uniq` is called.  Raises HostlistError when ``hosts`` is not
    a valid hostlist expression.
    """

    def __init__(self, hosts: Optional[str] = None) -> None:
        self._ranges: list[HostRange] = []
        self._nhosts = 0
        self._iterators: list[HostListIterator] = []
        self._lock = threading.RLock()
        for hr in parse_hostlist(hosts):
            self._push_range(hr)

    # -- internal range operations (lock held by caller) -----------------

    def _push_range(self, hr: HostRange) -> int:
        hr = hr.copy()
        tail = self._ranges[-1] if self._ranges else None
        if (
            tail is not None
            and tail.prefix_cmp(hr) == 0
            and tail.hi == hr.lo - 1
            and tail.width_combine(hr)
        ):
            tail.hi = hr.hi
        else:
            self._ranges.append(hr)
        added = hr.count()
        self._nhosts += added
        return added

    def _insert_range(self, hr: HostRange, n: int) -> bool:
        if n > len(self._ranges):
            return False
        self._ranges.insert(n, hr.copy())
        for it in self._iterators:
            if it._idx >= n:
                it._idx += 1
        return True

    def _delete_range(self, n: int) -> None:
        del self._ranges[n]
        self._shift_iterators(n, 0, 1)

    def _shift_iterators(self, idx: int, depth: int, n: int) -> None:
        for it in self._iterators:
            if n == 0:
                if it._idx == idx and it._depth >= depth:
                    it._depth = it._depth - 1 if it._depth > -1 else -1
            elif it._idx >= idx:
                it._idx -= n
                if it._idx < 0:
                    it._reset()

    def _reset_iterators(self) -> None:
        for it in self._iterators:
            it._reset()

    def _attempt_range_join(self, loc: int) -> int:
        ndup = self._ranges[loc - 1].join(self._ranges[loc])
        if ndup >= 0:
            self._delete_range(loc)
            self._nhosts -= ndup
        return ndup

    def _bracketed(self, start: int) -> tuple[str, int]:
        """Render the bracketed list starting at ``start``; return it and the next index."""
        ranges = self._ranges
        first = ranges[start]
        following = ranges[start + 1] if start + 1 < len(ranges) else None
        bracket_needed = first.count() > 1 or first.within_range(following)
        numbers = [first.numstr()]
        i = start + 1
        while i < len(ranges) and ranges[i].within_range(ranges[i - 1]):
            numbers.append(ranges[i].numstr())
            i += 1
        if bracket_needed:
            return f"{first.prefix}[{','.join(numbers)}]", i
        return first.prefix + "".join(numbers), i

    def _coalesce(self) -> None:
        i = len(self._ranges) - 1
        while i > 0:
            common = self._ranges[i - 1].intersect(self._ranges[i])
            if common is not None:
                hprev = self._ranges[i - 1]
                hnext = self._ranges[i]
                j = i
                if common.hi < hprev.hi:
                    hnext.hi = hprev.hi
                hprev.hi = common.lo
                hnext.lo = common.hi
                if hprev.is_empty():
                    self._delete_range(i)
                while common.lo <= common.hi:
                    single = HostRange(common.prefix, common.lo, common.lo, common.width)
                    if common.lo > hprev.hi:
                        self._insert_range(single, j)
                        j += 1
                    if common.lo < hnext.lo:
                        self._insert_range(single, j)
                        j += 1
                    common.lo += 1
                i = len(self._ranges)
            i -= 1
        self._collapse()

    def _collapse(self) -> None:
        for i in range(len(self._ranges) - 1, 0, -1):
            hprev = self._ranges[i - 1]
            hnext = self._ranges[i]
            if (
                hprev.prefix_cmp(hnext) == 0
                and hprev.hi == hnext.lo - 1
                and hprev.width_combine(hnext)
            ):
                hprev.hi = hnext.hi
                self._delete_range(i)

    # -- public interface -------------------------------------------------

    def copy(self) -> "HostList":
        """Return an independent copy of the list."""
        new = HostList()
        with self._lock:
            new._ranges = [hr.copy() for hr in self._ranges]
            new._nhosts = self._nhosts
        return new

    def __len__(self) -> int:
        with self._lock:
            return self._nhosts

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            ranges = [hr.copy() for hr in self._ranges]
        for hr in ranges:
            for depth in range(hr.count()):
                yield hr.host_at(depth)

    def __str__(self) -> str:
        return self.ranged_string()

    def __repr__(self) -> str:
        return f"HostList({self.ranged_string()!r})"

    def nranges(self) -> int:
        """Return the number of ranges currently held."""
        with self._lock:
            return len(self._ranges)

    def push(self, hosts: Optional[str]) -> int:
        """Append the hosts of a hostlist expression; return how many were added."""
        if hosts is None:
            return 0
        other = HostList(hosts)
        self.push_list(other)
        return len(other)

    def push_host(self, host: Optional[str]) -> int:
        """Append a single host without range expansion; return 1, or 0 for None."""
        if host is None:
            return 0
        with self._lock:
            self._push_range(host_range_from_name(host))
        return 1

    def push_list(self, other: Optional["HostList"]) -> int:
        """Append every host of ``other``; return the number of hosts added."""
        if other is None:
            return 0
        with other._lock:
            ranges = [hr.copy() for hr in other._ranges]
        with self._lock:
            return sum(self._push_range(hr) for hr in ranges)

    def pop(self) -> Optional[str]:
        """Remove and return the last host, or None if the list is empty."""
        with self._lock:
            if self._nhosts <= 0:
                return None
            hr = self._ranges[-1]
            host = hr.pop()
            self._nhosts -= 1
            if hr.is_empty():
                self._ranges.pop()
            return host

    def shift(self) -> Optional[str]:
        """Remove and return the first host, or None if the list is empty."""
        with self._lock:
            if self._nhosts <= 0:
                return None
            hr = self._ranges[0]
            host = hr.shift()
            self._nhosts -= 1
            if hr.is_empty():
                self._delete_range(0)
            else:
                self._shift_iterators(0, 0, 0)
            return host

    def nth(self, n: int) -> str:
        """Return the host at position ``n``; raise IndexError if out of range."""
        with self._lock:
            if not 0 <= n < self._nhosts:
                raise IndexError(f"host index {n} out of range")
            count = 0
            for hr in self._ranges:
                in_range = hr.count()
                if n < count + in_range:
                    return hr.host_at(n - count)
                count += in_range
        raise IndexError(f"host index {n} out of range")

    def pop_range(self) -> Optional[str]:
        """Remove the last bracketed list of hosts and return it, or None if empty."""
        with self._lock:
            if not self._ranges:
                return None
            tail = self._ranges[-1]
            i = len(self._ranges) - 2
            while i >= 0 and tail.within_range(self._ranges[i]):
                i -= 1
            taken = HostList()
            for hr in self._ranges[i + 1:]:
                taken._push_range(hr)
            del self._ranges[i + 1:]
            self._nhosts -= taken._nhosts
        return taken.ranged_string()

    def shift_range(self) -> Optional[str]:
        """Remove the first bracketed list of hosts and return it, or None if empty."""
        with self._lock:
            if not self._ranges:
                return None
            taken = HostList()
            taken._push_range(self._ranges[0])
            i = 1
            while i < len(self._ranges) and taken._ranges[0].within_range(
                self._ranges[i]
            ):
                taken._push_range(self._ranges[i])
                i += 1
            for it in self._iterators:
                if it._idx < i:
                    it._reset()
            self._shift_iterators(i, 0, i)
            del self._ranges[:i]
            self._nhosts -= taken._nhosts
        return taken.ranged_string()

    def find(self, hostname: Optional[str]) -> int:
        """Return the position of the first host matching ``hostname``, or -1."""
        if hostname is None:
            return -1
        hn = parse_hostname(hostname)
        with self._lock:
            count = 0
            for hr in self._ranges:
                offset = hr.hn_within(hn)
                if offset >= 0:
                    return count + offset
                count += hr.count()
        return -1

    def delete(self, hosts: str) -> int:
        """Delete every host named by the expression ``hosts``; return how many went."""
        targets = HostList(hosts)
        deleted = 0
        while (hostname := targets.pop()) is not None:
            deleted += self.delete_host(hostname)
        return deleted

    def delete_host(self, hostname: str) -> bool:
        """Delete the first host matching ``hostname``; return True if one was found."""
        with self._lock:
            n = self.find(hostname)
            if n < 0:
                return False
            self.delete_nth(n)
            return True

    def delete_nth(self, n: int) -> None:
        """Delete the host at position ``n``; raise IndexError if out of range."""
        with self._lock:
            if not 0 <= n < self._nhosts:
                raise IndexError(f"host index {n} out of range")
            count = 0
            for i, hr in enumerate(self._ranges):
                in_range = hr.count()
                if n < count + in_range:
                    if hr.singlehost:
                        self._delete_range(i)
                    else:
                        upper = hr.delete_host(hr.lo + n - count)
                        if upper is not None:
                            self._insert_range(upper, i + 1)
                        elif hr.is_empty():
                            self._delete_range(i)
                    break
                count += in_range
            self._nhosts -= 1

    def sort(self) -> None:
        """Sort by prefix, then numeric suffix; duplicates are kept."""
        with self._lock:
            if len(self._ranges) <= 1:
                return
            self._ranges.sort(key=functools.cmp_to_key(HostRange.compare))
            self._reset_iterators()
            self._coalesce()

    def uniq(self) -> None:
        """Sort the list and remove duplicate hosts."""
        with self._lock:
            if len(self._ranges) <= 1:
                return
            self._ranges.sort(key=functools.cmp_to_key(HostRange.compare))
            i = 1
            while i < len(self._ranges):
                if self._attempt_range_join(i) < 0:
                    i += 1
            self._reset_iterators()

    def ranged_string(self) -> str:
        """Return the list in bracketed form, e.g. ``tux[0-5,12],login``."""
        with self._lock:
            parts = []
            i = 0
            while i < len(self._ranges):
                text, i = self._bracketed(i)
                parts.append(text)
        return ",".join(parts)

    def deranged_string(self) -> str:
        """Return every host written out explicitly, separated by commas."""
        with self._lock:
            return ",".join(hr.to_string(",") for hr in self._ranges)

    def iterator(self) -> "HostListIterator":
        """Create an iterator that tracks changes made to the list."""
        return HostListIterator(self)


class HostListIterator:
    """A cursor over a :class:`HostList` that survives list modification."""

    def __init__(self, hostlist: HostList) -> None:
        self._hostlist: Optional[HostList] = hostlist
        self._idx = 0
        self._depth = -1
        with hostlist._lock:
            hostlist._iterators.insert(0, self)

    def _list(self) -> HostList:
        if self._hostlist is None:
            raise RuntimeError("iterator is closed")
        return self._hostlist

    def _reset(self) -> None:
        self._idx = 0
        self._depth = -1

    def _advance(self, ranges: list[HostRange]) -> None:
        if self._idx > len(ranges) - 1:
            return
        self._depth += 1
        hr = ranges[self._idx]
        if self._depth > hr.hi - hr.lo:
            self._depth = 0
            self._idx += 1

    def __iter__(self) -> "HostListIterator":
        return self

    def __next__(self) -> str:
        hl = self._list()
        with hl._lock:
            self._advance(hl._ranges)
            if self._idx > len(hl._ranges) - 1:
                raise StopIteration
            return hl._ranges[self._idx].host_at(self._depth)

    def __enter__(self) -> "HostListIterator":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def reset(self) -> None:
        """Restart iteration at the beginning of the list."""
        hl = self._list()
        with hl._lock:
            self._reset()

    def next_range(self) -> Optional[str]:
        """Return the next bracketed list of hosts, or None at the end."""
        hl = self._list()
        with hl._lock:
            ranges = hl._ranges
            self._depth += 1
            if self._depth > 0:
                j = self._idx + 1
                if self._idx < len(ranges):
                    current = ranges[self._idx]
                    while j < len(ranges) and current.within_range(ranges[j]):
                        j += 1
                self._idx = j
                self._depth = 0
            if self._idx > len(ranges) - 1:
                return None
            text, _ = hl._bracketed(self._idx)
            return text

    def remove(self) -> None:
        """Remove the host most recently returned from the list."""
        hl = self._list()
        with hl._lock:
            if self._depth < 0 or self._idx >= len(hl._ranges):
                raise ValueError("iterator has no current host")
            hr = hl._ranges[self._idx]
            upper = hr.delete_host(hr.lo + self._depth)
            if upper is not None:
                hl._insert_range(upper, self._idx + 1)
                self._idx += 1
                self._depth = -1
            elif hr.is_empty():
                hl._delete_range(self._idx)
            else:
                self._depth -= 1
            hl._nhosts -= 1

    def close(self) -> None:
        """Detach the iterator from its list."""
        hl = self._hostlist
        if hl is None:
            return
        with hl._lock:
            if self in hl._iterators:
                hl._iterators.remove(self)
        self._hostlist = None