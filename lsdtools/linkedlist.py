"""A thread-safe linked list with stack, queue and iterator operations."""

from __future__ import annotations

import functools
import threading
from typing import Any, Callable, Iterator, Optional

__all__ = ["LinkedList", "ListIterator"]

DelFunc = Callable[[Any], None]
CmpFunc = Callable[[Any, Any], int]
FindFunc = Callable[[Any, Any], Any]
ForFunc = Callable[[Any, Any], Optional[int]]


class LinkedList:
    """An ordered collection of non-None items.

    ``del_func``, if given, is called on each item discarded by
    :meth:`delete_all`, :meth:`destroy` or :meth:`ListIterator.delete`.
    Items handed back to the caller (by :meth:`pop`, :meth:`dequeue` or
    :meth:`ListIterator.remove`) are not passed to it.
    """

    def __init__(self, del_func: Optional[DelFunc] = None) -> None:
        self._del_func = del_func
        self._items: list[Any] = []
        self._iterators: list[ListIterator] = []
        self._lock = threading.RLock()

    # -- internal node operations (lock held by caller) -----------------

    def _insert_at(self, slot: int, item: Any) -> Any:
        if item is None:
            raise ValueError("list items must not be None")
        self._items.insert(slot, item)
        for it in self._iterators:
            if it._prev == slot:
                it._prev = slot + 1
                it._pos += 1
            elif it._pos == slot:
                pass
            else:
                if it._prev > slot:
                    it._prev += 1
                if it._pos > slot:
                    it._pos += 1
        return item

    def _remove_at(self, slot: int) -> Any:
        if slot >= len(self._items):
            return None
        item = self._items.pop(slot)
        for it in self._iterators:
            if it._pos == slot:
                it._prev = slot
            else:
                if it._prev > slot:
                    it._prev -= 1
                if it._pos > slot:
                    it._pos -= 1
        return item

    def _discard(self, item: Any) -> None:
        if self._del_func is not None:
            self._del_func(item)

    # -- general purpose ------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)

    def is_empty(self) -> bool:
        """Return True if the list holds no items."""
        with self._lock:
            return not self._items

    def append(self, item: Any) -> Any:
        """Add ``item`` at the end of the list and return it."""
        with self._lock:
            return self._insert_at(len(self._items), item)

    def prepend(self, item: Any) -> Any:
        """Add ``item`` at the start of the list and return it."""
        with self._lock:
            return self._insert_at(0, item)

    def find_first(self, predicate: FindFunc, key: Any = None) -> Any:
        """Return the first item for which ``predicate(item, key)`` is true, or None."""
        with self._lock:
            return next(
                (item for item in self._items if predicate(item, key)), None
            )

    def delete_all(self, predicate: FindFunc, key: Any = None) -> int:
        """Delete every item for which ``predicate(item, key)`` is true.

        Returns the number of items deleted.
        """
        deleted = 0
        with self._lock:
            slot = 0
            while slot < len(self._items):
                if predicate(self._items[slot], key):
                    item = self._remove_at(slot)
                    self._discard(item)
                    deleted += 1
                else:
                    slot += 1
        return deleted

    def for_each(self, func: ForFunc, arg: Any = None) -> int:
        """Call ``func(item, arg)`` on each item in order.

        Returns the number of items visited.  If ``func`` returns a negative
        value, iteration stops and the negated position of that item is
        returned.
        """
        count = 0
        with self._lock:
            for item in list(self._items):
                count += 1
                result = func(item, arg)
                if result is not None and result < 0:
                    return -count
        return count

    def sort(self, cmp: CmpFunc) -> None:
        """Stably sort the list with a three-way ``cmp``; resets all iterators."""
        with self._lock:
            if len(self._items) > 1:
                self._items.sort(key=functools.cmp_to_key(cmp))
                for it in self._iterators:
                    it._pos = 0
                    it._prev = 0

    # -- stack and queue access -----------------------------------------

    def push(self, item: Any) -> Any:
        """Push ``item`` onto the top of the stack and return it."""
        return self.prepend(item)

    def pop(self) -> Any:
        """Remove and return the top item of the stack, or None if empty."""
        with self._lock:
            return self._remove_at(0)

    def peek(self) -> Any:
        """Return the first item without removing it, or None if empty."""
        with self._lock:
            return self._items[0] if self._items else None

    def enqueue(self, item: Any) -> Any:
        """Add ``item`` at the tail of the queue and return it."""
        return self.append(item)

    def dequeue(self) -> Any:
        """Remove and return the head of the queue, or None if empty."""
        with self._lock:
            return self._remove_at(0)

    # -- iterators and teardown -----------------------------------------

    def iterator(self) -> "ListIterator":
        """Create an iterator for non-destructive traversal of the list."""
        return ListIterator(self)

    def destroy(self) -> None:
        """Close all iterators and remove every item, discarding each."""
        with self._lock:
            for it in self._iterators:
                it._owner = None
            self._iterators.clear()
            items, self._items = self._items, []
            for item in items:
                self._discard(item)


class ListIterator:
    """A cursor over a :class:`LinkedList` that survives list modification."""

    def __init__(self, owner: LinkedList) -> None:
        self._owner: Optional[LinkedList] = owner
        # _pos: index of the next item to return.
        # _prev: index of the last returned item, or _pos if there is none.
        self._pos = 0
        self._prev = 0
        with owner._lock:
            owner._iterators.insert(0, self)

    def _list(self) -> LinkedList:
        if self._owner is None:
            raise RuntimeError("iterator is closed")
        return self._owner

    def __iter__(self) -> "ListIterator":
        return self

    def __next__(self) -> Any:
        owner = self._list()
        with owner._lock:
            old_pos = self._pos
            found = old_pos < len(owner._items)
            item = owner._items[old_pos] if found else None
            if found:
                self._pos += 1
            if self._prev != old_pos:
                self._prev += 1
        if not found:
            raise StopIteration
        return item

    def __enter__(self) -> "ListIterator":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def reset(self) -> None:
        """Restart traversal at the beginning of the list."""
        owner = self._list()
        with owner._lock:
            self._pos = 0
            self._prev = 0

    def insert(self, item: Any) -> Any:
        """Insert ``item`` just before the last item returned.

        Once the iterator has reached the end, insertion is at the list's end.
        """
        owner = self._list()
        with owner._lock:
            return owner._insert_at(self._prev, item)

    def find(self, predicate: FindFunc, key: Any = None) -> Any:
        """Advance to the next item for which ``predicate(item, key)`` is true.

        Returns that item, or None once the end of the list is reached.
        """
        for item in self:
            if predicate(item, key):
                return item
        return None

    def remove(self) -> Any:
        """Remove the last item returned and give it back, or None if there is none."""
        owner = self._list()
        with owner._lock:
            if self._prev != self._pos:
                return owner._remove_at(self._prev)
            return None

    def delete(self) -> bool:
        """Remove and discard the last item returned; return True if one was removed."""
        owner = self._list()
        item = self.remove()
        if item is None:
            return False
        owner._discard(item)
        return True

    def close(self) -> None:
        """Detach the iterator from its list."""
        owner = self._owner
        if owner is None:
            return
        with owner._lock:
            if self in owner._iterators:
                owner._iterators.remove(self)
        self._owner = None