"""A chained hash table with caller-supplied hash, compare and delete hooks."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

__all__ = ["DuplicateKeyError", "HashTable", "hash_key_string"]

DEFAULT_SIZE = 1213
_UINT_MASK = 0xFFFFFFFF

KeyFunc = Callable[[Any], int]
CmpFunc = Callable[[Any, Any], int]
DelFunc = Callable[[Any], None]
ArgFunc = Callable[[Any, Any, Any], int]


class DuplicateKeyError(KeyError):
    """Raised when inserting a key that is already present in the table."""


@dataclass
class _Node:
    key: Any
    data: Any


class HashTable:
    """Fixed-size hash table using separate chaining.

    ``key_func`` maps a key to an unsigned integer hash value; ``cmp_func``
    returns zero when two keys are equal.  ``del_func``, if given, is called
    on each item removed by :meth:`delete_if` or :meth:`destroy`.
    """

    def __init__(
        self,
        key_func: KeyFunc,
        cmp_func: CmpFunc,
        del_func: Optional[DelFunc] = None,
        size: int = 0,
    ) -> None:
        if key_func is None or cmp_func is None:
            raise ValueError("key_func and cmp_func are required")
        if size <= 0:
            size = DEFAULT_SIZE
        self._key_func = key_func
        self._cmp_func = cmp_func
        self._del_func = del_func
        self._size = size
        self._table: list[list[_Node]] = [[] for _ in range(size)]
        self._count = 0
        self._lock = threading.RLock()

    @property
    def size(self) -> int:
        """Number of slots in the table."""
        return self._size

    def _chain(self, key: Any) -> list[_Node]:
        slot = (self._key_func(key) & _UINT_MASK) % self._size
        return self._table[slot]

    def _locate(self, chain: list[_Node], key: Any) -> Optional[_Node]:
        return next(
            (node for node in chain if not self._cmp_func(node.key, key)), None
        )

    def __len__(self) -> int:
        with self._lock:
            return self._count

    def is_empty(self) -> bool:
        """Return True if the table holds no items."""
        with self._lock:
            return self._count == 0

    def find(self, key: Any) -> Any:
        """Return the data stored under ``key``, or None if absent."""
        if key is None:
            raise ValueError("key must be given")
        with self._lock:
            node = self._locate(self._chain(key), key)
            return node.data if node is not None else None

    def insert(self, key: Any, data: Any) -> Any:
        """Store ``data`` under ``key`` and return ``data``.

        Raises DuplicateKeyError if the key is already present.
        """
        if key is None or data is None:
            raise ValueError("key and data must be given")
        with self._lock:
            chain = self._chain(key)
            if self._locate(chain, key) is not None:
                raise DuplicateKeyError(key)
            chain.insert(0, _Node(key, data))
            self._count += 1
            return data

    def remove(self, key: Any) -> Any:
        """Remove the item under ``key`` and return its data, or None."""
        if key is None:
            raise ValueError("key must be given")
        with self._lock:
            chain = self._chain(key)
            node = self._locate(chain, key)
            if node is None:
                return None
            chain.remove(node)
            self._count -= 1
            return node.data

    def delete_if(self, predicate: ArgFunc, arg: Any = None) -> int:
        """Delete items for which ``predicate(data, key, arg)`` is > 0.

        Returns the number of items deleted.
        """
        if predicate is None:
            raise ValueError("predicate must be given")
        deleted = 0
        with self._lock:
            for index, chain in enumerate(self._table):
                kept: list[_Node] = []
                for node in chain:
                    if predicate(node.data, node.key, arg) > 0:
                        if self._del_func is not None:
                            self._del_func(node.data)
                        deleted += 1
                    else:
                        kept.append(node)
                if len(kept) != len(chain):
                    self._table[index] = kept
            self._count -= deleted
        return deleted

    def for_each(self, func: ArgFunc, arg: Any = None) -> int:
        """Call ``func(data, key, arg)`` on every item.

        Returns the number of calls that returned a value > 0.
        """
        if func is None:
            raise ValueError("func must be given")
        with self._lock:
            return sum(
                1
                for chain in self._table
                for node in list(chain)
                if func(node.data, node.key, arg) > 0
            )

    def destroy(self) -> None:
        """Remove every item, passing each to the delete function if any."""
        with self._lock:
            for chain in self._table:
                if self._del_func is not None:
                    for node in chain:
                        self._del_func(node.data)
                chain.clear()
            self._count = 0


def hash_key_string(text: str | bytes) -> int:
    """Hash a string to an unsigned 32-bit value, stopping at the first NUL."""
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    raw = raw.split(b"\0", 1)[0]
    hval = 0
    for byte in raw:
        hval = (hval + 31 * hval + byte) & _UINT_MASK
    return hval