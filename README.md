# lsdtools

A small toolkit of data structures for cluster tooling:

- `lsdtools.hashtable.HashTable`: a fixed-size chained hash table. You supply
  the key function, the comparison function and an optional deletion callback.
- `lsdtools.linkedlist.LinkedList`: an ordered list that also works as a stack
  and a queue. Its iterators (`ListIterator`) stay valid when items are
  inserted or removed.
- `lsdtools.hostlist.HostList` and `lsdtools.hostset.HostSet`: compact lists
  and sets of host names in the `prefix[0-5,12,20-25]` notation.
- `lsdtools.hostrange` and `lsdtools.parsing`: the building blocks behind
  them. `HostRange` and `Hostname` are in `hostrange`. The expression parser
  (`parse_hostlist`, `tokenize`, `parse_range_list`) is in `parsing`.

Every structure guards its state with a re-entrant lock, so one instance can
be shared between threads.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Host lists

```python
from lsdtools.hostlist import HostList

hl = HostList("tux[0-5,12] login1")
len(hl)                  # 8
hl.ranged_string()       # 'tux[0-5,12],login1'
hl.delete("tux[1-3]")    # 3
list(hl)                 # ['tux0', 'tux4', 'tux5', 'tux12', 'login1']
hl.find("tux12")         # 3  (-1 when absent)
hl.nth(0)                # 'tux0'  (IndexError when out of range)
hl.deranged_string()     # 'tux0,tux4,tux5,tux12,login1'
```

Host names in an expression are separated by commas, spaces or tabs. A
separator inside brackets does not split. Inside brackets you can write
comma-separated numbers and `lo-hi` ranges. Zero padding is kept, so
`n[01-03]` expands to `n01`, `n02` and `n03`. Text after the closing bracket is
added to each host name as a suffix. A range with more than 16384 hosts raises
`lsdtools.parsing.RangeTooLargeError`. A range that cannot be parsed raises
`lsdtools.parsing.HostlistError`, which is a `ValueError`.

`HostList` keeps hosts in the order they were pushed and allows duplicates.

- `push()`, `push_host()` and `push_list()` add hosts at the end.
- `pop()` and `shift()` remove single hosts from the end and from the start.
  `pop_range()` and `shift_range()` remove a whole bracketed group and return
  it as a string. Each returns `None` when the list is empty.
- `sort()` sorts by prefix and then by numeric suffix. `uniq()` sorts and
  drops duplicates.
- `delete()`, `delete_host()` and `delete_nth()` remove hosts.

`iterator()` returns a `HostListIterator`. It yields host names and stays
valid when the list changes. Its `next_range()` returns the next bracketed
group. Its `remove()` deletes the host that was returned last. It can be used
as a context manager, which closes it on exit.

## Host sets

A `HostSet` is always sorted and never holds duplicates:

```python
from lsdtools.hostset import HostSet

hs = HostSet("n[3-5],n1,n4")
str(hs)                  # 'n[1,3-5]'
hs.insert("n2")          # 1 (the number of new hosts)
"n2" in hs               # True
hs.within("n[1-3]")      # True
len(hs)                  # 5
```

`HostSet` also has `delete`, `delete_host`, `shift`, `pop`, `shift_range`,
`pop_range`, `ranged_string`, `deranged_string`, `nranges`, `copy` and
`iterator`. They behave as the `HostList` methods of the same name do.

## Hash table

```python
from lsdtools.hashtable import HashTable, hash_key_string

table = HashTable(hash_key_string, lambda a, b: a != b, None, 0)
table.insert("alpha", 1)
table.find("alpha")      # 1
table.find("beta")       # None
table.remove("alpha")    # 1
```

The comparison function must return a false value (zero) when two keys are
equal. A size of zero or less gives the default of 1213 slots. Inserting a key
that is already present raises `DuplicateKeyError`. `None` is not accepted as
a key or as data.

- `delete_if(predicate, arg)` deletes the items for which
  `predicate(data, key, arg)` is greater than zero and returns how many went.
- `for_each(func, arg)` counts the items for which `func(data, key, arg)` is
  greater than zero.
- `destroy()` empties the table.

The deletion callback is called for each item removed by `delete_if` or
`destroy`. `hash_key_string` hashes text to an unsigned 32-bit value.

## Linked list

```python
from lsdtools.linkedlist import LinkedList

items = LinkedList(None)
items.append(3)
items.prepend(1)
items.sort(lambda x, y: x - y)
list(items)              # [1, 3]
items.pop()              # 1
```

`push`/`pop` use the list as a stack. `enqueue`/`dequeue` use it as a queue.
`peek` returns the first item without removing it. Items may not be `None`.

`iterator()` returns a `ListIterator`. It has `insert` (before the last item
returned), `find`, `remove` and `delete`. `remove` hands the item back to you.
`delete` passes it to the list's deletion callback.

## What this package does not do

This is a library only. It has no command-line program. It does not resolve,
contact or check the hosts it names. Host lists and sets are held in memory
and are not stored anywhere.