import pytest
from hypothesis import given
from hypothesis import strategies as st

from lsdtools.linkedlist import LinkedList


def _cmp(a, b):
    return (a > b) - (a < b)


def _make(items, del_func=None):
    ll = LinkedList(del_func)
    for item in items:
        ll.append(item)
    return ll


def test_empty_list():
    ll = LinkedList()
    assert ll.is_empty()
    assert len(ll) == 0
    assert ll.peek() is None
    assert ll.pop() is None
    assert ll.dequeue() is None


def test_append_and_prepend_order():
    ll = LinkedList()
    assert ll.append("b") == "b"
    assert ll.prepend("a") == "a"
    ll.append("c")
    assert list(ll) == ["a", "b", "c"]
    assert len(ll) == 3
    assert not ll.is_empty()


def test_none_items_rejected():
    ll = LinkedList()
    with pytest.raises(ValueError):
        ll.append(None)
    with pytest.raises(ValueError):
        ll.prepend(None)
    assert len(ll) == 0


def test_stack_is_lifo():
    ll = LinkedList()
    inputs = [1, 2, 3, 4]
    for x in inputs:
        ll.push(x)
    assert ll.peek() == inputs[-1]
    assert [ll.pop() for _ in inputs] == list(reversed(inputs))
    assert ll.pop() is None


def test_queue_is_fifo():
    ll = LinkedList()
    inputs = ["x", "y", "z"]
    for x in inputs:
        ll.enqueue(x)
    assert [ll.dequeue() for _ in inputs] == inputs
    assert ll.is_empty()


def test_pop_does_not_call_del_func():
    seen = []
    ll = _make([1, 2], seen.append)
    assert ll.pop() == 1
    assert seen == []


def test_find_first():
    ll = _make([3, 8, 10, 12])
    assert ll.find_first(lambda x, k: x > k, 5) == 8
    assert ll.find_first(lambda x, k: x > k, 100) is None


def test_delete_all_calls_del_func():
    seen = []
    ll = _make(list(range(10)), seen.append)
    n = ll.delete_all(lambda x, k: x % k == 0, 2)
    assert n == len(seen)
    assert seen == [x for x in range(10) if x % 2 == 0]
    assert list(ll) == [x for x in range(10) if x % 2 == 1]


def test_for_each_counts_items():
    ll = _make(["a", "b", "c"])
    visited = []
    assert ll.for_each(lambda x, acc: acc.append(x), visited) == 3
    assert visited == ["a", "b", "c"]


def test_for_each_aborts_with_negative_position():
    ll = _make([5, 6, 7, 8])
    visited = []

    def func(x, acc):
        acc.append(x)
        return -1 if x == 7 else 0

    assert ll.for_each(func, visited) == -3
    assert visited == [5, 6, 7]


def test_sort_is_stable():
    pairs = [(2, "a"), (1, "b"), (2, "c"), (1, "d")]
    ll = _make(pairs)
    ll.sort(lambda x, y: _cmp(x[0], y[0]))
    assert list(ll) == sorted(pairs, key=lambda p: p[0])


@given(st.lists(st.integers()))
def test_sort_matches_sorted(values):
    ll = _make(values)
    ll.sort(_cmp)
    assert list(ll) == sorted(values)
    assert len(ll) == len(values)


def test_sort_resets_iterators():
    ll = _make([3, 1, 2])
    it = ll.iterator()
    next(it)
    next(it)
    ll.sort(_cmp)
    assert list(it) == [1, 2, 3]


def test_iterator_traverses_and_resets():
    items = ["a", "b", "c"]
    ll = _make(items)
    it = ll.iterator()
    assert list(it) == items
    with pytest.raises(StopIteration):
        next(it)
    it.reset()
    assert next(it) == "a"


def test_iterator_remove_last_returned():
    ll = _make([1, 2, 3, 4])
    it = ll.iterator()
    assert it.remove() is None
    next(it)
    assert next(it) == 2
    assert it.remove() == 2
    assert it.remove() is None
    assert next(it) == 3
    assert list(ll) == [1, 3, 4]


@given(st.lists(st.integers()))
def test_iterator_remove_filters(values):
    ll = _make(values)
    it = ll.iterator()
    for x in it:
        if x % 2:
            assert it.remove() == x
    assert list(ll) == [x for x in values if x % 2 == 0]


def test_iterator_delete_uses_del_func():
    seen = []
    ll = _make(["p", "q"], seen.append)
    it = ll.iterator()
    assert it.delete() is False
    next(it)
    assert it.delete() is True
    assert seen == ["p"]
    assert list(ll) == ["q"]


def test_iterator_insert_before_last_returned():
    ll = _make(["a", "c"])
    it = ll.iterator()
    next(it)
    assert next(it) == "c"
    it.insert("b")
    assert list(ll) == ["a", "b", "c"]
    with pytest.raises(StopIteration):
        next(it)


def test_iterator_insert_at_end_when_exhausted():
    ll = _make([1, 2])
    it = ll.iterator()
    assert list(it) == [1, 2]
    it.insert(3)
    assert list(ll) == [1, 2, 3]


def test_iterator_insert_before_start():
    ll = _make([2, 3])
    it = ll.iterator()
    it.insert(1)
    assert list(ll) == [1, 2, 3]
    assert next(it) == 2


def test_iterator_sees_appended_items():
    ll = _make([1])
    it = ll.iterator()
    assert next(it) == 1
    ll.append(2)
    assert next(it) == 2


def test_iterator_unaffected_by_prepend():
    ll = _make(["b", "c"])
    it = ll.iterator()
    assert next(it) == "b"
    ll.prepend("a")
    assert next(it) == "c"
    assert it.remove() == "c"
    assert list(ll) == ["a", "b"]


def test_iterator_survives_removal_of_next_item():
    ll = _make([1, 2, 3])
    it = ll.iterator()
    assert next(it) == 1
    ll.delete_all(lambda x, k: x == k, 2)
    assert next(it) == 3


def test_iterator_find():
    ll = _make([1, 4, 5, 8])
    it = ll.iterator()
    assert it.find(lambda x, k: x % k == 0, 4) == 4
    assert it.find(lambda x, k: x % k == 0, 4) == 8
    assert it.find(lambda x, k: x % k == 0, 4) is None


def test_closed_iterator_raises():
    ll = _make([1])
    with ll.iterator() as it:
        assert next(it) == 1
    with pytest.raises(RuntimeError):
        next(it)


def test_destroy_discards_items_and_closes_iterators():
    seen = []
    items = ["a", "b", "c"]
    ll = _make(items, seen.append)
    it = ll.iterator()
    ll.destroy()
    assert seen == items
    assert ll.is_empty()
    with pytest.raises(RuntimeError):
        it.reset()