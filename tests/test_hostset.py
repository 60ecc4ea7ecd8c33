import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lsdtools.hostlist import HostList
from lsdtools.hostset import HostSet
from lsdtools.parsing import HostlistError


def _sorted_unique(expr):
    hl = HostList(expr)
    hl.uniq()
    return hl


def test_create_sorts_and_merges():
    hs = HostSet("n3,n1,n2")
    assert str(hs) == "n[1-3]"
    assert len(hs) == 3


def test_create_removes_duplicates():
    hs = HostSet("n1,n1,n2,n2")
    assert len(hs) == 2
    assert list(hs) == ["n1", "n2"]


def test_empty_set():
    hs = HostSet()
    assert len(hs) == 0
    assert hs.pop() is None
    assert hs.shift() is None
    assert hs.shift_range() is None
    assert hs.pop_range() is None
    assert str(hs) == ""


def test_insert_counts_only_new_hosts():
    hs = HostSet("n[1-5]")
    assert hs.insert("n[3-8]") == 3
    assert len(hs) == 8
    assert list(hs) == list(HostList("n[1-8]"))


def test_insert_before_existing_range_merges_with_previous():
    hs = HostSet("n[1-5],n10")
    assert hs.insert("n[3-8]") == 3
    assert len(hs) == 9
    assert str(hs) == str(HostList("n[1-8],n10"))


def test_insert_duplicate_adds_nothing():
    hs = HostSet("n[1-4]")
    assert hs.insert("n2") == 0
    assert len(hs) == 4


def test_insert_keeps_prefix_order():
    hs = HostSet("b[1-2]")
    assert hs.insert("a1") == 1
    assert hs.shift() == "a1"
    assert list(hs) == ["b1", "b2"]


def test_insert_invalid_raises():
    hs = HostSet("n1")
    with pytest.raises(HostlistError):
        hs.insert("n[5-2]")


def test_create_invalid_raises():
    with pytest.raises(HostlistError):
        HostSet("n[1-x]")


def test_within_and_contains():
    hs = HostSet("n[1-10],login")
    assert hs.within("n[2-4],login")
    assert not hs.within("n[9-11]")
    assert "n7" in hs
    assert "login" in hs
    assert "n11" not in hs
    assert 5 not in hs


def test_delete_and_delete_host():
    hs = HostSet("n[1-6]")
    assert hs.delete("n[2-3],n9") == 2
    assert len(hs) == 4
    assert "n2" not in hs
    assert hs.delete_host("n6") is True
    assert hs.delete_host("n6") is False
    assert list(hs) == ["n1", "n4", "n5"]


def test_shift_and_pop():
    hs = HostSet("n[1-3]")
    assert hs.shift() == "n1"
    assert hs.pop() == "n3"
    assert list(hs) == ["n2"]


def test_shift_and_pop_range():
    hs = HostSet("a[1-2],b3,c[4-5]")
    assert hs.shift_range() == str(HostSet("a[1-2]"))
    assert hs.pop_range() == str(HostSet("c[4-5]"))
    assert str(hs) == "b3"


def test_deranged_string():
    hs = HostSet("n[3,1,2]")
    assert hs.deranged_string() == "n1,n2,n3"
    assert hs.ranged_string() == str(hs)


def test_nranges():
    hs = HostSet("n[5-6],n[1-3]")
    assert hs.nranges() == 2


def test_copy_is_independent():
    hs = HostSet("n[1-4]")
    dup = hs.copy()
    dup.insert("n9")
    assert "n9" in dup
    assert "n9" not in hs
    assert len(hs) == 4


def test_iterator_walks_all_hosts():
    hs = HostSet("n[2,1],x")
    it = hs.iterator()
    assert list(it) == list(hs)
    it.reset()
    assert next(it) == "n1"
    it.close()


def test_matches_uniqued_hostlist():
    expr = "c2,a[3-1],b1,a2,c[1-3]" .replace("[3-1]", "[1-3]")
    hs = HostSet(expr)
    expected = _sorted_unique(expr)
    assert str(hs) == str(expected)
    assert len(hs) == len(expected)


@settings(max_examples=60, deadline=None)
@given(st.lists(st.integers(min_value=0, max_value=200), max_size=30))
def test_incremental_insert_matches_bulk_create(nums):
    names = [f"n{i}" for i in nums]
    bulk = HostSet(",".join(names))
    incremental = HostSet()
    added = sum(incremental.insert(name) for name in names)
    assert added == len(set(nums))
    assert len(bulk) == len(set(nums))
    assert list(incremental) == list(bulk)
    for name in names:
        assert name in bulk