import pytest

from dashboard.services import fill_buckets


def test_no_pairs_gives_all_missing():
    assert fill_buckets(12, []) == [None] * 12


def test_first_and_last_bucket():
    out = fill_buckets(31, [(1, 5), (31, 9)])
    assert len(out) == 31
    assert out[0] == 5
    assert out[30] == 9
    assert out[1:30] == [None] * 29


def test_zero_is_kept_distinct_from_missing():
    assert fill_buckets(3, [(2, 0)]) == [None, 0, None]


def test_repeated_index_keeps_last_value():
    assert fill_buckets(3, [(2, 1), (2, 7)]) == [None, 7, None]


def test_index_past_the_end_is_a_caller_error():
    with pytest.raises(IndexError):
        fill_buckets(28, [(29, 1)])


@pytest.mark.parametrize("index", [0, -1])
def test_index_below_one_is_a_caller_error(index):
    with pytest.raises(IndexError):
        fill_buckets(3, [(index, 7)])
