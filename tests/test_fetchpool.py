import pytest

from epsraster.fetchpool import FetchData, FetchPool
from epsraster.page import FetchStatus, RasterError


def test_new_pool_needs_raster():
    assert FetchPool(2).status() is FetchStatus.NEED_RASTER


def test_pool_with_nothing_required_is_completed():
    assert FetchPool(0).status() is FetchStatus.COMPLETED


def test_add_then_status_has_raster():
    pool = FetchPool(2)
    pool.add(FetchData(b"ab", 2))
    assert pool.status() is FetchStatus.HAS_RASTER
    assert len(pool) == 1


def test_fetch_returns_rasters_in_order():
    pool = FetchPool(3)
    for line in (b"aa", b"bb", b"cc"):
        pool.add(FetchData(line, 2))
    assert [pool.fetch().raster for _ in range(3)] == [b"aa", b"bb", b"cc"]
    assert pool.status() is FetchStatus.COMPLETED


def test_fetching_all_retained_needs_more():
    pool = FetchPool(3)
    pool.add(FetchData(b"aa", 2))
    pool.fetch()
    assert pool.status() is FetchStatus.NEED_RASTER


def test_fetch_from_empty_pool_raises():
    with pytest.raises(RasterError):
        FetchPool(1).fetch()


def test_fetch_past_available_raises():
    pool = FetchPool(3)
    pool.add(FetchData(b"aa", 2))
    pool.fetch()
    with pytest.raises(RasterError):
        pool.fetch()


def test_duplicate_keeps_its_own_copy():
    source = bytearray(b"ab")
    pool = FetchPool(1)
    pool.add(FetchData(source, 2, duplicate=True))
    source[0] = ord("z")
    assert pool.fetch().raster == b"ab"


def test_without_duplicate_shares_the_buffer():
    source = bytearray(b"ab")
    pool = FetchPool(1)
    pool.add(FetchData(source, 2, duplicate=False))
    fetched = pool.fetch()
    assert fetched.raster is source


def test_slots_are_reused_and_order_kept():
    pool = FetchPool(4)
    pool.add(FetchData(b"aa", 2))
    pool.add(FetchData(b"bb", 2))
    assert pool.fetch().raster == b"aa"
    pool.add(FetchData(b"cc", 2))
    pool.add(FetchData(b"dd", 2))
    assert [pool.fetch().raster for _ in range(3)] == [b"bb", b"cc", b"dd"]
    assert pool.status() is FetchStatus.COMPLETED


def test_end_marker_does_not_advance_serial():
    pool = FetchPool(2)
    pool.add(FetchData(b"aa", 2))
    pool.add(FetchData(None))
    assert pool.serial_number == 1
    assert pool.retained_count == 1
    assert pool.fetch().raster == b"aa"


def test_fetch_data_reports_its_size():
    assert FetchData(b"abc", 3).raster_bytes == 3
    assert FetchData(None).raster_bytes == 0