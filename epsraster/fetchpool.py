"""Pool that holds processed rasters until a consumer fetches them in order."""

from __future__ import annotations

from dataclasses import dataclass

from epsraster.page import FetchStatus, RasterError


@dataclass
class FetchData:
    """One raster handed to the pool.

    With ``duplicate`` set the pool keeps its own copy of the bytes;
    otherwise it keeps the object it was given. A ``raster`` of None marks
    the end of a page.
    """

    raster: bytes | bytearray | None = None
    pixel_num: int = 0
    duplicate: bool = True

    @property
    def raster_bytes(self) -> int:
        return 0 if self.raster is None else len(self.raster)


@dataclass
class _Node:
    fetched: bool
    serial: int
    data: FetchData


def _retain(data: FetchData) -> FetchData:
    if data.duplicate and data.raster is not None:
        return FetchData(bytes(data.raster), data.pixel_num, True)
    return FetchData(data.raster, data.pixel_num, data.duplicate)


class FetchPool:
    """Keeps rasters numbered in arrival order and hands them out in that order.

    Slots of rasters already fetched are reused for new ones.
    """

    def __init__(self, required_count: int) -> None:
        self.required_count = required_count
        self.retained_count = 0
        self.fetched_count = 0
        self.serial_number = 0
        self._nodes: list[_Node] = []

    def add(self, data: FetchData) -> None:
        """Store a raster under the next serial number."""
        retained = _retain(data)
        for node in self._nodes:
            if node.fetched:
                node.fetched = False
                node.serial = self.serial_number
                node.data = retained
                break
        else:
            self._nodes.append(_Node(False, self.serial_number, retained))

        if data.raster is not None:
            self.serial_number += 1
            self.retained_count += 1

    def fetch(self) -> FetchData:
        """Return the next raster in order; raise RasterError if it is not there."""
        for node in self._nodes:
            if not node.fetched and node.serial == self.fetched_count:
                node.fetched = True
                self.fetched_count += 1
                self.retained_count -= 1
                return node.data
        raise RasterError(f"raster {self.fetched_count} is not in the pool")

    def status(self) -> FetchStatus:
        """Tell whether the pool is complete, holds rasters or needs more."""
        if self.fetched_count == self.required_count:
            return FetchStatus.COMPLETED
        if self.retained_count == 0:
            return FetchStatus.NEED_RASTER
        if self.retained_count > 0:
            return FetchStatus.HAS_RASTER
        return FetchStatus.ERROR

    def __len__(self) -> int:
        return self.retained_count