"""Drives a page's rasters through a pipeline to the printer or a fetch pool."""

from __future__ import annotations

from collections.abc import Callable

from epsraster.fetchpool import FetchData, FetchPool
from epsraster.page import FetchStatus, PageInfo, ProcessMode, RasterError
from epsraster.pipeline import Pipeline

RasterOutput = Callable[[bytes, int], object]


def _fit(raster: bytes | bytearray, size: int) -> bytes:
    """Cut ``raster`` to ``size`` bytes or pad it with white (0xFF)."""
    if len(raster) >= size:
        return bytes(raster[:size])
    return bytes(raster) + b"\xff" * (size - len(raster))


class _PrinterSink:
    """End of a printing pipeline: hands each line of the page to the output."""

    def __init__(self, page: PageInfo, output: RasterOutput) -> None:
        self._page = page
        self._output = output
        self._index = 0

    def process(self, raster: bytes | bytearray, pixel_num: int) -> int:
        self._index += 1
        if self._index <= self._page.prt_print_area_y:
            width = self._page.prt_print_area_x
            self._output(_fit(raster, width * self._page.bytes_per_pixel), width)
        return 1

    def flush(self) -> None:
        """Nothing is held back at the end of a printing pipeline."""


class _PoolSink:
    """End of a fetching pipeline: stores each line in the fetch pool."""

    def __init__(self, pool: FetchPool, duplicate: bool) -> None:
        self._pool = pool
        self._duplicate = duplicate

    def process(self, raster: bytes | bytearray, pixel_num: int) -> int:
        self._pool.add(FetchData(raster, pixel_num, self._duplicate))
        return 1

    def flush(self) -> None:
        self._pool.add(FetchData(None, 0, self._duplicate))


class RasterProcessor:
    """Feeds the rasters of one page through a pipeline.

    In printing mode every processed line within the printable height goes
    to ``output`` as ``output(line, pixel_count)``; in fetching mode lines
    are kept in a pool for :meth:`fetch`.
    """

    def __init__(self, pipeline: Pipeline, output: RasterOutput | None = None) -> None:
        self.pipeline = pipeline
        page = pipeline.page
        self._pool: FetchPool | None = None
        if pipeline.process_mode is ProcessMode.FETCHING:
            self._pool = FetchPool(page.prt_print_area_y)
            sink = _PoolSink(self._pool, pipeline.duplicate)
        else:
            if output is None:
                raise RasterError("printing needs an output for the rasters")
            sink = _PrinterSink(page, output)
        self._head = pipeline.connect(sink)

    def print_raster(self, raster: bytes | bytearray, pixel_num: int) -> int:
        """Send one source raster down the pipeline; return the rasters emitted.

        The raster is cut or padded with white to the page's source width,
        which is the pixel count passed on whatever ``pixel_num`` says.
        """
        page = self.pipeline.page
        width = page.src_print_area_x
        line = _fit(raster, width * page.bytes_per_pixel)
        return self._head.process(line, width)

    def flush(self) -> None:
        """Signal the end of the page so stages holding rasters emit them."""
        self._head.flush()

    def _fetch_pool(self) -> FetchPool:
        if self._pool is None:
            raise RasterError("rasters can only be fetched in fetching mode")
        return self._pool

    def fetch(self, fetch_bytes: int) -> bytes:
        """Return up to ``fetch_bytes`` bytes of the next processed raster."""
        data = self._fetch_pool().fetch()
        if data.raster is None:
            raise RasterError("end of page reached")
        return bytes(data.raster[:max(0, min(fetch_bytes, data.raster_bytes))])

    def fetch_status(self) -> FetchStatus:
        """Tell whether processed rasters are waiting, needed or all fetched."""
        return self._fetch_pool().status()

    def close(self) -> None:
        """Release the pipeline's stages."""
        self.pipeline.close()

    def __enter__(self) -> RasterProcessor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()