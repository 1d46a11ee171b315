"""Pipeline stage that turns a page upside down by reversing its raster order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from epsraster.page import RasterError


class _Sink(Protocol):
    def process(self, raster: bytes | bytearray, pixel_num: int) -> int: ...

    def flush(self) -> None: ...


@dataclass
class ReverseOptions:
    """Shape of the page held back by the reverse stage."""

    bytes_per_pixel: int = 0
    bytes_per_raster: int = 0
    top_margin: int = 0
    num_raster: int = 0


class ReverseStage:
    """Holds a whole page back and emits its rasters bottom first on flush.

    Rasters are stored from the last slot upwards; rasters beyond the page
    height are dropped. Slots that are never written stay white (0xFF).
    """

    def __init__(self, options: ReverseOptions, sink: _Sink | None = None) -> None:
        if options.bytes_per_pixel <= 0:
            raise RasterError("bytes per pixel must be positive")
        self.options = options
        self.sink = sink
        self._rasters = [
            bytearray(b"\xff" * options.bytes_per_raster)
            for _ in range(max(0, options.num_raster))
        ]
        self._current = options.num_raster - 1
        self._flushed = False

    def _connected(self) -> _Sink:
        if self.sink is None:
            raise RasterError("reverse stage has no output connected")
        return self.sink

    def process(self, raster: bytes | bytearray, pixel_num: int) -> int:
        """Store one raster; nothing is emitted until flush, so return 0."""
        self._connected()
        if self._current >= 0:
            count = min(len(raster), self.options.bytes_per_raster)
            self._rasters[self._current][:count] = raster[:count]
        self._current -= 1
        return 0

    def flush(self) -> int:
        """Emit the stored rasters in reversed order once; return the rasters emitted.

        A failing output stops the emission, but the end of the page is
        still passed on.
        """
        sink = self._connected()
        if self._flushed:
            return 0
        self._flushed = True
        pixels = self.options.bytes_per_raster // self.options.bytes_per_pixel
        margin = max(self._current, 0)
        emitted = 0
        try:
            for raster in self._rasters[margin:]:
                emitted += sink.process(raster, pixels)
        except RasterError:
            pass
        sink.flush()
        return emitted

    def close(self) -> None:
        """Release the stored rasters."""
        self._rasters = []
        self.sink = None

    def __enter__(self) -> ReverseStage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()