"""Pipeline stage that mirrors each raster horizontally."""

from __future__ import annotations

from typing import Protocol

from epsraster.page import RasterError


class _Sink(Protocol):
    def process(self, raster: bytes | bytearray, pixel_num: int) -> int: ...

    def flush(self) -> None: ...


class MirrorStage:
    """Reverses the order of the pixels in every raster line."""

    def __init__(self, bytes_per_pixel: int, sink: _Sink | None = None) -> None:
        self.bytes_per_pixel = bytes_per_pixel
        self.sink = sink

    def _connected(self) -> _Sink:
        if self.sink is None:
            raise RasterError("mirror stage has no output connected")
        return self.sink

    def process(self, raster: bytes | bytearray, pixel_num: int) -> int:
        """Mirror one raster and pass it on; return the rasters emitted.

        Bytes past the last pixel are filled with white (0xFF).
        """
        sink = self._connected()
        bpp = self.bytes_per_pixel
        used = pixel_num * bpp
        if pixel_num < 0 or used > len(raster):
            raise RasterError(f"raster of {len(raster)} bytes holds fewer than {pixel_num} pixels")
        pixels = [raster[start:start + bpp] for start in range(0, used, bpp)] if bpp else []
        mirrored = bytearray(b"\xff" * len(raster))
        mirrored[:used] = b"".join(reversed(pixels))
        sink.process(mirrored, pixel_num)
        return 1

    def flush(self) -> None:
        """Pass the end of the page on."""
        self._connected().flush()

    def close(self) -> None:
        """Disconnect the stage from its output."""
        self.sink = None