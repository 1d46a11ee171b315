"""Pipeline stage that scales rasters to the printable area by nearest neighbour."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Protocol

from epsraster.page import RasterError

_F32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


class _Sink(Protocol):
    def process(self, raster: bytes | bytearray, pixel_num: int) -> int: ...

    def flush(self) -> None: ...


@dataclass
class ScaleOptions:
    """Source and printable area of the page being scaled."""

    do_scaling: bool = False
    bytes_per_pixel: int = 0
    src_print_area_x: int = 0
    src_print_area_y: int = 0
    prt_print_area_x: int = 0
    prt_print_area_y: int = 0


class ScaleStage:
    """Scales rasters with one uniform factor, keeping the aspect ratio.

    The factor is the smaller of the horizontal and vertical ratios between
    the printable and the source area. Fractional parts accumulate, so that
    over a page the right number of lines and pixels is emitted. Without
    scaling, rasters pass through unchanged.
    """

    def __init__(self, options: ScaleOptions, sink: _Sink | None = None) -> None:
        self.options = options
        self.sink = sink
        self._raster_index = 0
        self._scale = 1.0
        self._fraction = 0.0
        self._line_carry = 0.0
        self._scaled_pixels = 0
        self._scaled_bytes = 0
        if options.do_scaling:
            if options.src_print_area_x <= 0 or options.src_print_area_y <= 0:
                raise RasterError("source area must not be empty when scaling")
            x_scale = _f32(options.prt_print_area_x / options.src_print_area_x)
            y_scale = _f32(options.prt_print_area_y / options.src_print_area_y)
            self._scale = min(x_scale, y_scale)
            self._fraction = _f32(self._scale - int(self._scale))
            self._scaled_pixels = int(_f32(options.src_print_area_x * self._scale))
            self._scaled_bytes = self._scaled_pixels * options.bytes_per_pixel

    @property
    def scale(self) -> float:
        """The factor rasters are scaled by."""
        return self._scale

    @property
    def scaled_pixels(self) -> int:
        """Width in pixels of a scaled raster."""
        return self._scaled_pixels

    def _connected(self) -> _Sink:
        if self.sink is None:
            raise RasterError("scale stage has no output connected")
        return self.sink

    def _scale_line(self, raster: bytes | bytearray, pixel_num: int) -> bytearray:
        bpp = self.options.bytes_per_pixel
        limit = self._scaled_bytes
        out = bytearray(b"\xff" * limit)
        whole = int(self._scale)
        carry = 0.0
        pos = 0
        for i in range(pixel_num):
            copies = whole
            carry = _f32(carry + self._fraction)
            if carry >= 1.0:
                copies += 1
                carry = _f32(carry - 1.0)
            pixel = raster[i * bpp:(i + 1) * bpp]
            for _ in range(copies):
                end = min(pos + bpp, limit)
                if pos < end:
                    out[pos:end] = pixel[:end - pos]
                pos += bpp
        return out

    def process(self, raster: bytes | bytearray, pixel_num: int) -> int:
        """Scale one raster and pass it on; return the rasters emitted."""
        sink = self._connected()
        if not self.options.do_scaling:
            return sink.process(raster, pixel_num)

        if pixel_num < 0 or pixel_num * self.options.bytes_per_pixel > len(raster):
            raise RasterError(f"raster of {len(raster)} bytes holds fewer than {pixel_num} pixels")

        lines = int(self._scale)
        self._line_carry = _f32(self._line_carry + self._fraction)
        if self._line_carry >= 1.0:
            lines += 1
            self._line_carry = _f32(self._line_carry - 1.0)
        self._raster_index += 1
        if lines <= 0:
            return 0

        scaled = self._scale_line(raster, pixel_num)
        return sum(sink.process(scaled, self._scaled_pixels) for _ in range(lines))

    def flush(self) -> None:
        """Pass the end of the page on."""
        self._connected().flush()

    def close(self) -> None:
        """Disconnect the stage from its output."""
        self.sink = None

    def __enter__(self) -> ScaleStage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()