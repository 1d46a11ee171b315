"""Pipeline stage that blends a watermark onto a region of each raster."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from epsraster.geometry import Color, Rect, in_blending_bounds
from epsraster.page import RasterError
from epsraster.watermark import BlendSourceType, create_blender


class _Sink(Protocol):
    def process(self, raster: bytes | bytearray, pixel_num: int) -> int: ...

    def flush(self) -> None: ...


@dataclass
class BlendOptions:
    """Where and how a blend source is laid over the page."""

    source_path: str | None = None
    source_type: BlendSourceType = BlendSourceType.WATERMARK
    frame: Rect = field(default_factory=Rect)
    bounds: Rect = field(default_factory=Rect)
    color: Color = field(default_factory=Color)


class BlendStage:
    """Blends a source image into the rasters that fall within its bounds."""

    def __init__(self, options: BlendOptions, sink: _Sink | None = None) -> None:
        self.options = options
        self.sink = sink
        self._raster_index = 0
        self._blender = create_blender(options.source_type)
        self._blender.open(options.source_path, options.bounds.size, options.color)

    def _connected(self) -> _Sink:
        if self.sink is None:
            raise RasterError("blend stage has no output connected")
        return self.sink

    def process(self, raster: bytes | bytearray, pixel_num: int) -> int:
        """Blend into one raster and pass it on; return the rasters emitted."""
        sink = self._connected()
        buffer = bytearray(raster)
        bounds = self.options.bounds
        if in_blending_bounds(self._raster_index, bounds):
            if pixel_num <= 0:
                raise RasterError("raster has no pixels")
            bytes_per_pixel = len(buffer) // pixel_num
            start = bounds.origin.x * bytes_per_pixel
            count = 0
            if bytes_per_pixel:
                count = min(bounds.size.width, max(0, (len(buffer) - start) // bytes_per_pixel))
            if count > 0:
                with memoryview(buffer) as view:
                    region = view[start:start + count * bytes_per_pixel]
                    self._blender.blend_pixels(region, count)
                    region.release()
        self._raster_index += 1
        sink.process(buffer, pixel_num)
        return 1

    def flush(self) -> None:
        """Pass the end of the page on."""
        self._connected().flush()

    def close(self) -> None:
        """Release the blend source."""
        self._blender.close()

    def __enter__(self) -> BlendStage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()