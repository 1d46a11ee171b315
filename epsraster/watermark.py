"""Watermark blend source: overlays a watermark bitmap onto raster lines."""

from __future__ import annotations

import struct
from enum import Enum

from epsraster.geometry import Color, Point, Rect, Size, in_blending_bounds, make_rect
from epsraster.page import RasterError
from epsraster.wbf import WbfFormatError, WbfImage, read_wbf

_F32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


def _mix(channel: int, target: float, alpha: float) -> int:
    value_a = _f32(channel / 255.0)
    tinted = _f32(alpha * target)
    value = _f32((1.0 - alpha) * value_a + tinted)
    return max(0, min(255, int(_f32(value * 255.0))))


class BlendSourceType(Enum):
    """Kinds of image that can be blended onto a page."""

    WATERMARK = 0


class WatermarkSource:
    """Blends the black pixels of a watermark bitmap onto raster lines.

    The bitmap is scaled to fit the area given to :meth:`open`, keeping its
    aspect ratio, and centred in that area.
    """

    def __init__(self) -> None:
        self._image: WbfImage | None = None
        self._color = Color()
        self._fit_bounds = Rect()
        self._scale_ratio = 0.0
        self._raster_line = 0
        self._blending_line = 0

    @property
    def image_size(self) -> Size | None:
        return self._image.size if self._image is not None else None

    @property
    def fit_bounds(self) -> Rect:
        return self._fit_bounds

    @property
    def scale_ratio(self) -> float:
        return self._scale_ratio

    def open(self, source_path: str | None, size: Size, color: Color) -> None:
        """Load the watermark bitmap and fit it into an area of ``size``."""
        if source_path is None:
            raise RasterError("no watermark source path given")
        try:
            with open(source_path, "rb") as stream:
                image = read_wbf(stream)
        except OSError as exc:
            raise RasterError(f"cannot open watermark {source_path}: {exc}") from exc
        except WbfFormatError as exc:
            raise RasterError(f"cannot read watermark {source_path}: {exc}") from exc
        if image.width == 0 or image.height == 0:
            raise RasterError(f"watermark {source_path} is empty")

        x_scale = _f32(size.width / image.width)
        y_scale = _f32(size.height / image.height)
        ratio = min(x_scale, y_scale)
        if ratio <= 0:
            raise RasterError("watermark area is empty")

        fit_width = int(_f32(image.width * ratio))
        fit_height = int(_f32(image.height * ratio))
        self._fit_bounds = make_rect(
            int((size.width - fit_width) / 2),
            int((size.height - fit_height) / 2),
            fit_width,
            fit_height,
        )
        self._image = image
        self._scale_ratio = ratio
        self._raster_line = 0
        self._blending_line = 0
        self._color = color

    def blend_pixels(self, pixels: bytearray | memoryview, pixel_count: int) -> None:
        """Blend the next line of the watermark into ``pixels`` in place."""
        image = self._image
        if image is None:
            raise RasterError("watermark source is not open")
        if pixel_count <= 0:
            raise RasterError("no pixels to blend")
        bytes_per_pixel = len(pixels) // pixel_count

        line = self._raster_line
        self._raster_line += 1
        if not in_blending_bounds(line, self._fit_bounds):
            return

        ratio = self._scale_ratio
        y = int(_f32(self._blending_line / ratio))
        self._blending_line += 1
        channels = (self._color.red, self._color.green, self._color.blue)[:bytes_per_pixel]
        alpha = self._color.alpha

        for i in range(pixel_count):
            if not image.is_black(Point(int(_f32(i / ratio)), y)):
                continue
            base = i * bytes_per_pixel
            for k, target in enumerate(channels):
                pixels[base + k] = _mix(pixels[base + k], target, alpha)

    def close(self) -> None:
        """Release the loaded bitmap."""
        self._image = None

    def __enter__(self) -> WatermarkSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_blender(source_type: BlendSourceType | int) -> WatermarkSource:
    """Create the blend source for ``source_type``."""
    kind = BlendSourceType(source_type)
    if kind is BlendSourceType.WATERMARK:
        return WatermarkSource()
    raise ValueError(f"unsupported blend source {kind!r}")