"""Assembly of the raster processing stages a page needs."""

from __future__ import annotations

import copy
import struct
from collections.abc import Iterable, Iterator
from typing import Any, Protocol

from epsraster.blend import BlendOptions, BlendStage
from epsraster.geometry import Color, Rect, make_rect
from epsraster.mirror import MirrorStage
from epsraster.page import PageInfo, ProcessMode, WatermarkColor, WatermarkPosition
from epsraster.reverse import ReverseOptions, ReverseStage
from epsraster.scale import ScaleOptions, ScaleStage
from epsraster.watermark import BlendSourceType

_F32 = struct.Struct("<f")

# Opacity of the paper left visible, from the lightest level to the darkest.
_DENSITIES = (0.95, 0.9, 0.8, 0.75, 0.3, 0.25)

_COLORS = {
    WatermarkColor.BLACK: (0.0, 0.0, 0.0),
    WatermarkColor.BLUE: (0.0, 0.0, 1.0),
    WatermarkColor.LIME: (0.0, 1.0, 0.0),
    WatermarkColor.AQUA: (0.0, 1.0, 1.0),
    WatermarkColor.RED: (1.0, 0.0, 0.0),
    WatermarkColor.FUCHSIA: (1.0, 0.0, 1.0),
    WatermarkColor.YELLOW: (1.0, 1.0, 0.0),
}

# Horizontal and vertical placement: 0 start, 1 centred, 2 end.
_PLACEMENT = {
    WatermarkPosition.CENTER: (1, 1),
    WatermarkPosition.TOPLEFT: (0, 0),
    WatermarkPosition.TOP: (1, 0),
    WatermarkPosition.TOPRIGHT: (2, 0),
    WatermarkPosition.LEFT: (0, 1),
    WatermarkPosition.RIGHT: (2, 1),
    WatermarkPosition.BOTTOMLEFT: (0, 2),
    WatermarkPosition.BOTTOM: (1, 2),
    WatermarkPosition.BOTTOMRIGHT: (2, 2),
}


def _f32(value: float) -> float:
    return _F32.unpack(_F32.pack(value))[0]


class _Sink(Protocol):
    def process(self, raster: bytes | bytearray, pixel_num: int) -> int: ...

    def flush(self) -> Any: ...


def watermark_bounds(page: PageInfo) -> Rect:
    """Return where the watermark lies on the printable area of ``page``."""
    ratio = min(max(_f32(page.watermark.size_ratio), 0.0), 1.0)
    frame_width = page.prt_print_area_x
    frame_height = page.prt_print_area_y
    width = int(_f32(frame_width * ratio))
    height = int(_f32(frame_height * ratio))
    horizontal, vertical = _PLACEMENT[WatermarkPosition(page.watermark.position)]
    x = (frame_width - width) * horizontal // 2
    y = (frame_height - height) * vertical // 2
    return make_rect(x, y, width, height)


def watermark_color(page: PageInfo) -> Color:
    """Return the colour and opacity the watermark of ``page`` is blended with.

    Colour is used only for RGB pages; grayscale pages blend with black.
    """
    if page.bytes_per_pixel == 3:
        index = min(max(int(page.watermark.color), 0), len(_COLORS) - 1)
        red, green, blue = _COLORS[WatermarkColor(index)]
    else:
        red = green = blue = 0.0
    density = min(max(int(page.watermark.density), 0), len(_DENSITIES) - 1)
    alpha = _f32(1.0 - _f32(_DENSITIES[density]))
    return Color(red, green, blue, alpha)


class Pipeline:
    """The ordered stages a page's rasters go through."""

    def __init__(
        self,
        page: PageInfo,
        process_mode: ProcessMode = ProcessMode.PRINTING,
        stages: Iterable[Any] = (),
        duplicate: bool = True,
    ) -> None:
        self.page = page
        self.process_mode = ProcessMode(process_mode)
        self.stages = list(stages)
        self.duplicate = duplicate

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.stages)

    def connect(self, sink: _Sink) -> _Sink:
        """Chain the stages to one another and the last to ``sink``; return the head."""
        for stage, following in zip(self.stages, [*self.stages[1:], sink]):
            stage.sink = following
        return self.stages[0] if self.stages else sink

    def close(self) -> None:
        """Release every stage."""
        for stage in self.stages:
            stage.close()

    def __enter__(self) -> Pipeline:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_pipeline(page: PageInfo, process_mode: ProcessMode | int) -> Pipeline:
    """Build the stages ``page`` asks for: scale, watermark, mirror, then reverse."""
    page = copy.deepcopy(page)
    pipeline = Pipeline(page, ProcessMode(process_mode))

    if page.scale:
        pipeline.stages.append(ScaleStage(ScaleOptions(
            do_scaling=bool(page.scale),
            bytes_per_pixel=page.bytes_per_pixel,
            src_print_area_x=page.src_print_area_x,
            src_print_area_y=page.src_print_area_y,
            prt_print_area_x=page.prt_print_area_x,
            prt_print_area_y=page.prt_print_area_y,
        )))

    if page.watermark.use:
        pipeline.stages.append(BlendStage(BlendOptions(
            source_path=page.watermark.filepath,
            source_type=BlendSourceType.WATERMARK,
            frame=make_rect(0, 0, page.prt_print_area_x, page.prt_print_area_y),
            bounds=watermark_bounds(page),
            color=watermark_color(page),
        )))

    if page.mirror:
        pipeline.stages.append(MirrorStage(page.bytes_per_pixel))

    if page.reverse:
        pipeline.stages.append(ReverseStage(ReverseOptions(
            bytes_per_pixel=page.bytes_per_pixel,
            bytes_per_raster=page.prt_print_area_x * page.bytes_per_pixel,
            top_margin=page.src_print_area_y - page.prt_print_area_y,
            num_raster=page.prt_print_area_y,
        )))
        pipeline.duplicate = False

    return pipeline