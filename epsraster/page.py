"""Page description and shared enumerations for the raster pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class RasterError(Exception):
    """Raised when a raster pipeline stage cannot do its work."""


class WatermarkPosition(IntEnum):
    """Where a watermark sits on the printable area."""

    CENTER = 0
    TOPLEFT = 1
    TOP = 2
    TOPRIGHT = 3
    LEFT = 4
    RIGHT = 5
    BOTTOMLEFT = 6
    BOTTOM = 7
    BOTTOMRIGHT = 8


class WatermarkDensity(IntEnum):
    """Watermark darkness, from LEVEL1 (light) to LEVEL6 (dark)."""

    LEVEL1 = 0
    LEVEL2 = 1
    LEVEL3 = 2
    LEVEL4 = 3
    LEVEL5 = 4
    LEVEL6 = 5


class WatermarkColor(IntEnum):
    """Colour a watermark is blended with."""

    BLACK = 0
    BLUE = 1
    LIME = 2
    AQUA = 3
    RED = 4
    FUCHSIA = 5
    YELLOW = 6


class WatermarkSize(IntEnum):
    """Watermark size in steps of ten percent of the printable area."""

    SIZE_10 = 1
    SIZE_20 = 2
    SIZE_30 = 3
    SIZE_40 = 4
    SIZE_50 = 5
    SIZE_60 = 6
    SIZE_70 = 7
    SIZE_80 = 8
    SIZE_90 = 9
    SIZE_100 = 10

    def ratio(self) -> float:
        """Return the size as a fraction of the printable area."""
        return self.value / 10


@dataclass
class WatermarkOption:
    """Settings of the watermark blended onto a page."""

    use: bool = False
    filepath: str | None = None
    size_ratio: float = 0.0
    position: WatermarkPosition = WatermarkPosition.CENTER
    density: WatermarkDensity = WatermarkDensity.LEVEL1
    color: WatermarkColor = WatermarkColor.BLACK


@dataclass
class PageInfo:
    """Geometry of the source raster and of the printer's printable area."""

    bytes_per_pixel: int = 0
    src_print_area_x: int = 0
    src_print_area_y: int = 0
    prt_print_area_x: int = 0
    prt_print_area_y: int = 0
    scale: bool = False
    mirror: bool = False
    reverse: bool = False
    watermark: WatermarkOption = field(default_factory=WatermarkOption)


class ProcessMode(Enum):
    """Whether processed rasters go to the printer or into a fetch pool."""

    PRINTING = 0
    FETCHING = 1


class FetchStatus(Enum):
    """State of a fetch pool as seen by its consumer."""

    HAS_RASTER = 0
    NEED_RASTER = 1
    COMPLETED = 2
    ERROR = 3