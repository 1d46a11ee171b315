"""Reader for watermark bitmaps: 4-bit RLE-compressed BMP files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from epsraster.geometry import Point, Size

_BMP_TYPE = 19778
_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IIIHHIIIIII")
_PALETTE_ENTRY = 4
_MAX_PALETTE = 16


class WbfFormatError(ValueError):
    """Raised when a watermark bitmap cannot be read."""


def _next_byte(stream: BinaryIO) -> int:
    data = stream.read(1)
    if not data:
        raise WbfFormatError("unexpected end of RLE4 data")
    return data[0]


def _set_bit(row: bytearray, index: int) -> None:
    row[index // 8] |= 1 << (index % 8)


def _get_bit(row: bytearray, index: int) -> bool:
    return bool(row[index // 8] & (1 << (index % 8)))


def decompress_rle4(stream: BinaryIO, size: Size) -> list[bytearray]:
    """Decode RLE4 pixel data into one bit row per line; palette index 0 marks black.

    Rows are indexed by bitmap line, with the first encoded line stored at
    the bottom (index ``size.height - 1``).
    """
    bytes_per_line = (size.width + 7) // 8
    rows = [bytearray(bytes_per_line) for _ in range(size.height)]

    def mark(x: int, y: int, color: int) -> None:
        if color == 0 and 0 <= x < size.width:
            _set_bit(rows[y], x)

    y = size.height - 1
    x = 0
    while y >= 0:
        code = _next_byte(stream)
        if code == 0:
            code = _next_byte(stream)
            if code == 0:  # end of line
                x = 0
                y -= 1
            elif code == 1:  # end of image
                break
            elif code == 2:  # delta
                x += _next_byte(stream)
                y -= _next_byte(stream)
            else:  # absolute run
                data = 0
                for i in range(code):
                    if i & 1:
                        color = data & 0x0F
                    else:
                        data = _next_byte(stream)
                        color = (data & 0xF0) >> 4
                    mark(x, y, color)
                    x += 1
                if code & 3 in (1, 2):
                    _next_byte(stream)  # word-alignment padding
        else:  # encoded run
            data = _next_byte(stream)
            for i in range(code):
                color = (data & 0x0F) if i & 1 else ((data >> 4) & 0x0F)
                mark(x, y, color)
                x += 1
    return rows


@dataclass
class WbfImage:
    """A decoded watermark bitmap holding one bit per pixel."""

    width: int
    height: int
    rows: list[bytearray] = field(repr=False)
    palette: tuple[tuple[int, int, int], ...] = ()

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def is_black(self, point: Point) -> bool:
        """Tell whether the pixel at ``point`` is black; outside the image it is not."""
        if not (0 <= point.y < self.height and 0 <= point.x < self.width):
            return False
        return _get_bit(self.rows[point.y], point.x)


def _read_exact(stream: BinaryIO, count: int, what: str) -> bytes:
    data = stream.read(count)
    if len(data) < count:
        raise WbfFormatError(f"truncated {what}")
    return data


def read_wbf(stream: BinaryIO) -> WbfImage:
    """Read a watermark bitmap from a binary stream."""
    bmp_type, *_ = _FILE_HEADER.unpack(
        _read_exact(stream, _FILE_HEADER.size, "file header"))
    if bmp_type != _BMP_TYPE:
        raise WbfFormatError("invalid BMP file header")

    info = _INFO_HEADER.unpack(_read_exact(stream, _INFO_HEADER.size, "info header"))
    width, height, colors_used = info[1], info[2], info[9]
    if colors_used > _MAX_PALETTE:
        raise WbfFormatError(f"palette of {colors_used} colours is too large")

    raw_palette = _read_exact(stream, colors_used * _PALETTE_ENTRY, "palette")
    palette = tuple(
        (red, green, blue)
        for blue, green, red, _ in struct.iter_unpack("<4B", raw_palette)
    )

    size = Size(width, height)
    rows = decompress_rle4(stream, size)
    return WbfImage(width=width, height=height, rows=rows, palette=palette)