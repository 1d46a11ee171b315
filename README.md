# epsraster

A pure-Python pipeline that prepares raster lines for an inkjet printer. You feed
it one line of packed pixel bytes at a time. Depending on the page description,
each line goes through these stages, in this order:

- **scale** (`epsraster.scale.ScaleStage`): resizes the source print area to the
  printable area by nearest-neighbour sampling. One uniform factor is used, the
  smaller of the horizontal and vertical ratios, so the aspect ratio is kept.
- **watermark** (`epsraster.blend.BlendStage`): blends the black pixels of a
  monochrome RLE4-compressed bitmap (WBF) into a region of the page.
- **mirror** (`epsraster.mirror.MirrorStage`): reverses the pixel order of each
  line. Bytes past the last pixel are filled with white (0xFF).
- **reverse** (`epsraster.reverse.ReverseStage`): holds the whole page back and
  sends it out bottom line first when the page is flushed.

The processed lines go to a callback that you supply. In fetching mode they go
instead to a `FetchPool`, and you take them out later.

## Installation

```
pip install .
```

To install the test dependencies too:

```
pip install .[test]
```

## Usage

Describe the page with a `PageInfo` object (`epsraster.page`). Build a
`Pipeline` from it with `create_pipeline` (`epsraster.pipeline`), then drive it
with a `RasterProcessor` (`epsraster.raster`):

```python
from epsraster.page import PageInfo, ProcessMode
from epsraster.pipeline import create_pipeline
from epsraster.raster import RasterProcessor

page = PageInfo(
    bytes_per_pixel=3,
    src_print_area_x=100,
    src_print_area_y=50,
    prt_print_area_x=200,
    prt_print_area_y=100,
    scale=True,
    mirror=True,
)

lines = []
pipeline = create_pipeline(page, ProcessMode.PRINTING)
with RasterProcessor(pipeline, lambda data, pixels: lines.append(data)) as processor:
    row = bytes(range(3)) * 100
    for _ in range(page.src_print_area_y):
        processor.print_raster(row, 100)
    processor.flush()
```

In printing mode the callback is called as `output(line, pixel_count)`. It gets
only lines within the printable height (`prt_print_area_y`). Each line is cut or
padded with white to the printable width. `print_raster` cuts or pads its input
to the source width in the same way, and returns the number of lines the
pipeline emitted. Call `flush()` at the end of each page: the reverse stage
emits nothing until then.

`create_pipeline` works on a copy of the page. It adds stages only for the flags
that are set: `scale`, `watermark.use`, `mirror` and `reverse`. With no stage,
lines go straight to the output. `Pipeline.connect(sink)` chains the stages to
each other and to a sink, and returns the head of the chain. `RasterProcessor`
does this for you.

### Watermarks

To blend a watermark into the page, set `page.watermark` to a `WatermarkOption`
with `use=True`. Give it the path of a WBF file, a `size_ratio` between 0 and 1,
a `WatermarkPosition`, a `WatermarkColor` and a `WatermarkDensity`.
`WatermarkSize.ratio()` turns a size step into a ratio, for example
`WatermarkSize.SIZE_50.ratio() == 0.5`.

The bitmap is loaded when the pipeline is created. A missing or unreadable file
raises `RasterError`. Within its bounds, the bitmap is scaled to fit with its
aspect ratio kept, and centred.

Two helpers show what the pipeline will use:

- `watermark_bounds(page)` gives the rectangle on the printable area.
- `watermark_color(page)` gives the blend colour and opacity. Colour applies
  only to 3-byte (RGB) pages; other pages blend with black.

You can also read WBF files directly. `epsraster.wbf.read_wbf(stream)` returns a
`WbfImage`, and `WbfImage.is_black(Point(x, y))` tells you whether a pixel is
set. `epsraster.watermark.WatermarkSource` does the blending on its own.

### Fetching mode

If you build the pipeline with `ProcessMode.FETCHING`, lines are kept in a
`FetchPool` instead of going to a callback, and no output is needed.

- `RasterProcessor.fetch_status()` returns a `FetchStatus`: `HAS_RASTER`,
  `NEED_RASTER` or `COMPLETED`. A page is complete once `prt_print_area_y` lines
  have been fetched.
- `RasterProcessor.fetch(n)` returns up to `n` bytes of the next line.
- Fetching past the end-of-page marker raises `RasterError`, and so does
  fetching a line that is not there yet.

## Errors

Failures raise `epsraster.page.RasterError`. Examples are a stage with no output
connected, fetching in printing mode, printing with no output, and a watermark
that cannot be loaded. `read_wbf` raises `epsraster.wbf.WbfFormatError` (a
`ValueError`) for malformed or truncated WBF data.

## What this package does not do

It only transforms raster lines. It does not:

- read print-job or raster files;
- generate printer command streams;
- talk to a printer;
- provide a command-line program.

Getting the lines in and sending the results out is up to the caller.

## Running the tests

```
pytest
```