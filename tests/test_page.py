import pytest

from epsraster.page import (
    FetchStatus,
    PageInfo,
    ProcessMode,
    WatermarkColor,
    WatermarkDensity,
    WatermarkOption,
    WatermarkPosition,
    WatermarkSize,
)


def test_full_size_ratio_is_whole_area():
    assert WatermarkSize.SIZE_100.ratio() == pytest.approx(1.0)


def test_size_ratios_increase_and_scale_linearly():
    ratios = [size.ratio() for size in WatermarkSize]
    assert ratios == sorted(ratios)
    assert len(set(ratios)) == len(ratios)
    assert WatermarkSize.SIZE_50.ratio() * 2 == pytest.approx(WatermarkSize.SIZE_100.ratio())
    assert WatermarkSize.SIZE_10.ratio() * 3 == pytest.approx(WatermarkSize.SIZE_30.ratio())


def test_enum_values_follow_declaration_order():
    assert WatermarkPosition(0) is WatermarkPosition.CENTER
    assert WatermarkPosition(8) is WatermarkPosition.BOTTOMRIGHT
    assert WatermarkColor(6) is WatermarkColor.YELLOW
    assert WatermarkDensity(5) is WatermarkDensity.LEVEL6
    assert WatermarkSize(1) is WatermarkSize.SIZE_10


@pytest.mark.parametrize(
    "enum_type, past_last",
    [
        (WatermarkPosition, 9),
        (WatermarkDensity, 6),
        (WatermarkColor, 7),
        (WatermarkSize, 11),
    ],
)
def test_enum_values_past_last_member_are_rejected(enum_type, past_last):
    with pytest.raises(ValueError):
        enum_type(past_last)


def test_size_zero_is_not_a_member():
    with pytest.raises(ValueError):
        WatermarkSize(0)
    assert WatermarkSize(10) is WatermarkSize.SIZE_100


def test_page_info_defaults_disable_all_processing():
    page = PageInfo(bytes_per_pixel=3, src_print_area_x=10, src_print_area_y=20,
                    prt_print_area_x=10, prt_print_area_y=20)
    assert page.scale is False
    assert page.mirror is False
    assert page.reverse is False
    assert page.watermark.use is False
    assert page.watermark.filepath is None
    assert page.watermark.position is WatermarkPosition.CENTER


def test_watermark_options_are_not_shared_between_pages():
    first = PageInfo()
    second = PageInfo()
    first.watermark.use = True
    first.watermark.color = WatermarkColor.RED
    assert second.watermark.use is False
    assert second.watermark.color is WatermarkColor.BLACK
    assert first.watermark is not second.watermark


def test_watermark_option_keeps_given_values():
    option = WatermarkOption(use=True, filepath="mark.wbf", size_ratio=0.5,
                             position=WatermarkPosition.TOP,
                             density=WatermarkDensity.LEVEL3,
                             color=WatermarkColor.AQUA)
    page = PageInfo(watermark=option)
    assert page.watermark.filepath == "mark.wbf"
    assert page.watermark.size_ratio == 0.5
    assert page.watermark.density is WatermarkDensity.LEVEL3


def test_status_and_mode_values():
    assert FetchStatus(0) is FetchStatus.HAS_RASTER
    assert FetchStatus(1) is FetchStatus.NEED_RASTER
    assert FetchStatus(2) is FetchStatus.COMPLETED
    assert FetchStatus(3) is FetchStatus.ERROR
    assert ProcessMode(0) is ProcessMode.PRINTING
    assert ProcessMode(1) is ProcessMode.FETCHING
    with pytest.raises(ValueError):
        FetchStatus(4)
    with pytest.raises(ValueError):
        ProcessMode(2)