import pytest

from picoradio import defines
from picoradio.defines import tft_color


def test_black_is_zero():
    assert tft_color(0, 0, 0) == 0


def test_white_fills_all_sixteen_bits():
    assert tft_color(255, 255, 255) == 0xFFFF


@pytest.mark.parametrize("r,g,b", [(0, 0, 0), (8, 4, 8), (120, 200, 64), (248, 252, 248)])
def test_low_bits_are_dropped(r, g, b):
    assert tft_color(r | 7, g | 3, b | 7) == tft_color(r, g, b)


@pytest.mark.parametrize("r,g,b", [(255, 0, 0), (0, 255, 0), (0, 0, 255), (17, 99, 200)])
def test_result_fits_sixteen_bits(r, g, b):
    assert 0 <= tft_color(r, g, b) <= 0xFFFF


def test_channels_do_not_overlap():
    red = tft_color(255, 0, 0)
    green = tft_color(0, 255, 0)
    blue = tft_color(0, 0, 255)
    assert red & green == 0
    assert green & blue == 0
    assert red | green | blue == tft_color(255, 255, 255)


def test_primary_channels_match_palette():
    assert tft_color(255, 0, 0) == defines.TFT_RED
    assert tft_color(0, 255, 0) == defines.TFT_GREEN
    assert tft_color(0, 0, 255) == defines.TFT_BLUE


def test_drained_battery_colour():
    assert defines.TFT_COLOR_DRAINED_BATTERY == tft_color(248, 252, 0)
    assert defines.TFT_COLOR_SUBMERSIBLE_BATTERY == defines.TFT_ORANGE