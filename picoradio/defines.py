"""Program-wide constants and small helpers shared by the radio modules."""

from __future__ import annotations

PROGRAM_NAME = "Pico Radio v3"
PROGRAM_VERSION = "0.0.3"

MEMORY_INFO_INTERVAL = 20 * 1000  # milliseconds

# Voltage divider on the VBUS sense input (kOhm)
VBUS_DIVIDER_R1 = 197.5
VBUS_DIVIDER_R2 = 99.5

# TFT backlight limits
TFT_BACKGROUND_LED_MAX_BRIGHTNESS = 255
TFT_BACKGROUND_LED_MIN_BRIGHTNESS = 5

# Battery voltage limits (V * 100)
MIN_BATTERY_VOLTAGE = 270
MAX_BATTERY_VOLTAGE = 405

# Screen saver timeout in minutes
SCREEN_SAVER_TIMEOUT_MIN = 1
SCREEN_SAVER_TIMEOUT_MAX = 60
SCREEN_SAVER_TIMEOUT = 10

# CW decoder frequencies (Hz)
CW_DECODER_DEFAULT_FREQUENCY = 750
CW_DECODER_MIN_FREQUENCY = 600
CW_DECODER_MAX_FREQUENCY = 1500

# RTTY frequencies (Hz)
RTTY_DEFAULT_MARKER_FREQUENCY = 1100.0
RTTY_DEFAULT_SHIFT_FREQUENCY = 425.0
RTTY_DEFAULT_SPACE_FREQUENCY = RTTY_DEFAULT_MARKER_FREQUENCY - RTTY_DEFAULT_SHIFT_FREQUENCY


def tft_color(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue components into an RGB565 colour."""
    return ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)


# RGB565 palette used by the display code
TFT_BLACK = 0x0000
TFT_NAVY = 0x000F
TFT_DARKGREEN = 0x03E0
TFT_DARKCYAN = 0x03EF
TFT_MAROON = 0x7800
TFT_PURPLE = 0x780F
TFT_OLIVE = 0x7BE0
TFT_LIGHTGREY = 0xD69A
TFT_DARKGREY = 0x7BEF
TFT_BLUE = 0x001F
TFT_GREEN = 0x07E0
TFT_CYAN = 0x07FF
TFT_RED = 0xF800
TFT_MAGENTA = 0xF81F
TFT_YELLOW = 0xFFE0
TFT_WHITE = 0xFFFF
TFT_ORANGE = 0xFDA0

TFT_COLOR_DRAINED_BATTERY = tft_color(248, 252, 0)
TFT_COLOR_SUBMERSIBLE_BATTERY = TFT_ORANGE
TFT_COLOR_BACKGROUND = TFT_BLACK