"""Conversion of raw ADC readings into voltages."""

from __future__ import annotations

from .defines import VBUS_DIVIDER_R1, VBUS_DIVIDER_R2

AD_RESOLUTION = 12
V_REFERENCE = 3.3
CONVERSION_FACTOR = 1 << AD_RESOLUTION
DIVIDER_RATIO = (VBUS_DIVIDER_R1 + VBUS_DIVIDER_R2) / VBUS_DIVIDER_R2


def _check_raw(raw: int) -> None:
    if not 0 <= raw < CONVERSION_FACTOR:
        raise ValueError(f"ADC reading out of range: {raw}")


def adc_to_voltage(raw: int) -> float:
    """Voltage at the ADC pin for a raw 12-bit reading."""
    _check_raw(raw)
    return raw * V_REFERENCE / CONVERSION_FACTOR


def vbus_voltage(raw: int) -> float:
    """VBUS voltage before the external divider for a raw 12-bit reading."""
    return adc_to_voltage(raw) * DIVIDER_RATIO