"""Band, bandwidth and frequency-step tables of the receiver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence


class BandType(IntEnum):
    """Kind of band, which decides how the tuner chip is set up."""

    FM = 0
    MW = 1
    SW = 2
    LW = 3


class Demod(IntEnum):
    """Demodulation modes; the values are the indices of BAND_MODE_DESC."""

    FM = 0
    LSB = 1
    USB = 2
    AM = 3
    CW = 4


@dataclass
class BandEntry:
    """One band: fixed limits and defaults plus the state that changes while tuning."""

    name: str
    band_type: BandType
    pref_mod: Demod
    minimum_freq: int
    maximum_freq: int
    def_freq: int
    def_step: int
    is_ham: bool
    curr_freq: int = 0
    curr_step: int = 0
    curr_mod: int = 0
    ant_cap: int = 0
    last_bfo: int = 0
    last_manu_bfo: int = 0


@dataclass(frozen=True)
class BandWidth:
    """A bandwidth choice: its display label and the index passed to the chip."""

    label: str
    index: int


@dataclass(frozen=True)
class FrequencyStep:
    """A tuning step choice: its display label and its value."""

    label: str
    value: int


BAND_MODE_DESC: tuple[str, ...] = ("FM", "LSB", "USB", "AM", "CW")

BANDWIDTH_FM: tuple[BandWidth, ...] = (
    BandWidth("AUTO", 0),
    BandWidth("110", 1),
    BandWidth("84", 2),
    BandWidth("60", 3),
    BandWidth("40", 4),
)
BANDWIDTH_AM: tuple[BandWidth, ...] = (
    BandWidth("1.0", 4),
    BandWidth("1.8", 5),
    BandWidth("2.0", 3),
    BandWidth("2.5", 6),
    BandWidth("3.0", 2),
    BandWidth("4.0", 1),
    BandWidth("6.0", 0),
)
BANDWIDTH_SSB: tuple[BandWidth, ...] = (
    BandWidth("0.5", 4),
    BandWidth("1.0", 5),
    BandWidth("1.2", 0),
    BandWidth("2.2", 1),
    BandWidth("3.0", 2),
    BandWidth("4.0", 3),
)

STEP_SIZE_AM: tuple[FrequencyStep, ...] = (
    FrequencyStep("1kHz", 1),
    FrequencyStep("5kHz", 5),
    FrequencyStep("9kHz", 9),
    FrequencyStep("10kHz", 10),
)
STEP_SIZE_FM: tuple[FrequencyStep, ...] = (
    FrequencyStep("50kHz", 5),
    FrequencyStep("100kHz", 10),
    FrequencyStep("1MHz", 100),
)
STEP_SIZE_BFO: tuple[FrequencyStep, ...] = (
    FrequencyStep("1Hz", 1),
    FrequencyStep("5Hz", 5),
    FrequencyStep("10Hz", 10),
    FrequencyStep("25Hz", 25),
)

_FM, _MW, _SW, _LW = BandType.FM, BandType.MW, BandType.SW, BandType.LW
_LSB, _USB, _AM = Demod.LSB, Demod.USB, Demod.AM

# name, type, preferred mode, min, max, default frequency, default step, ham
_BANDS = (
    ("FM", _FM, Demod.FM, 6400, 10800, 9390, 10, False),
    ("LW", _LW, _AM, 100, 514, 198, 9, False),
    ("MW", _MW, _AM, 514, 1800, 540, 9, False),
    ("800m", _SW, _AM, 280, 470, 284, 1, True),
    ("630m", _SW, _LSB, 470, 480, 475, 1, True),
    ("160m", _SW, _LSB, 1800, 2000, 1850, 1, True),
    ("120m", _SW, _AM, 2000, 3200, 2400, 5, False),
    ("90m", _SW, _AM, 3200, 3500, 3300, 5, False),
    ("80m", _SW, _LSB, 3500, 3900, 3630, 1, True),
    ("75m", _SW, _AM, 3900, 5300, 3950, 5, False),
    ("60m", _SW, _USB, 5300, 5900, 5375, 1, True),
    ("49m", _SW, _AM, 5900, 7000, 6000, 5, False),
    ("40m", _SW, _LSB, 7000, 7500, 7074, 1, True),
    ("41m", _SW, _AM, 7200, 9000, 7210, 5, False),
    ("31m", _SW, _AM, 9000, 10000, 9600, 5, False),
    ("30m", _SW, _USB, 10000, 10100, 10100, 1, True),
    ("25m", _SW, _AM, 10200, 13500, 11700, 5, False),
    ("22m", _SW, _AM, 13500, 14000, 13700, 5, False),
    ("20m", _SW, _USB, 14000, 14500, 14074, 1, True),
    ("19m", _SW, _AM, 14500, 17500, 15700, 5, False),
    ("17m", _SW, _AM, 17500, 18000, 17600, 5, False),
    ("16m", _SW, _USB, 18000, 18500, 18100, 1, True),
    ("15m", _SW, _AM, 18500, 21000, 18950, 5, False),
    ("14m", _SW, _USB, 21000, 21500, 21074, 1, True),
    ("13m", _SW, _AM, 21500, 24000, 21500, 5, False),
    ("12m", _SW, _USB, 24000, 25500, 24940, 1, True),
    ("11m", _SW, _AM, 25500, 26100, 25800, 5, False),
    ("CB", _SW, _AM, 26100, 28000, 27200, 1, False),
    ("10m", _SW, _USB, 28000, 30000, 28500, 1, True),
    ("SW", _SW, _AM, 100, 30000, 15500, 5, False),
)


def _with_defaults(entry: BandEntry) -> BandEntry:
    entry.curr_freq = entry.def_freq
    entry.curr_step = entry.def_step
    entry.curr_mod = entry.pref_mod
    # Only short wave needs the antenna tuning capacitor.
    entry.ant_cap = 0 if entry.band_type in (_FM, _MW, _LW) else 1
    entry.last_bfo = 0
    entry.last_manu_bfo = 0
    return entry


def default_band_table() -> list[BandEntry]:
    """A fresh band table with the tuning state set to each band's defaults."""
    return [_with_defaults(BandEntry(*row)) for row in _BANDS]


def band_mode_desc(index: int) -> str:
    """Name of a demodulation mode by its index."""
    if not 0 <= index < len(BAND_MODE_DESC):
        raise IndexError(f"no demodulation mode {index}")
    return BAND_MODE_DESC[index]


def am_demodulation_modes() -> tuple[str, ...]:
    """The modes selectable on AM bands (all but FM)."""
    return BAND_MODE_DESC[1:]


def bandwidth_labels(table: Sequence[BandWidth]) -> list[str]:
    """Labels of a bandwidth table in table order."""
    return [bw.label for bw in table]


def bandwidth_label_by_index(table: Sequence[BandWidth], index: int) -> str | None:
    """Label of the bandwidth with the given chip index, or None."""
    return next((bw.label for bw in table if bw.index == index), None)


def bandwidth_index_by_label(table: Sequence[BandWidth], label: str) -> int | None:
    """Chip index of the bandwidth with the given label, or None."""
    return next((bw.index for bw in table if bw.label == label), None)


def step_labels(table: Sequence[FrequencyStep]) -> list[str]:
    """Labels of a step table in table order."""
    return [step.label for step in table]


def step_value(table: Sequence[FrequencyStep], index: int) -> int | None:
    """Value of the step at a table position, or None if out of range."""
    if 0 <= index < len(table):
        return table[index].value
    return None


def step_label(table: Sequence[FrequencyStep], index: int) -> str | None:
    """Label of the step at a table position, or None if out of range."""
    if 0 <= index < len(table):
        return table[index].label
    return None