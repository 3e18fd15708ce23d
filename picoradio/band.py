"""Band selection and tuner set-up for the receiver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .band_tables import (
    BANDWIDTH_AM,
    BANDWIDTH_FM,
    BANDWIDTH_SSB,
    STEP_SIZE_AM,
    STEP_SIZE_FM,
    BandEntry,
    BandType,
    Demod,
    FrequencyStep,
    band_mode_desc,
    bandwidth_label_by_index,
    default_band_table,
    step_label,
)
from .config import Config

logger = logging.getLogger(__name__)

_SSB_MODES = (Demod.LSB, Demod.USB, Demod.CW)

# SSB audio bandwidths of about 2 kHz or below work best with the band-pass
# sideband cutoff filter.
_NARROW_SSB_BANDWIDTHS = (0, 4, 5)

_RDS_ENABLE = 1
_RDS_BLOCK_ERROR_THRESHOLD = 2

_SSB_STEP_LABELS = {1: "100Hz", 2: "10Hz"}


@dataclass
class RuntimeState:
    """Tuning state that is shared with the display and the rotary handling."""

    bfo_on: bool = False
    cw_shift: bool = False
    freq_dec: int = 0
    freqstepnr: int = 0


@dataclass
class Radio:
    """Model of the tuner chip: holds its settings and records every command."""

    mode: str | None = None
    minimum_freq: int = 0
    maximum_freq: int = 0
    frequency: int = 0
    step: int = 0
    sideband: int | None = None
    bfo: int = 0
    ant_cap: int = 0
    volume: int = 0
    fm_bandwidth: int = 0
    am_bandwidth: int = 0
    am_power_line_filter: int = 0
    ssb_audio_bandwidth: int = 0
    ssb_cutoff_filter: int = 0
    ssb_config: tuple[int, ...] = ()
    fm_deemphasis: int = 0
    rds_initialised: bool = False
    rds_config: tuple[int, ...] = ()
    ssb_patch_loaded: bool = False
    seek_rssi_threshold: int = 0
    seek_snr_threshold: int = 0
    seek_fm_spacing: int = 0
    seek_fm_limits: tuple[int, int] = (0, 0)
    commands: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def _record(self, name: str, *args: Any) -> None:
        self.commands.append((name, args))

    def setup(self, band_type: int) -> None:
        """Power the chip up in FM or AM mode."""
        self._record("setup", band_type)
        self.mode = "FM" if band_type == BandType.FM else "AM"
        self.ssb_patch_loaded = False

    def set_fm(self, minimum: int, maximum: int, frequency: int, step: int) -> None:
        self._record("set_fm", minimum, maximum, frequency, step)
        self.mode = "FM"
        self.minimum_freq, self.maximum_freq = minimum, maximum
        self.frequency, self.step = frequency, step
        self.sideband = None

    def set_am(self, minimum: int, maximum: int, frequency: int, step: int) -> None:
        self._record("set_am", minimum, maximum, frequency, step)
        self.mode = "AM"
        self.minimum_freq, self.maximum_freq = minimum, maximum
        self.frequency, self.step = frequency, step
        self.sideband = None

    def set_ssb(self, minimum: int, maximum: int, frequency: int, step: int, sideband: int) -> None:
        self._record("set_ssb", minimum, maximum, frequency, step, sideband)
        self.mode = "SSB"
        self.minimum_freq, self.maximum_freq = minimum, maximum
        self.frequency, self.step = frequency, step
        self.sideband = sideband

    def set_ssb_bfo(self, offset: int) -> None:
        self._record("set_ssb_bfo", offset)
        self.bfo = offset

    def set_frequency_step(self, step: int) -> None:
        self._record("set_frequency_step", step)
        self.step = step

    def set_frequency(self, frequency: int) -> None:
        self._record("set_frequency", frequency)
        self.frequency = frequency

    def set_tune_frequency_antenna_capacitor(self, capacitor: int) -> None:
        self._record("set_tune_frequency_antenna_capacitor", capacitor)
        self.ant_cap = capacitor

    def set_fm_deemphasis(self, value: int) -> None:
        self._record("set_fm_deemphasis", value)
        self.fm_deemphasis = value

    def rds_init(self) -> None:
        self._record("rds_init")
        self.rds_initialised = True

    def set_rds_config(self, enable: int, block_a: int, block_b: int, block_c: int, block_d: int) -> None:
        self._record("set_rds_config", enable, block_a, block_b, block_c, block_d)
        self.rds_config = (enable, block_a, block_b, block_c, block_d)

    def load_ssb_patch(self) -> None:
        """Reset the chip and download the SSB firmware patch."""
        self._record("load_ssb_patch")
        self.ssb_patch_loaded = True

    def set_ssb_config(
        self,
        audio_bandwidth: int,
        sideband_cutoff: int,
        avc_divider: int,
        avc_enable: int,
        soft_mute_select: int,
        afc_disable: int,
    ) -> None:
        self._record(
            "set_ssb_config",
            audio_bandwidth,
            sideband_cutoff,
            avc_divider,
            avc_enable,
            soft_mute_select,
            afc_disable,
        )
        self.ssb_config = (
            audio_bandwidth,
            sideband_cutoff,
            avc_divider,
            avc_enable,
            soft_mute_select,
            afc_disable,
        )

    def set_ssb_audio_bandwidth(self, bandwidth: int) -> None:
        self._record("set_ssb_audio_bandwidth", bandwidth)
        self.ssb_audio_bandwidth = bandwidth

    def set_ssb_sideband_cutoff_filter(self, value: int) -> None:
        self._record("set_ssb_sideband_cutoff_filter", value)
        self.ssb_cutoff_filter = value

    def set_bandwidth(self, bandwidth: int, power_line_filter: int) -> None:
        self._record("set_bandwidth", bandwidth, power_line_filter)
        self.am_bandwidth = bandwidth
        self.am_power_line_filter = power_line_filter

    def set_fm_bandwidth(self, bandwidth: int) -> None:
        self._record("set_fm_bandwidth", bandwidth)
        self.fm_bandwidth = bandwidth

    def set_volume(self, volume: int) -> None:
        self._record("set_volume", volume)
        self.volume = volume

    def set_seek_rssi_threshold(self, value: int) -> None:
        self._record("set_seek_rssi_threshold", value)
        self.seek_rssi_threshold = value

    def set_seek_snr_threshold(self, value: int) -> None:
        self._record("set_seek_snr_threshold", value)
        self.seek_snr_threshold = value

    def set_seek_fm_spacing(self, spacing: int) -> None:
        self._record("set_seek_fm_spacing", spacing)
        self.seek_fm_spacing = spacing

    def set_seek_fm_limits(self, minimum: int, maximum: int) -> None:
        self._record("set_seek_fm_limits", minimum, maximum)
        self.seek_fm_limits = (minimum, maximum)


class Band:
    """Selects bands and demodulation modes and programs the tuner accordingly."""

    def __init__(
        self,
        radio: Radio,
        config: Config,
        runtime: RuntimeState | None = None,
        bands: list[BandEntry] | None = None,
    ) -> None:
        self.radio = radio
        self.config = config
        self.runtime = runtime if runtime is not None else RuntimeState()
        self.bands = bands if bands is not None else default_band_table()
        self.ssb_loaded = False

    # --- lookups -------------------------------------------------------

    def band_by_index(self, index: int) -> BandEntry:
        """The band at a table position."""
        if not 0 <= index < len(self.bands):
            raise IndexError(f"no band with index {index}")
        return self.bands[index]

    def current_band(self) -> BandEntry:
        """The band selected in the configuration."""
        return self.band_by_index(self.config.data.band_idx)

    def band_index_by_name(self, name: str) -> int | None:
        """Table position of the band with this name, or None."""
        return next((i for i, band in enumerate(self.bands) if band.name == name), None)

    def band_names(self, ham: bool) -> list[str]:
        """Names of the ham bands, or of the other bands."""
        return [band.name for band in self.bands if band.is_ham == ham]

    def default_ant_cap(self) -> int:
        """Antenna tuning capacitor value for the current band type."""
        return 1 if self.current_band().band_type == BandType.SW else 0

    def current_mode_desc(self) -> str:
        """Name of the current band's demodulation mode."""
        return band_mode_desc(self.current_band().curr_mod)

    def current_bandwidth_label(self) -> str | None:
        """Label of the bandwidth selected for the current mode, or None."""
        data = self.config.data
        mod = self.current_band().curr_mod
        if mod == Demod.AM:
            return bandwidth_label_by_index(BANDWIDTH_AM, data.bw_idx_am)
        if mod in _SSB_MODES:
            return bandwidth_label_by_index(BANDWIDTH_SSB, data.bw_idx_ssb)
        if mod == Demod.FM:
            return bandwidth_label_by_index(BANDWIDTH_FM, data.bw_idx_fm)
        return None

    def current_step_label(self) -> str | None:
        """Label of the tuning step in use."""
        data = self.config.data
        if self.runtime.bfo_on:
            return f"{data.current_bfo_step}Hz"
        band = self.current_band()
        if band.band_type == BandType.FM:
            return step_label(STEP_SIZE_FM, data.ss_idx_fm)
        if band.curr_mod in _SSB_MODES:
            return _SSB_STEP_LABELS.get(self.runtime.freqstepnr, "1kHz")
        if band.band_type in (BandType.MW, BandType.LW):
            return step_label(STEP_SIZE_AM, data.ss_idx_mw)
        return step_label(STEP_SIZE_AM, data.ss_idx_am)

    # --- tuner set-up --------------------------------------------------

    def band_init(self, sys_start: bool = False) -> None:
        """Power the chip up for the current band and set the seek parameters."""
        data = self.config.data
        band = self.current_band()
        logger.debug("band_init: band index %d", data.band_idx)
        if band.band_type == BandType.FM:
            self.radio.setup(BandType.FM)
            self.radio.set_seek_rssi_threshold(2)
            self.radio.set_seek_snr_threshold(2)
            self.radio.set_seek_fm_spacing(10)
            self.radio.set_seek_fm_limits(band.minimum_freq, band.maximum_freq)
        else:
            self.radio.setup(BandType.MW)
            self.radio.set_seek_rssi_threshold(50)
            self.radio.set_seek_snr_threshold(20)
        if sys_start:
            self.runtime.freq_dec = data.current_bfo
            band.last_bfo = data.current_bfo

    def band_set(self, use_defaults: bool = False) -> None:
        """Apply the current band; optionally switch to its preferred mode first."""
        band = self.current_band()
        if use_defaults:
            band.curr_mod = band.pref_mod
            self.ssb_loaded = False
        mod = band.curr_mod
        if mod in (Demod.AM, Demod.FM):
            self.ssb_loaded = False
        elif mod in _SSB_MODES and not self.ssb_loaded:
            self._load_ssb()
        self.use_band()
        self._set_bandwidth()
        self.radio.set_tune_frequency_antenna_capacitor(band.ant_cap)

    def _load_ssb(self) -> None:
        if self.ssb_loaded:
            return
        self.radio.load_ssb_patch()
        self.radio.set_ssb_config(self.config.data.bw_idx_ssb, 1, 0, 1, 0, 1)
        self.ssb_loaded = True

    def _checked_step(self, table: tuple[FrequencyStep, ...], attr: str) -> int:
        data = self.config.data
        index = getattr(data, attr)
        if not 0 <= index < len(table):
            logger.debug("invalid %s index %d, using the first step", attr, index)
            index = 0
            setattr(data, attr, index)
        return table[index].value

    def use_band(self) -> None:
        """Program the chip for the current band, mode and step."""
        data = self.config.data
        band = self.current_band()
        band_type = band.band_type

        if band_type in (BandType.MW, BandType.LW):
            band.curr_step = self._checked_step(STEP_SIZE_AM, "ss_idx_mw")
        elif band_type == BandType.SW:
            band.curr_step = self._checked_step(STEP_SIZE_AM, "ss_idx_am")
        else:
            band.curr_step = self._checked_step(STEP_SIZE_FM, "ss_idx_fm")

        band.ant_cap = self.default_ant_cap()
        self.radio.set_tune_frequency_antenna_capacitor(band.ant_cap)

        if band_type == BandType.FM:
            self.ssb_loaded = False
            self.runtime.bfo_on = False
            self.radio.set_fm(band.minimum_freq, band.maximum_freq, band.curr_freq, band.curr_step)
            self.radio.set_fm_deemphasis(1)
            self.radio.rds_init()
            self.radio.set_rds_config(
                _RDS_ENABLE,
                _RDS_BLOCK_ERROR_THRESHOLD,
                _RDS_BLOCK_ERROR_THRESHOLD,
                _RDS_BLOCK_ERROR_THRESHOLD,
                _RDS_BLOCK_ERROR_THRESHOLD,
            )
        elif self.ssb_loaded:
            is_cw = band.curr_mod == Demod.CW
            sideband = Demod.LSB if is_cw else band.curr_mod
            # The chip always steps 1 kHz in SSB; finer tuning goes through the BFO.
            self.radio.set_ssb(band.minimum_freq, band.maximum_freq, band.curr_freq, 1, sideband)
            cw_base = data.cw_receiver_offset_hz if is_cw else 0
            self.radio.set_ssb_bfo(cw_base + data.current_bfo + data.current_bfo_manu)
            self.runtime.cw_shift = is_cw
            band.curr_step = 1
            self.radio.set_frequency_step(band.curr_step)
        else:
            self.radio.set_am(band.minimum_freq, band.maximum_freq, band.curr_freq, band.curr_step)
            self.runtime.bfo_on = False
            self.runtime.cw_shift = False

    def _set_bandwidth(self) -> None:
        data = self.config.data
        mod = self.current_band().curr_mod
        if mod in _SSB_MODES:
            self.radio.set_ssb_audio_bandwidth(data.bw_idx_ssb)
            cutoff = 0 if data.bw_idx_ssb in _NARROW_SSB_BANDWIDTHS else 1
            self.radio.set_ssb_sideband_cutoff_filter(cutoff)
        elif mod == Demod.AM:
            self.radio.set_bandwidth(data.bw_idx_am, 0)
        elif mod == Demod.FM:
            self.radio.set_fm_bandwidth(data.bw_idx_fm)

    def tune_memory_station(
        self,
        frequency: int,
        bfo_offset: int,
        band_index: int,
        demod: int,
        bandwidth_index: int,
    ) -> None:
        """Switch to a stored station: band, mode, bandwidth, frequency and BFO."""
        band = self.band_by_index(band_index)
        demod = Demod(demod)
        data = self.config.data
        data.band_idx = band_index

        if demod != Demod.CW and self.runtime.cw_shift:
            band.last_bfo = 0
            data.current_bfo = 0
            self.runtime.cw_shift = False
        band.curr_mod = demod

        if demod == Demod.FM:
            data.bw_idx_fm = bandwidth_index
        elif demod == Demod.AM:
            data.bw_idx_am = bandwidth_index
        else:
            data.bw_idx_ssb = bandwidth_index

        self.band_set(False)
        band.curr_freq = frequency
        self.radio.set_frequency(frequency)

        if demod in _SSB_MODES:
            band.last_bfo = bfo_offset
            data.current_bfo = bfo_offset
            self.runtime.freq_dec = bfo_offset
            cw_base = data.cw_receiver_offset_hz if demod == Demod.CW else 0
            self.radio.set_ssb_bfo(cw_base + data.current_bfo + data.current_bfo_manu)
            self.runtime.cw_shift = demod == Demod.CW
        else:
            band.last_bfo = 0
            data.current_bfo = 0
            self.runtime.freq_dec = 0
            self.runtime.cw_shift = False

        self.radio.set_volume(data.curr_volume)