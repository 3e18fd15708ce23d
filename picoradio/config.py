"""Radio configuration data and CRC-checked persistent stores."""

from __future__ import annotations

import binascii
import dataclasses
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Callable, Iterable

from .defines import (
    CW_DECODER_DEFAULT_FREQUENCY,
    RTTY_DEFAULT_MARKER_FREQUENCY,
    RTTY_DEFAULT_SHIFT_FREQUENCY,
    SCREEN_SAVER_TIMEOUT,
    SCREEN_SAVER_TIMEOUT_MAX,
    SCREEN_SAVER_TIMEOUT_MIN,
    TFT_BACKGROUND_LED_MAX_BRIGHTNESS,
)

logger = logging.getLogger(__name__)


class AgcGainMode(IntEnum):
    """Automatic gain control settings."""

    OFF = 0
    AUTOMATIC = 1
    MANUAL = 2


@dataclass
class ConfigData:
    """All persisted radio settings; the defaults are the factory settings."""

    band_idx: int = 0
    bw_idx_am: int = 0
    bw_idx_fm: int = 0
    bw_idx_mw: int = 0
    bw_idx_ssb: int = 0
    ss_idx_mw: int = 2
    ss_idx_am: int = 1
    ss_idx_fm: int = 1
    current_bfo: int = 0
    current_bfo_step: int = 25
    current_bfo_manu: int = 0
    current_squelch: int = 0
    squelch_uses_rssi: bool = True
    rds_enabled: bool = True
    curr_volume: int = 50
    agc_gain: int = AgcGainMode.AUTOMATIC
    current_agc_gain: int = AgcGainMode.AUTOMATIC
    tft_calibrate_data: tuple[int, ...] = field(default=(213, 3717, 234, 3613, 7))
    tft_background_brightness: int = TFT_BACKGROUND_LED_MAX_BRIGHTNESS
    tft_digit_light: bool = True
    screen_saver_timeout_minutes: int = SCREEN_SAVER_TIMEOUT
    beeper_enabled: bool = True
    mini_audio_fft_mode_am: int = 0
    mini_audio_fft_mode_fm: int = 0
    mini_audio_fft_config_am: float = 0.0
    mini_audio_fft_config_fm: float = 0.0
    mini_audio_fft_config_analyzer: float = 0.0
    mini_audio_fft_config_rtty: float = 0.0
    cw_receiver_offset_hz: int = CW_DECODER_DEFAULT_FREQUENCY
    rtty_mark_frequency_hz: float = RTTY_DEFAULT_MARKER_FREQUENCY
    rtty_shift_hz: float = RTTY_DEFAULT_SHIFT_FREQUENCY


def default_config() -> ConfigData:
    """A fresh copy of the factory settings."""
    return ConfigData()


def _gain(value: float) -> str:
    if value == -1.0:
        return "Disabled"
    if value == 0.0:
        return "Auto Gain"
    return f"Manual Gain {value:.1f}x"


_CONFIG_FIELDS = (
    ("bandIdx", "band_idx"),
    ("bwIdxAM", "bw_idx_am"),
    ("bwIdxFM", "bw_idx_fm"),
    ("bwIdxMW", "bw_idx_mw"),
    ("bwIdxSSB", "bw_idx_ssb"),
    ("ssIdxMW", "ss_idx_mw"),
    ("ssIdxAM", "ss_idx_am"),
    ("ssIdxFM", "ss_idx_fm"),
    ("currentBFO", "current_bfo"),
    ("currentBFOStep", "current_bfo_step"),
    ("currentBFOmanu", "current_bfo_manu"),
    ("currentSquelch", "current_squelch"),
    ("squelchUsesRSSI", "squelch_uses_rssi"),
    ("rdsEnabled", "rds_enabled"),
    ("currVolume", "curr_volume"),
    ("agcGain", "agc_gain"),
    ("currentAGCgain", "current_agc_gain"),
    ("tftCalibrateData", "tft_calibrate_data"),
    ("tftBackgroundBrightness", "tft_background_brightness"),
    ("tftDigitLigth", "tft_digit_light"),
    ("screenSaverTimeoutMinutes", "screen_saver_timeout_minutes"),
    ("miniAudioFftModeAm", "mini_audio_fft_mode_am"),
    ("miniAudioFftModeFm", "mini_audio_fft_mode_fm"),
)


def describe_config(data: ConfigData) -> str:
    """Readable multi-line dump of a configuration."""
    lines = ["=== Config Data ==="]
    for label, attr in _CONFIG_FIELDS:
        value = getattr(data, attr)
        if isinstance(value, bool):
            text = "true" if value else "false"
        elif isinstance(value, tuple):
            text = "[" + ", ".join(str(int(v)) for v in value) + "]"
        else:
            text = str(int(value))
        lines.append(f"  {label}: {text}")
    lines.append(f"  miniAudioFftConfigAm: {_gain(data.mini_audio_fft_config_am)}")
    lines.append(f"  miniAudioFftConfigFm: {_gain(data.mini_audio_fft_config_fm)}")
    lines.append("====================")
    return "\n".join(lines)


def describe_stations(title: str, stations: Iterable[Any]) -> str:
    """Readable multi-line dump of a station list."""
    lines = [f"=== {title} ==="]
    for number, station in enumerate(stations):
        lines.append(
            f"  Station {number}: Freq: {station.frequency}, Name: {station.name}, "
            f"Mod: {station.modulation}, BFO: {station.bfo_offset}, "
            f"BW: {station.bandwidth_index}"
        )
    lines.append("====================")
    return "\n".join(lines)


def _crc16(payload: Any) -> int:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode()
    return binascii.crc_hqx(encoded, 0xFFFF)


class Store(ABC):
    """Persistent data holder that saves only when the data's CRC changes.

    Data is kept in a JSON file when a path is given, otherwise in memory.
    A CRC of 0 means nothing has been saved yet.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._memory: str | None = None
        self._last_crc = 0

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def last_crc(self) -> int:
        """CRC of the data as last saved or loaded."""
        return self._last_crc

    @abstractmethod
    def load_defaults(self) -> None:
        """Replace the data with its defaults."""

    @abstractmethod
    def _payload(self) -> Any:
        """JSON-compatible form of the data."""

    @abstractmethod
    def _restore(self, payload: Any) -> None:
        """Replace the data from its JSON-compatible form."""

    def current_crc(self) -> int:
        """CRC of the data as it is now."""
        return _crc16(self._payload())

    def needs_save(self) -> bool:
        return self._last_crc != self.current_crc()

    def force_save(self) -> bool:
        """Save unconditionally; returns whether the save succeeded."""
        logger.debug("[%s] forced save", self.name)
        return self._save_and_track()

    def check_save(self) -> bool:
        """Save if the data changed since the last save; returns whether it saved."""
        current = self.current_crc()
        if current == self._last_crc:
            return False
        logger.debug(
            "[%s] CRC mismatch (RAM: %d != stored: %d), saving",
            self.name,
            current,
            self._last_crc,
        )
        return self._save_and_track()

    def load(self) -> None:
        """Load stored data, falling back to saved defaults when it is missing or invalid."""
        logger.debug("[%s] loading", self.name)
        self._last_crc = self._perform_load()

    def _save_and_track(self) -> bool:
        try:
            crc = self._perform_save()
        except OSError as exc:
            logger.warning("[%s] save failed: %s", self.name, exc)
            return False
        self._last_crc = crc
        return True

    def _perform_save(self) -> int:
        payload = self._payload()
        crc = _crc16(payload)
        text = json.dumps({"crc": crc, "data": payload})
        if self._path is None:
            self._memory = text
        else:
            self._path.write_text(text, encoding="utf-8")
        return crc

    def _read_stored(self) -> str | None:
        if self._path is None:
            return self._memory
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError:
            return None

    def _perform_load(self) -> int:
        text = self._read_stored()
        if text is not None:
            try:
                record = json.loads(text)
                payload = record["data"]
                crc = record["crc"]
                if _crc16(payload) != crc:
                    raise ValueError("CRC mismatch")
                self._restore(payload)
                return crc
            except (ValueError, TypeError, KeyError) as exc:
                logger.debug("[%s] stored data invalid: %s", self.name, exc)
        self.load_defaults()
        try:
            return self._perform_save()
        except OSError as exc:
            logger.warning("[%s] saving defaults failed: %s", self.name, exc)
            return 0


class Config(Store):
    """The radio configuration with automatic persistence."""

    def __init__(
        self,
        path: str | Path | None = None,
        backlight: Callable[[int], None] | None = None,
    ) -> None:
        super().__init__(path)
        self.data = default_config()
        self._backlight = backlight

    def load_defaults(self) -> None:
        """Restore the factory settings and apply the backlight brightness."""
        self.data = default_config()
        if self._backlight is not None:
            self._backlight(self.data.tft_background_brightness)

    def _payload(self) -> dict[str, Any]:
        return dataclasses.asdict(self.data)

    def _restore(self, payload: Any) -> None:
        if not isinstance(payload, dict):
            raise TypeError("config payload must be an object")
        values = dict(payload)
        if "tft_calibrate_data" in values:
            calibration = tuple(int(v) for v in values["tft_calibrate_data"])
            if len(calibration) != 5:
                raise ValueError("touch calibration needs five values")
            values["tft_calibrate_data"] = calibration
        self.data = ConfigData(**values)

    def _perform_save(self) -> int:
        crc = super()._perform_save()
        logger.debug("%s", describe_config(self.data))
        return crc

    def _perform_load(self) -> int:
        crc = super()._perform_load()
        logger.debug("%s", describe_config(self.data))
        timeout = self.data.screen_saver_timeout_minutes
        if not SCREEN_SAVER_TIMEOUT_MIN <= timeout <= SCREEN_SAVER_TIMEOUT_MAX:
            # The changed data no longer matches the stored CRC, so the next
            # check_save writes the corrected value back.
            self.data.screen_saver_timeout_minutes = SCREEN_SAVER_TIMEOUT
        return crc