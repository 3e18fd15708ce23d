from types import SimpleNamespace

import pytest

from picoradio import defines
from picoradio.config import (
    AgcGainMode,
    Config,
    ConfigData,
    default_config,
    describe_config,
    describe_stations,
)


def test_default_config_matches_factory_settings():
    data = default_config()
    assert data.band_idx == 0
    assert data.ss_idx_mw == 2
    assert data.ss_idx_am == 1
    assert data.ss_idx_fm == 1
    assert data.current_bfo_step == 25
    assert data.curr_volume == 50
    assert data.agc_gain == AgcGainMode.AUTOMATIC
    assert data.current_agc_gain == AgcGainMode.AUTOMATIC
    assert data.tft_calibrate_data == (213, 3717, 234, 3613, 7)
    assert data.tft_background_brightness == defines.TFT_BACKGROUND_LED_MAX_BRIGHTNESS
    assert data.screen_saver_timeout_minutes == defines.SCREEN_SAVER_TIMEOUT
    assert data.cw_receiver_offset_hz == defines.CW_DECODER_DEFAULT_FREQUENCY
    assert data.rtty_mark_frequency_hz == defines.RTTY_DEFAULT_MARKER_FREQUENCY
    assert data.rtty_shift_hz == defines.RTTY_DEFAULT_SHIFT_FREQUENCY


def test_default_config_returns_independent_copies():
    first = default_config()
    first.curr_volume = 1
    assert default_config().curr_volume == ConfigData().curr_volume


def test_fresh_config_needs_save():
    config = Config()
    assert config.last_crc == 0
    assert config.needs_save()


def test_force_save_tracks_crc():
    config = Config()
    assert config.force_save()
    assert config.last_crc == config.current_crc()
    assert not config.needs_save()


def test_check_save_only_when_changed():
    config = Config()
    config.force_save()
    assert config.check_save() is False
    config.data.curr_volume = 12
    assert config.needs_save()
    assert config.check_save() is True
    assert not config.needs_save()


def test_crc_changes_with_data():
    config = Config()
    before = config.current_crc()
    config.data.band_idx = 3
    assert config.current_crc() != before


def test_file_round_trip(tmp_path):
    path = tmp_path / "config.json"
    config = Config(path)
    config.data.curr_volume = 33
    config.data.mini_audio_fft_config_am = 2.5
    config.force_save()

    restored = Config(path)
    restored.load()
    assert restored.data == config.data
    assert restored.last_crc == config.last_crc
    assert not restored.needs_save()


def test_memory_round_trip():
    config = Config()
    config.data.band_idx = 7
    config.force_save()
    config.data.band_idx = 1
    config.load()
    assert config.data.band_idx == 7


def test_load_without_stored_data_gives_saved_defaults():
    config = Config()
    config.data.curr_volume = 5
    config.load()
    assert config.data == default_config()
    assert not config.needs_save()


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("not json at all", encoding="utf-8")
    config = Config(path)
    config.load()
    assert config.data == default_config()

    again = Config(path)
    again.load()
    assert again.data == default_config()
    assert again.last_crc == config.last_crc


def test_tampered_data_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    config = Config(path)
    config.data.curr_volume = 20
    config.force_save()
    path.write_text(path.read_text().replace('"curr_volume": 20', '"curr_volume": 21'))

    restored = Config(path)
    restored.load()
    assert restored.data == default_config()


def test_out_of_range_timeout_is_corrected(tmp_path):
    path = tmp_path / "config.json"
    config = Config(path)
    config.data.screen_saver_timeout_minutes = defines.SCREEN_SAVER_TIMEOUT_MAX + 1
    config.force_save()

    restored = Config(path)
    restored.load()
    assert restored.data.screen_saver_timeout_minutes == defines.SCREEN_SAVER_TIMEOUT
    assert restored.needs_save()
    assert restored.check_save() is True


def test_save_failure_keeps_last_crc(tmp_path):
    config = Config(tmp_path / "missing" / "config.json")
    assert config.force_save() is False
    assert config.last_crc == 0
    assert config.check_save() is False
    assert config.needs_save()


def test_load_defaults_sets_backlight():
    levels = []
    config = Config(backlight=levels.append)
    config.data.tft_background_brightness = 10
    config.load_defaults()
    assert levels == [defines.TFT_BACKGROUND_LED_MAX_BRIGHTNESS]
    assert config.data == default_config()


def test_describe_config_defaults():
    text = describe_config(default_config())
    lines = text.splitlines()
    assert lines[-1] == "===================="
    assert "  bandIdx: 0" in lines
    assert "  squelchUsesRSSI: true" in lines
    assert "  tftCalibrateData: [213, 3717, 234, 3613, 7]" in lines
    assert "  miniAudioFftConfigAm: Auto Gain" in lines


def test_describe_config_gain_modes():
    data = default_config()
    data.mini_audio_fft_config_am = -1.0
    data.mini_audio_fft_config_fm = 2.5
    data.rds_enabled = False
    lines = describe_config(data).splitlines()
    assert "  miniAudioFftConfigAm: Disabled" in lines
    assert "  miniAudioFftConfigFm: Manual Gain 2.5x" in lines
    assert "  rdsEnabled: false" in lines


def test_describe_stations():
    stations = [
        SimpleNamespace(name="One", frequency=9390, modulation=0, bfo_offset=0, bandwidth_index=0),
        SimpleNamespace(name="Two", frequency=7074, modulation=1, bfo_offset=-50, bandwidth_index=2),
    ]
    lines = describe_stations("FM Station Store", stations).splitlines()
    assert lines[0] == "=== FM Station Store ==="
    assert len(lines) == len(stations) + 2
    assert lines[2] == "  Station 1: Freq: 7074, Name: Two, Mod: 1, BFO: -50, BW: 2"


def test_describe_stations_empty():
    lines = describe_stations("AM Station Store", []).splitlines()
    assert lines == ["=== AM Station Store ===", "===================="]


@pytest.mark.parametrize("mode", list(AgcGainMode))
def test_agc_mode_survives_round_trip(mode):
    config = Config()
    config.data.agc_gain = int(mode)
    config.force_save()
    config.data.agc_gain = -1
    config.load()
    assert AgcGainMode(config.data.agc_gain) is mode