import pytest

from picoradio.band import Band, Radio, RuntimeState
from picoradio.band_tables import BandType, Demod
from picoradio.config import Config


@pytest.fixture
def band():
    return Band(Radio(), Config())


def select(band, name):
    index = band.band_index_by_name(name)
    band.config.data.band_idx = index
    return index


def test_band_by_index_and_bounds(band):
    assert band.band_by_index(0).name == "FM"
    assert band.band_by_index(len(band.bands) - 1).name == "SW"
    with pytest.raises(IndexError):
        band.band_by_index(len(band.bands))


def test_band_index_by_name(band):
    index = band.band_index_by_name("40m")
    assert band.band_by_index(index).name == "40m"
    assert band.band_index_by_name("nope") is None


def test_band_names_partition(band):
    ham = band.band_names(True)
    other = band.band_names(False)
    assert "20m" in ham and "FM" in other
    assert sorted(ham + other) == sorted(b.name for b in band.bands)
    assert all(band.band_by_index(band.band_index_by_name(n)).is_ham for n in ham)


def test_default_ant_cap(band):
    assert band.default_ant_cap() == 0
    select(band, "31m")
    assert band.default_ant_cap() == 1
    select(band, "MW")
    assert band.default_ant_cap() == 0


def test_mode_and_bandwidth_labels(band):
    assert band.current_mode_desc() == "FM"
    assert band.current_bandwidth_label() == "AUTO"
    select(band, "MW")
    assert band.current_mode_desc() == "AM"
    assert band.current_bandwidth_label() == "6.0"
    select(band, "40m")
    assert band.current_mode_desc() == "LSB"
    assert band.current_bandwidth_label() == "1.2"


def test_step_labels(band):
    assert band.current_step_label() == "100kHz"
    select(band, "MW")
    assert band.current_step_label() == "9kHz"
    select(band, "31m")
    assert band.current_step_label() == "5kHz"
    select(band, "40m")
    assert band.current_step_label() == "1kHz"
    band.runtime.freqstepnr = 1
    assert band.current_step_label() == "100Hz"
    band.runtime.freqstepnr = 2
    assert band.current_step_label() == "10Hz"
    band.runtime.bfo_on = True
    assert band.current_step_label() == f"{band.config.data.current_bfo_step}Hz"


def test_band_set_fm(band):
    band.band_set(True)
    fm = band.current_band()
    radio = band.radio
    assert radio.mode == "FM"
    assert radio.frequency == fm.def_freq
    assert (radio.minimum_freq, radio.maximum_freq) == (fm.minimum_freq, fm.maximum_freq)
    assert radio.fm_deemphasis == 1
    assert radio.rds_initialised
    assert radio.fm_bandwidth == band.config.data.bw_idx_fm
    assert band.runtime.bfo_on is False


def test_band_set_am_uses_mw_step(band):
    select(band, "MW")
    band.band_set(True)
    assert band.radio.mode == "AM"
    assert band.current_band().curr_step == 9
    assert band.radio.step == 9
    assert band.radio.am_bandwidth == band.config.data.bw_idx_am


def test_invalid_step_index_is_reset(band):
    select(band, "MW")
    band.config.data.ss_idx_mw = 99
    band.band_set(False)
    assert band.config.data.ss_idx_mw == 0
    assert band.current_band().curr_step == 1


def test_band_set_ssb_loads_patch_once(band):
    select(band, "40m")
    band.band_set(True)
    radio = band.radio
    assert radio.ssb_patch_loaded
    assert radio.mode == "SSB"
    assert radio.sideband == Demod.LSB
    assert radio.step == 1
    assert radio.ant_cap == 1
    assert radio.ssb_cutoff_filter == 0
    band.band_set(False)
    loads = [c for c in radio.commands if c[0] == "load_ssb_patch"]
    assert len(loads) == 1


def test_cw_uses_lsb_and_receiver_offset(band):
    select(band, "40m")
    band.current_band().curr_mod = Demod.CW
    band.config.data.current_bfo = 10
    band.band_set(False)
    data = band.config.data
    assert band.radio.sideband == Demod.LSB
    assert band.radio.bfo == data.cw_receiver_offset_hz + 10 + data.current_bfo_manu
    assert band.runtime.cw_shift is True


def test_wide_ssb_bandwidth_uses_low_pass(band):
    select(band, "20m")
    band.config.data.bw_idx_ssb = 2
    band.band_set(True)
    assert band.radio.ssb_audio_bandwidth == 2
    assert band.radio.ssb_cutoff_filter == 1


def test_band_init(band):
    band.config.data.current_bfo = 40
    band.band_init(True)
    assert band.radio.mode == "FM"
    assert band.radio.seek_fm_limits == (band.current_band().minimum_freq, band.current_band().maximum_freq)
    assert band.runtime.freq_dec == 40
    assert band.current_band().last_bfo == 40
    select(band, "MW")
    band.band_init(False)
    assert band.radio.mode == "AM"
    assert band.radio.seek_rssi_threshold == 50


def test_tune_memory_station_am(band):
    mw = band.band_index_by_name("MW")
    band.tune_memory_station(1116, 0, mw, Demod.AM, 3)
    assert band.config.data.band_idx == mw
    assert band.config.data.bw_idx_am == 3
    assert band.radio.frequency == 1116
    assert band.current_band().curr_freq == 1116
    assert band.radio.am_bandwidth == 3
    assert band.radio.volume == band.config.data.curr_volume
    assert band.runtime.freq_dec == 0


def test_tune_memory_station_ssb_restores_bfo(band):
    index = band.band_index_by_name("20m")
    band.tune_memory_station(14074, -120, index, Demod.USB, 1)
    assert band.config.data.current_bfo == -120
    assert band.current_band().last_bfo == -120
    assert band.runtime.freq_dec == -120
    assert band.radio.bfo == -120 + band.config.data.current_bfo_manu
    assert band.config.data.bw_idx_ssb == 1
    assert band.radio.sideband == Demod.USB


def test_tune_memory_station_leaving_cw_clears_shift():
    runtime = RuntimeState(cw_shift=True)
    band = Band(Radio(), Config(), runtime)
    band.config.data.current_bfo = 300
    band.tune_memory_station(9390, 0, 0, Demod.FM, 0)
    assert runtime.cw_shift is False
    assert band.config.data.current_bfo == 0
    assert band.radio.mode == "FM"


def test_tune_memory_station_invalid_band(band):
    with pytest.raises(IndexError):
        band.tune_memory_station(1000, 0, 200, Demod.AM, 0)
    assert band.config.data.band_idx == 0


def test_band_types_of_table(band):
    assert band.band_by_index(0).band_type == BandType.FM
    assert band.band_by_index(band.band_index_by_name("LW")).band_type == BandType.LW