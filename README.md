# picoradio

The control logic of a small SI4735-based receiver as a plain Python library.
It holds the band plan, the demodulation modes and the bandwidth and step
tables. It also has station memories and a configuration store that uses a
CRC to decide when to save. A rotary encoder decoder is included. The tuner
is represented by a `Radio` object that keeps the chip settings and records
every command sent to it. Because of that, all of the logic runs and can be
tested without hardware.

## Installation

```
pip install .
pip install ".[test]"   # adds pytest
```

## Modules

- `picoradio.defines`: program constants (screen-saver limits, CW and RTTY
  frequencies, battery limits, RGB565 palette) and `tft_color(r, g, b)`, which
  packs 8-bit components into an RGB565 value.
- `picoradio.sensors`: `adc_to_voltage(raw)` and `vbus_voltage(raw)`. Both take
  a raw 12-bit ADC reading (3.3 V reference). `vbus_voltage` also applies the
  VBUS divider. A reading outside 0 to 4095 raises `ValueError`.
- `picoradio.config`:
  - `ConfigData` is a dataclass whose defaults are the factory settings. Get a
    fresh copy with `default_config()`.
  - `AgcGainMode` lists the AGC settings `OFF`, `AUTOMATIC` and `MANUAL`.
  - `Store` is the abstract base for persisted data. `check_save()` writes only
    when `current_crc()` differs from the last saved CRC. `force_save()` always
    writes. `needs_save()` reports whether a write is pending.
  - `load()` reads the stored data. If the data is missing or its CRC is wrong,
    it falls back to the defaults and saves them.
  - Data goes to a JSON file when a `path` is given, otherwise it stays in
    memory.
  - `Config` is the configuration store. It takes an optional `backlight`
    callback, which `load_defaults()` calls with the default brightness. When
    loading, an out-of-range screen-saver timeout is reset to the default.
  - `describe_config(data)` and `describe_stations(title, stations)` return
    readable multi-line dumps.
- `picoradio.stations`:
  - `StationData` is a frozen station record. A name longer than 15 characters
    raises `ValueError`.
  - `StationStore` is a bounded, self-saving list. `add_station` returns
    `False` for a duplicate channel and raises `StoreFullError` when the list is
    full. `update_station` and `delete_station` raise `IndexError` for a bad
    position.
  - `find_station` returns the position of a station, or `None`. For
    LSB/USB/CW stations the BFO offset must match as well.
  - `station_at` returns the station at a position, or `None`.
  - `fm_station_store()` gives a store with 20 slots and `am_station_store()`
    one with 50.
- `picoradio.band_tables`:
  - Types: `BandType`, `Demod`, `BandEntry`, `BandWidth` and `FrequencyStep`.
  - The 30-band plan comes from `default_band_table()`.
  - Bandwidth tables `BANDWIDTH_FM/AM/SSB` and step tables
    `STEP_SIZE_AM/FM/BFO`.
  - Lookups: `band_mode_desc`, `am_demodulation_modes`, `bandwidth_labels`,
    `bandwidth_label_by_index`, `bandwidth_index_by_label`, `step_labels`,
    `step_value` and `step_label`.
- `picoradio.band`:
  - `Band` drives a `Radio` from a `Config` and a `RuntimeState`, which holds
    the BFO, CW-shift and step flags.
  - `band_init` powers the chip up and sets the seek parameters. `band_set` and
    `use_band` program the band, mode, step, bandwidth and antenna capacitor,
    and load the SSB patch when needed.
  - `tune_memory_station` recalls a stored station.
  - Lookups: `band_by_index`, `band_index_by_name`, `band_names(ham)`,
    `current_mode_desc`, `current_bandwidth_label` and `current_step_label`.
- `picoradio.rotary`:
  - `RotaryEncoder` takes callables that read pins A and B and, optionally, the
    button. It also accepts an optional millisecond clock.
  - Call `service()` about every millisecond to sample the pins.
  - `read()` returns an `EncoderState`: a `Direction`, a `ButtonState` (clicked,
    double clicked, held, released) and a step value that includes
    acceleration.

## Example

```python
from picoradio.band import Band, Radio
from picoradio.config import Config
from picoradio.stations import StationData, fm_station_store

config = Config()
config.data.curr_volume = 30
config.check_save()          # saves only when the CRC has changed

store = fm_station_store()
store.add_station(StationData(name="Radio", frequency=9390, band_index=0))
print(store.find_station(9390, 0, 0))   # -> 0

radio = Radio()
band = Band(radio, config)
band.band_set(use_defaults=True)
print(band.current_mode_desc(), band.current_step_label())   # -> FM 100kHz
```

## What this package does not do

- It does not talk to a real tuner chip. `Radio` only keeps the settings it was
  given and a list of commands. Driving actual hardware is left to the caller.
- It has no display, touch screen or menu code.
- It has no command-line program.