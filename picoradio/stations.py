"""Memory station lists with CRC-checked persistence."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from .band_tables import Demod
from .config import Store

MAX_FM_STATIONS = 20
MAX_AM_STATIONS = 50
MAX_STATION_NAME_LEN = 15

_SSB_MODES = (Demod.LSB, Demod.USB, Demod.CW)


class StoreFullError(Exception):
    """Raised when a station list has no room for another station."""


def _is_ssb_or_cw(modulation: int) -> bool:
    return modulation in _SSB_MODES


@dataclass(frozen=True)
class StationData:
    """One memory station."""

    name: str
    frequency: int
    bfo_offset: int = 0
    band_index: int = 0
    modulation: int = Demod.FM
    bandwidth_index: int = 0

    def __post_init__(self) -> None:
        if len(self.name) > MAX_STATION_NAME_LEN:
            raise ValueError(
                f"station name longer than {MAX_STATION_NAME_LEN} characters: {self.name!r}"
            )

    def _same_channel(self, frequency: int, band_index: int, bfo_offset: int) -> bool:
        if self.frequency != frequency or self.band_index != band_index:
            return False
        return not _is_ssb_or_cw(self.modulation) or self.bfo_offset == bfo_offset


class StationStore(Store):
    """A bounded list of memory stations that saves itself on every change."""

    def __init__(
        self,
        capacity: int,
        name: str = "StationStore",
        path: str | Path | None = None,
    ) -> None:
        super().__init__(path)
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._name = name
        self.stations: list[StationData] = []

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self.stations)

    def __iter__(self) -> Iterator[StationData]:
        return iter(self.stations)

    def load_defaults(self) -> None:
        """Empty the list."""
        self.stations = []

    def _payload(self) -> list[dict[str, Any]]:
        return [dataclasses.asdict(station) for station in self.stations]

    def _restore(self, payload: Any) -> None:
        if not isinstance(payload, list):
            raise TypeError("station payload must be a list")
        if len(payload) > self.capacity:
            raise ValueError("stored station list exceeds capacity")
        self.stations = [StationData(**item) for item in payload]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.stations):
            raise IndexError(f"{self.name}: invalid station index {index}")

    def add_station(self, station: StationData) -> bool:
        """Append a station; returns False if the same channel is already stored."""
        if len(self.stations) >= self.capacity:
            raise StoreFullError(f"{self.name}: memory full")
        if any(
            existing._same_channel(station.frequency, station.band_index, station.bfo_offset)
            if _is_ssb_or_cw(station.modulation)
            else existing.frequency == station.frequency
            and existing.band_index == station.band_index
            for existing in self.stations
        ):
            return False
        self.stations.append(station)
        self.check_save()
        return True

    def update_station(self, index: int, station: StationData) -> None:
        """Replace the station at a position."""
        self._check_index(index)
        self.stations[index] = station
        self.check_save()

    def delete_station(self, index: int) -> None:
        """Remove the station at a position; later stations move up."""
        self._check_index(index)
        del self.stations[index]
        self.check_save()

    def find_station(self, frequency: int, band_index: int, bfo_offset: int = 0) -> int | None:
        """Position of the stored station on this channel, or None."""
        return next(
            (
                position
                for position, station in enumerate(self.stations)
                if station._same_channel(frequency, band_index, bfo_offset)
            ),
            None,
        )

    def station_at(self, index: int) -> StationData | None:
        """The station at a position, or None if there is none."""
        if 0 <= index < len(self.stations):
            return self.stations[index]
        return None


def fm_station_store() -> StationStore:
    """An empty in-memory FM station list."""
    return StationStore(MAX_FM_STATIONS, "FmStationStore")


def am_station_store() -> StationStore:
    """An empty in-memory AM/LW/SW/SSB/CW station list."""
    return StationStore(MAX_AM_STATIONS, "AmStationStore")