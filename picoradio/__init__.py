"""Receiver control logic: bands, stations, configuration store, sensors and rotary encoder."""

__version__ = "0.0.3"