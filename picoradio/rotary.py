"""Quadrature rotary encoder decoding with acceleration and click detection."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

# Pulses per detent of the usual encoder; depends on the part in use.
STEPS_PER_NOTCH = 2
# Recommended period of service() calls.
SERVICE_INTERVAL_MS = 1

BUTTON_INTERVAL_MS = 10  # button sampling period, also the debounce time
DOUBLE_CLICK_TIME_MS = 600  # a second click within this time is a double click
HOLD_TIME_MS = 1200  # pressed longer than this counts as held

ACCEL_TOP = 6400  # maximum acceleration: value >> 8 gives at most 25
ACCEL_INC = 50
ACCEL_DEC = 2

_SINGLE_CLICK_ONLY = 1
_DOUBLE_CLICK_TICKS = DOUBLE_CLICK_TIME_MS // BUTTON_INTERVAL_MS
_HOLD_TICKS = HOLD_TIME_MS // BUTTON_INTERVAL_MS

PinReader = Callable[[], Union[bool, int]]


def _millis() -> int:
    return int(time.monotonic() * 1000)


class Direction(Enum):
    """Direction of rotation."""

    NONE = 0
    UP = 1
    DOWN = 2


class ButtonState(Enum):
    """State of the encoder's push button."""

    OPEN = 0
    PRESSED = 1
    HELD = 2
    RELEASED = 3
    CLICKED = 4
    DOUBLE_CLICKED = 5


@dataclass(frozen=True)
class EncoderState:
    """What a read of the encoder reports."""

    direction: Direction = Direction.NONE
    button_state: ButtonState = ButtonState.OPEN
    value: int = 0


class RotaryEncoder:
    """Timer-driven encoder decoder.

    ``service()`` samples the pins and is meant to be called about every
    millisecond; ``read()`` collects the movement and button events since
    the previous read.
    """

    def __init__(
        self,
        pin_a: PinReader,
        pin_b: PinReader,
        pin_button: Optional[PinReader] = None,
        steps_per_notch: int = 1,
        pins_active: bool = False,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._pin_a = pin_a
        self._pin_b = pin_b
        self._pin_button = pin_button
        self._steps = steps_per_notch
        self._pins_active = bool(pins_active)
        self._clock = clock if clock is not None else _millis
        self._lock = threading.Lock()

        self._delta = 0
        self._acceleration = 0
        self._acceleration_enabled = True
        self.double_click_enabled = True
        self._button_state = ButtonState.OPEN
        self._key_down_ticks = 0
        self._double_click_ticks = 0
        self._last_button_check = 0

        self._last = 0
        if self._is_active(self._pin_a):
            self._last = 3
        if self._is_active(self._pin_b):
            self._last ^= 1

    @property
    def acceleration_enabled(self) -> bool:
        return self._acceleration_enabled

    @acceleration_enabled.setter
    def acceleration_enabled(self, enabled: bool) -> None:
        self._acceleration_enabled = enabled
        if not enabled:
            self._acceleration = 0

    def _is_active(self, reader: PinReader) -> bool:
        return bool(reader()) == self._pins_active

    def service(self) -> None:
        """Sample the pins once and update movement, acceleration and button state."""
        moved = False
        now = self._clock()

        if self._acceleration_enabled:
            self._acceleration = max(0, self._acceleration - ACCEL_DEC)

        current = 3 if self._is_active(self._pin_a) else 0
        if self._is_active(self._pin_b):
            current ^= 1
        diff = self._last - current
        if diff & 1:
            self._last = current
            with self._lock:
                self._delta += (diff & 2) - 1
            moved = True

        if self._acceleration_enabled and moved:
            if self._acceleration <= ACCEL_TOP - ACCEL_INC:
                self._acceleration += ACCEL_INC

        if self._pin_button is not None and now - self._last_button_check >= BUTTON_INTERVAL_MS:
            self._last_button_check = now
            self._service_button()

    def _service_button(self) -> None:
        assert self._pin_button is not None
        if self._is_active(self._pin_button):
            self._key_down_ticks += 1
            if self._key_down_ticks > _HOLD_TICKS:
                self._button_state = ButtonState.HELD
        else:
            if self._key_down_ticks:
                if self._button_state == ButtonState.HELD:
                    self._button_state = ButtonState.RELEASED
                    self._double_click_ticks = 0
                elif self._double_click_ticks > _SINGLE_CLICK_ONLY:
                    if self._double_click_ticks < _DOUBLE_CLICK_TICKS:
                        self._button_state = ButtonState.DOUBLE_CLICKED
                        self._double_click_ticks = 0
                else:
                    self._double_click_ticks = (
                        _DOUBLE_CLICK_TICKS if self.double_click_enabled else _SINGLE_CLICK_ONLY
                    )
            self._key_down_ticks = 0

        if self._double_click_ticks > 0:
            # The counter is an 8-bit value that drops by two per sample.
            self._double_click_ticks = (self._double_click_ticks - 2) & 0xFF
            if self._double_click_ticks == 0:
                self._button_state = ButtonState.CLICKED

    def _take_value(self) -> int:
        with self._lock:
            value = self._delta
            if self._steps == 2:
                self._delta = value & 1
            elif self._steps == 4:
                self._delta = value & 3
            else:
                self._delta = 0

        if self._steps == 4:
            value >>= 2
        elif self._steps == 2:
            value >>= 1

        accel = self._acceleration >> 8 if self._acceleration_enabled else 0
        if value < 0:
            return -(1 + accel)
        if value > 0:
            return 1 + accel
        return 0

    def _take_button(self) -> ButtonState:
        state = self._button_state
        if state != ButtonState.HELD:
            self._button_state = ButtonState.OPEN
        return state

    def read(self) -> EncoderState:
        """Collect the button event and, unless the button is held, the movement."""
        button = self._take_button()
        if button == ButtonState.HELD:
            return EncoderState(Direction.NONE, button, 0)
        step = self._take_value()
        if step == 0:
            return EncoderState(Direction.NONE, button, 0)
        return EncoderState(Direction.UP if step > 0 else Direction.DOWN, button, step)