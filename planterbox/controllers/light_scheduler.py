"""Light-cycle brightness scheduler.

Turns a daily light duration into a 0-255 PWM brightness with raised-cosine
sunrise and sunset ramps, so the fixture never jumps between off and full.

The ON window starts at ``start_hour`` and lasts ``hours_per_day`` on a 24 h
ring; windows that cross midnight wrap around. When the window is shorter
than two ramps the dawn and dusk curves overlap and the dimmer of the two
wins, which keeps the curve continuous without a separate on/off policy.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from planterbox.domain.actuator_command import MAX_BRIGHTNESS
from planterbox.domain.sensor_sample import num_or_none

MINUTES_PER_DAY = 24 * 60


def ease(x: float) -> float:
    """Raised-cosine ease: 0 -> 0, 1 -> 1, zero slope at both ends."""
    x = min(max(x, 0.0), 1.0)
    return 0.5 - 0.5 * math.cos(x * math.pi)


def _minute_of_day(ts: datetime) -> float:
    return ts.hour * 60 + ts.minute + ts.second / 60.0 + ts.microsecond / 60_000_000.0


def brightness_fraction(hours_per_day: float, minute_of_day: float, *, start_hour: float = 6.0,
                        ramp_minutes: float = 60.0) -> float:
    """Return the 0..1 light level for a minute of the day."""
    if hours_per_day <= 0:
        return 0.0
    if hours_per_day >= 24:
        return 1.0

    window = hours_per_day * 60.0
    elapsed = (minute_of_day - start_hour * 60.0) % MINUTES_PER_DAY
    if elapsed >= window:
        return 0.0

    if ramp_minutes <= 0:
        return 1.0

    remaining = window - elapsed
    level = 1.0
    if elapsed < ramp_minutes:
        level = min(level, ease(elapsed / ramp_minutes))
    if remaining < ramp_minutes:
        # sunset runs the sunrise curve backwards
        level = min(level, 1.0 - ease(1.0 - remaining / ramp_minutes))
    return level


def compute_brightness(hours_per_day: Optional[float], now: datetime, *, start_hour: float = 6.0,
                       ramp_minutes: float = 60.0) -> int:
    """
    Brightness (0-255) for *now*, read as local wall-clock time.

    A missing or non-numeric ``hours_per_day`` keeps the light off.
    """
    hours = num_or_none(hours_per_day)
    if hours is None:
        return 0
    level = brightness_fraction(hours, _minute_of_day(now), start_hour=start_hour, ramp_minutes=ramp_minutes)
    return max(0, min(MAX_BRIGHTNESS, int(round(MAX_BRIGHTNESS * level))))


@dataclass
class LightScheduler:
    """Daily light schedule with dawn/dusk ramps.

    - start_hour: hour of day (0-24, fractional allowed) the light window opens.
    - ramp_minutes: length of each sunrise/sunset ramp.
    - timezone: IANA zone the schedule is expressed in; host local time when None.
    """

    start_hour: float = 6.0
    ramp_minutes: float = 60.0
    timezone: Optional[str] = None

    def local_time(self, ts: datetime) -> datetime:
        if self.timezone:
            return ts.astimezone(ZoneInfo(self.timezone))
        return ts.astimezone() if ts.tzinfo is not None else ts

    def brightness(self, hours_per_day: Optional[float], ts: datetime) -> int:
        return compute_brightness(
            hours_per_day,
            self.local_time(ts),
            start_hour=self.start_hour,
            ramp_minutes=self.ramp_minutes,
        )


__all__ = ["LightScheduler", "brightness_fraction", "compute_brightness", "ease"]
