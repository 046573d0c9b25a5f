"""Timer display variants and their format functions.

Each variant is a small record of its own parameters. The readout for a tick
comes from the format function registered for the variant's type, which
reads the shared ``TimerState``, updates its tags and returns the text.
"""

from dataclasses import dataclass
from typing import NamedTuple

from tt.core.timer_state import (
    BIG_CHANGE_NEEDED,
    NO_CHANGE_NEEDED,
    PACING_TAGS,
    PRETALK,
    SMALL_CHANGE_NEEDED,
    TimerState,
)

MINUS = "\u2212"
PRETALK_PREFIX = "-"


@dataclass
class Countdown:
    """Remaining time until ``duration`` seconds have elapsed, then overtime."""
    duration: int
    last_minutes: int = 0


@dataclass
class EndTime(Countdown):
    """Countdown towards a wall-clock ``end_time``.

    ``duration`` is derived from the start reference every time the timer
    starts running.
    """
    end_time: int = 0


@dataclass
class Countup:
    """Time since the talk started."""


@dataclass
class TimeOfDay:
    """Current wall-clock time, independent of the talk."""


Variant = Countdown | EndTime | Countup | TimeOfDay


class Readout(NamedTuple):
    text: str
    tags: frozenset[str]


class Pacing(NamedTuple):
    """How far off schedule the talk is, given slide progress.

    ``abs_diff`` is seconds behind the plan (positive means running long),
    ``speed_change`` the relative speed-up needed to still finish on time.
    """
    abs_diff: int
    speed_change: float
    tag: str

    @property
    def prefix(self) -> str:
        diff_sign = "+" if self.abs_diff > 0 else MINUS
        change_sign = "+" if self.speed_change > 0 else MINUS
        return (
            f"\u0394={diff_sign}{abs(self.abs_diff)}s   "
            f"\u03B2={change_sign}{abs(int(self.speed_change * 100))}%   "
        )


def show_time(seconds: int, prefix: str = "") -> str:
    """Format ``seconds`` as MM:SS behind ``prefix``. Minutes do not wrap at 60."""
    minutes, seconds = divmod(int(seconds), 60)
    return f"{prefix}{minutes:02d}:{seconds:02d}"


def until_text(state: TimerState, variant: EndTime) -> str:
    return state.clock.local(variant.end_time).strftime("Until %H:%M")


# The two ranges overlap, first match wins.
def classify_speed_change(speed_change: float) -> str:
    if -0.05 <= speed_change <= 0.00:
        return NO_CHANGE_NEEDED
    elif -0.10 <= speed_change <= 0.04:
        return SMALL_CHANGE_NEEDED
    else:
        return BIG_CHANGE_NEEDED


def compute_pacing(elapsed: int, duration: int, progress: float) -> Pacing | None:
    """Pacing for the current tick, or None while there is nothing to compare."""
    planned = int(progress * duration)
    if elapsed == 0 or planned == 0 or elapsed == duration:
        return None
    abs_diff = elapsed - planned
    speed_change = abs_diff / (duration - elapsed)
    return Pacing(abs_diff, speed_change, classify_speed_change(speed_change))


def format_countdown(state: TimerState, variant: Countdown) -> Readout:
    prefix = ""
    if state.elapsed < 0:
        prefix = PRETALK_PREFIX
        seconds = -state.elapsed
        state.tags.add(PRETALK)
    else:
        state.tags.discard(PRETALK)
        state.tags.difference_update(PACING_TAGS)
        pacing = compute_pacing(state.elapsed, variant.duration, state.progress)
        if pacing is not None:
            prefix += pacing.prefix
            state.tags.add(pacing.tag)
        if state.elapsed <= variant.duration:
            seconds = variant.duration - state.elapsed
        else:
            # Overtime drops the pacing text
            seconds = state.elapsed - variant.duration
            prefix = MINUS
    return Readout(show_time(seconds, prefix), frozenset(state.tags))


def format_countup(state: TimerState, variant: Countup) -> Readout:
    prefix = ""
    if state.elapsed < 0:
        prefix = PRETALK_PREFIX
        seconds = -state.elapsed
        state.tags.add(PRETALK)
    else:
        seconds = state.elapsed
        state.tags.discard(PRETALK)
    return Readout(show_time(seconds, prefix), frozenset(state.tags))


def format_time_of_day(state: TimerState, variant: TimeOfDay) -> Readout:
    now = state.clock.local(state.clock.now())
    seconds = now.hour * 3600 + now.minute * 60 + now.second
    return Readout(show_time(seconds), frozenset(state.tags))


FORMATTERS = {
    Countdown: format_countdown,
    EndTime: format_countdown,
    Countup: format_countup,
    TimeOfDay: format_time_of_day,
}


def format_readout(state: TimerState, variant: Variant) -> Readout:
    return FORMATTERS[type(variant)](state, variant)
