from collections.abc import Callable
from tt.common.logger import log
from tt.core.clock import Clock, Scheduler
from tt.core.timer_state import TimerState
from tt.core.variants import Countdown, Countup, EndTime, TimeOfDay, Variant, format_readout, until_text

TICK_PERIOD = 1

# Receives every readout: the display text and the status tags currently applied.
Sink = Callable[[str, frozenset[str]], None]

# The timer a presenter console shows. It owns one TimerState and one variant, registers itself with the scheduler
# while running, and pushes a readout to the sink whenever something visible changes.
class TalkTimer:

    # Construction ends with a reset(), so the first readout is on the sink right away and a start time in the
    # future is already counting down as pretalk.
    def __init__(self, variant: Variant, clock: Clock, scheduler: Scheduler, sink: Sink, start_time: int = 0):
        self.variant = variant
        self.state = TimerState(clock, start_time)
        self.text = ""
        self._scheduler = scheduler
        self._sink = sink
        log.info(f"Initialized {type(variant).__name__} timer {variant} with start time {start_time}")
        self.reset()

    @property
    def elapsed(self):
        return self.state.elapsed

    @property
    def running(self):
        return self.state.running

    @property
    def tags(self):
        return frozenset(self.state.tags)

    @property
    def _is_clock(self):
        return isinstance(self.variant, TimeOfDay)

    #region === Operations ===

    # Starts ticking if stopped, resuming from the frozen elapsed value. While already ticking through pretalk, this
    # skips the rest of the pretalk countdown and starts the talk now.
    def start(self):
        if self._is_clock:
            self._register()
            self._render()
            return

        if self.state.running and self.state.pretalk:
            self.state.jump_to_talk()
            log.debug(f"Jumped from pretalk to talk at {self.state.start_reference}")
        elif not self.state.running:
            self.state.resume_reference()
            self._register()
            log.debug(f"Started timer with start reference {self.state.start_reference}")

        if isinstance(self.variant, EndTime):
            self.variant.duration = self.variant.end_time - self.state.start_reference
            log.debug(f"End time timer now counts down {self.variant.duration} seconds")

        self.state.update_elapsed()
        self._render()

    def stop(self):
        self._cancel()
        if isinstance(self.variant, EndTime):
            self._show(until_text(self.state, self.variant), self.tags)

    # Pauses a running talk and returns True, or resumes a paused one and returns False. Pretalk cannot be paused.
    def pause(self):
        if self._is_clock:
            return False
        paused = False
        if self.state.elapsed > 0:
            if self.state.running:
                self.stop()
                paused = True
            else:
                self.start()
        log.debug(f"Pause requested at elapsed {self.state.elapsed}, paused={paused}")
        return paused

    def is_paused(self):
        if self._is_clock:
            return False
        return self.state.elapsed > 0 and not self.state.running

    # Back to the initial value. A pretalk countdown keeps running towards the talk start, anything else goes back
    # to zero and stays stopped.
    def reset(self):
        if self._is_clock:
            self.start()
            return

        self._cancel()
        self.state.update_elapsed()
        if self.state.pretalk:
            self.start()
        else:
            self.state.elapsed = 0
            self._render()
        log.debug(f"Reset timer to elapsed {self.state.elapsed}, running={self.state.running}")

    # Only stored, the next readout picks it up.
    def set_progress(self, progress):
        self.state.progress = progress

    # Scheduler callback, never cancels itself.
    def tick(self):
        if not self._is_clock:
            self.state.update_elapsed()
        self._render()
        return True

    #endregion === Operations ===

    #region === Helpers ===

    def _register(self):
        if self.state.registration is None:
            self.state.registration = self._scheduler.register(TICK_PERIOD, self.tick)

    def _cancel(self):
        if self.state.registration is not None:
            self._scheduler.cancel(self.state.registration)
            self.state.registration = None
            log.debug(f"Stopped timer at elapsed {self.state.elapsed}")

    def _render(self):
        readout = format_readout(self.state, self.variant)
        text = readout.text
        # A stopped end time timer shows its target instead of the countdown
        if isinstance(self.variant, EndTime) and not self.state.running:
            text = until_text(self.state, self.variant)
        self._show(text, readout.tags)

    def _show(self, text, tags):
        self.text = text
        self._sink(text, tags)

    #endregion === Helpers ===


# Picks the variant from configuration, in strict priority order: clock, end time, duration, count up.
def select_variant(duration: int, end_time: int, last_minutes: int = 0, show_clock: bool = False) -> Variant:
    if show_clock:
        return TimeOfDay()
    elif end_time > 0:
        return EndTime(duration=0, last_minutes=last_minutes, end_time=end_time)
    elif duration > 0:
        return Countdown(duration=duration, last_minutes=last_minutes)
    else:
        return Countup()


def select(
        duration: int,
        end_time: int,
        last_minutes: int = 0,
        start_time: int = 0,
        show_clock: bool = False,
        *,
        clock: Clock,
        scheduler: Scheduler,
        sink: Sink,
) -> TalkTimer:
    variant = select_variant(duration, end_time, last_minutes, show_clock)
    return TalkTimer(variant, clock, scheduler, sink, start_time=start_time)
