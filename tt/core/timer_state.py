from tt.core.clock import Clock

# Status tags a renderer can style on.
PRETALK = "pretalk"
NO_CHANGE_NEEDED = "no-change-needed"
SMALL_CHANGE_NEEDED = "small-change-needed"
BIG_CHANGE_NEEDED = "big-change-needed"
PACING_TAGS = (NO_CHANGE_NEEDED, SMALL_CHANGE_NEEDED, BIG_CHANGE_NEEDED)
ALL_TAGS = (PRETALK, *PACING_TAGS)

# The fields every timer variant shares. Time is whole seconds against the injected clock, so a start reference in
# the future gives a negative elapsed value (pretalk).
class TimerState:

    # start_reference of 0 means no scheduled start, the first reset() zeroes elapsed in that case.
    def __init__(self, clock: Clock, start_reference: int = 0):
        self.clock = clock
        self.start_reference = int(start_reference)
        self.elapsed = 0
        self.progress = 0.0
        self.registration = None
        # Tags accumulate like style classes, formatters add and discard them.
        self.tags: set[str] = set()

    @property
    def running(self):
        return self.registration is not None

    @property
    def pretalk(self):
        return self.elapsed < 0

    # Recomputes elapsed from the clock. Only called while the owner wants time to move.
    def update_elapsed(self):
        self.elapsed = self.clock.now() - self.start_reference
        return self.elapsed

    # Moves the start reference so that elapsed continues from where it was frozen.
    def resume_reference(self):
        self.start_reference = self.clock.now() - self.elapsed

    # Drops the remaining pretalk countdown, the talk starts right now.
    def jump_to_talk(self):
        self.start_reference = self.clock.now()
