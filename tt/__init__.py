"""Talk Timer — presentation timer with pretalk countdown and pacing hints."""

__version__ = "1.0.0"
