import json
import re
from tt.common.logger import log
from tt.common.setup import PATHS
from tt.core.clock import Clock

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.current / "settings.json"

_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})$")

# Default values for every setting. Durations are in minutes, times of day are "HH:MM" strings or None.
_SETTINGS_DEFAULTS = {
    "duration": 0,
    "end_time": None,
    "start_time": None,
    "last_minutes": 5,
    "time_of_day": False,
    "slides": 0,
    "font": "DejaVu Sans Mono",
    "font_size": 48,
    "theme": "Stage Dark",
}

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return dict(_SETTINGS_DEFAULTS)

# Splits "HH:MM" into its hour and minute, raising ValueError for anything else.
def split_clock_time(text):
    match = _CLOCK_TIME.match(str(text).strip())
    if match is None:
        raise ValueError(f"Expected a time of day as HH:MM, got '{text}'")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time of day out of range: '{text}'")
    return hours, minutes

# Turns "HH:MM" into a timestamp for that time today, local time of the given clock.
def parse_clock_time(text, clock: Clock):
    hours, minutes = split_clock_time(text)
    today = clock.local(clock.now())
    return int(today.replace(hour=hours, minute=minutes, second=0, microsecond=0).timestamp())

def _is_count(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0

def _is_clock_time(value):
    if value is None:
        return True
    try:
        split_clock_time(value)
    except ValueError:
        return False
    return isinstance(value, str)

_VALIDATORS = {
    "duration": _is_count,
    "end_time": _is_clock_time,
    "start_time": _is_clock_time,
    "last_minutes": _is_count,
    "time_of_day": lambda v: isinstance(v, bool),
    "slides": _is_count,
    "font": lambda v: isinstance(v, str) and bool(v.strip()),
    "font_size": lambda v: _is_count(v) and v > 0,
    "theme": lambda v: isinstance(v, str),
}

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings from SETTINGS_PATH, defaulting anything that is missing or invalid.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            log.info(f"No existing settings found at '{SETTINGS_PATH}', loading default settings.")
            return build_default_settings()

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise TypeError(f"Settings file holds a {type(loaded).__name__}, not an object")

        settings = build_default_settings()
        defaulted_values = set()
        for key, is_valid in _VALIDATORS.items():
            if key in loaded and is_valid(loaded[key]):
                settings[key] = loaded[key]
            else:
                defaulted_values.add(key)

        # Log results
        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return settings
    # Fall back to defaults in case of error, but warn in log
    except (FileNotFoundError, json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.",exc_info=True)
        return build_default_settings()

# Write the given settings to SETTINGS_PATH.
def save_settings(settings):
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===

# Translates settings into the arguments the timer factory takes: seconds and timestamps.
def timer_arguments(settings, clock: Clock):
    end_time = settings.get("end_time")
    start_time = settings.get("start_time")
    return {
        "duration": int(settings.get("duration", 0)) * 60,
        "end_time": parse_clock_time(end_time, clock) if end_time else 0,
        "last_minutes": int(settings.get("last_minutes", 0)) * 60,
        "start_time": parse_clock_time(start_time, clock) if start_time else 0,
        "show_clock": bool(settings.get("time_of_day", False)),
    }
