import argparse
import logging
import sys
from tt.common.logger import get_logger, log
from tt.core import config
from tt.ui.app import main

# argparse type for whole, non-negative counts (minutes, slides).
def _count(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got '{text}'")
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got '{text}'")
    return value

# argparse type for "HH:MM", kept as text so it can go straight back into settings.json.
def _clock_time(text):
    try:
        config.split_clock_time(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return text.strip()

def build_parser():
    parser = argparse.ArgumentParser(prog="tt", description="Talk Timer - presentation timer")
    parser.add_argument("-d", "--duration", type=_count, help="Talk duration in minutes, counts down")
    parser.add_argument("-e", "--end-time", type=_clock_time, help="Wall-clock end of the talk as HH:MM, counts down to it")
    parser.add_argument("-t", "--start-time", type=_clock_time, help="Scheduled start as HH:MM, counts down to it beforehand")
    parser.add_argument("-l", "--last-minutes", type=_count, help="Minutes before the end that count as the last minutes")
    parser.add_argument("-C", "--time-of-day", action="store_true", default=None, help="Show the current time of day instead of a timer")
    parser.add_argument("-n", "--slides", type=_count, help="Number of slides in the deck, used for pacing")
    parser.add_argument("--save", action="store_true", help="Store the effective settings as the new defaults")
    parser.add_argument("--debug", action="store_true", help="Also log to the console")
    return parser

# Command line options override whatever settings.json holds.
def apply_overrides(settings, args):
    overrides = {
        "duration": args.duration,
        "end_time": args.end_time,
        "start_time": args.start_time,
        "last_minutes": args.last_minutes,
        "time_of_day": args.time_of_day,
        "slides": args.slides,
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings

# Entry point for `python -m tt`
def run(argv=None) -> None:
    args = build_parser().parse_args(argv)
    try:
        if args.debug:
            get_logger(level=logging.DEBUG, console=True)
        settings = apply_overrides(config.load_settings(), args)
        if args.save:
            config.save_settings(settings)
        main(settings)
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
