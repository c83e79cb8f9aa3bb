import argparse
import sys

from skyscore import __version__
from skyscore.cli.commands import run_moon, run_score, run_window

VARIANT_CHOICES = ("sky", "aurora", "outdoor")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config TOML (default: ~/.config/skyscore/config.toml)")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Logging level",
    )
    parser.add_argument("--json", action="store_true", help="Output result as JSON")


def _add_outdoor_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--activity", help="Outdoor activity profile (hiking, cycling, walking, running, picnic)")
    parser.add_argument("--temp-min", dest="temp_min", type=float, help="Comfortable temperature lower bound (C)")
    parser.add_argument("--temp-max", dest="temp_max", type=float, help="Comfortable temperature upper bound (C)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skyscore")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    score_parser = subparsers.add_parser("score", help="Score one set of conditions")
    score_parser.add_argument("variant", choices=VARIANT_CHOICES)
    score_parser.add_argument("--in", dest="input_json", help="JSON file with a conditions object")
    score_parser.add_argument("--cloud", dest="cloud_cover", type=float, help="Cloud cover (%%)")
    score_parser.add_argument("--humidity", type=float, help="Relative humidity (%%)")
    score_parser.add_argument(
        "--wind",
        dest="wind_speed",
        type=float,
        help="Wind speed (m/s for sky, km/h for outdoor)",
    )
    score_parser.add_argument("--visibility", type=float, help="Visibility (m)")
    score_parser.add_argument("--kp", dest="kp_index", type=float, help="Planetary Kp index")
    score_parser.add_argument("--sun-alt", dest="sun_altitude", type=float, help="Sun altitude (deg)")
    score_parser.add_argument("--moon-phase", dest="moon_phase", type=float, help="Lunar phase (0-1)")
    score_parser.add_argument("--lat", dest="latitude", type=float, help="Observer latitude (deg)")
    dark = score_parser.add_mutually_exclusive_group()
    dark.add_argument("--dark", dest="is_dark", action="store_const", const=True, help="Mark as dark")
    dark.add_argument("--not-dark", dest="is_dark", action="store_const", const=False, help="Mark as not dark")
    score_parser.add_argument("--temp", dest="temperature", type=float, help="Temperature (C)")
    score_parser.add_argument("--feels-like", dest="feels_like", type=float, help="Apparent temperature (C)")
    score_parser.add_argument(
        "--precip",
        dest="precip_probability",
        type=float,
        help="Precipitation probability (%%)",
    )
    score_parser.add_argument("--uv", dest="uv_index", type=float, help="UV index")
    score_parser.add_argument("--condition", dest="weather_condition", help="Weather description, e.g. 'light rain'")
    score_parser.add_argument("--verbose", action="store_true", help="Show per-factor breakdown")
    _add_outdoor_args(score_parser)
    _add_common_args(score_parser)

    window_parser = subparsers.add_parser("window", help="Find viewing windows in hourly data")
    window_parser.add_argument("variant", choices=VARIANT_CHOICES)
    window_parser.add_argument(
        "--in",
        dest="input_json",
        required=True,
        help="JSON file with a list of hours (or an object with an 'hours' list)",
    )
    window_parser.add_argument("--lat", dest="latitude", type=float, help="Observer latitude (deg)")
    window_parser.add_argument("--kp", dest="kp_index", type=float, help="Kp for hours without their own")
    _add_outdoor_args(window_parser)
    _add_common_args(window_parser)

    moon_parser = subparsers.add_parser("moon", help="Describe a lunar phase")
    moon_parser.add_argument("phase", type=float, help="Lunar phase fraction (0 new, 0.5 full)")
    _add_common_args(moon_parser)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"skyscore {__version__}")
        return 0

    if args.command == "score":
        return run_score(args)

    if args.command == "window":
        return run_window(args)

    if args.command == "moon":
        return run_moon(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
