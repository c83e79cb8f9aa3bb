import datetime
import json
import logging
import os
import sys
from pathlib import Path

from skyscore.config import load_config
from skyscore.errors import ContractError
from skyscore.scoring import WindowConfig, find_window, moon_phase_info, score_conditions
from skyscore.scoring.formatters import (
    format_moon_text,
    format_score_text,
    format_windows_text,
    to_data,
)

logger = logging.getLogger(__name__)

CONDITION_FLAGS = (
    "cloud_cover",
    "humidity",
    "wind_speed",
    "visibility",
    "kp_index",
    "sun_altitude",
    "moon_phase",
    "latitude",
    "is_dark",
    "temperature",
    "feels_like",
    "precip_probability",
    "uv_index",
    "weather_condition",
)


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _handle_error(command: str, args, code: str, exc: Exception, exit_code: int) -> int:
    if args is not None and getattr(args, "json", False):
        _print_json(
            _json_envelope(
                command=command,
                ok=False,
                data=None,
                error={"code": code, "message": str(exc), "details": None},
            )
        )
    else:
        print(str(exc), file=sys.stderr)
    return exit_code


def _load(args):
    config = load_config(_config_path_from_args(args))
    _init_logging(getattr(args, "log_level", None) or config.log_level)
    return config


def _read_json_file(path: str):
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Input file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _conditions_from_args(args) -> dict:
    conditions = {}
    input_path = getattr(args, "input_json", None)
    if input_path:
        data = _read_json_file(input_path)
        if not isinstance(data, dict):
            raise ContractError(f"Conditions file must hold a JSON object: {input_path}")
        conditions.update(data)
    for name in CONDITION_FLAGS:
        value = getattr(args, name, None)
        if value is not None:
            conditions[name] = value
    return conditions


def _outdoor_options(args, config) -> dict:
    options = {"activity": getattr(args, "activity", None) or config.outdoor_activity}
    temp_min = getattr(args, "temp_min", None)
    temp_max = getattr(args, "temp_max", None)
    if temp_min is not None and temp_max is not None:
        options["temp_range"] = (temp_min, temp_max)
    elif config.outdoor_temp_range is not None:
        options["temp_range"] = config.outdoor_temp_range
    return options


def run_score(args) -> int:
    try:
        config = _load(args)
        conditions = _conditions_from_args(args)
        options = {}
        if args.variant == "outdoor":
            options = _outdoor_options(args, config)
        elif args.variant == "aurora" and "latitude" not in conditions:
            if config.site_latitude_deg is not None:
                conditions["latitude"] = config.site_latitude_deg
        result = score_conditions(args.variant, conditions, **options)
    except FileNotFoundError as e:
        return _handle_error("score", args, "not_found", e, 1)
    except (ContractError, ValueError) as e:
        return _handle_error("score", args, "invalid_input", e, 2)

    logger.info("%s score %d (%s)", result.variant, result.score, result.rating)
    if getattr(args, "json", False):
        _print_json(_json_envelope(command="score", ok=True, data=to_data(result), error=None))
    else:
        print(format_score_text(result, verbose=getattr(args, "verbose", False)))
    return 0


def run_window(args) -> int:
    try:
        config = _load(args)
        data = _read_json_file(args.input_json)
        hours = data.get("hours") if isinstance(data, dict) else data
        window_config = WindowConfig.from_config(config, args.variant)
        options = {}
        if args.variant == "aurora":
            latitude = args.latitude if args.latitude is not None else config.site_latitude_deg
            if latitude is not None:
                options["latitude"] = latitude
            if args.kp_index is not None:
                options["kp"] = args.kp_index
        elif args.variant == "outdoor":
            options = _outdoor_options(args, config)
        result = find_window(args.variant, hours, window_config, **options)
    except FileNotFoundError as e:
        return _handle_error("window", args, "not_found", e, 1)
    except (ContractError, ValueError) as e:
        return _handle_error("window", args, "invalid_input", e, 2)

    if getattr(args, "json", False):
        _print_json(_json_envelope(command="window", ok=True, data=to_data(result), error=None))
    else:
        print(format_windows_text(result))
    return 0


def run_moon(args) -> int:
    try:
        _load(args)
    except FileNotFoundError as e:
        return _handle_error("moon", args, "not_found", e, 1)
    info = moon_phase_info(args.phase)
    if getattr(args, "json", False):
        _print_json(_json_envelope(command="moon", ok=True, data=to_data(info), error=None))
    else:
        print(format_moon_text(info))
    return 0
