from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from .application import DEFAULT_HISTORY_DAYS, SolarApplication
from .config import configure_logging, get_settings
from .result_builder import ResultBuilder, history_frame, summarize_history
from .weather import OpenWeatherClient


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser used by entry points.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(description="Solar yield forecast CLI")
    parser.add_argument("--log-level", default=None, help="Logging level (default from environment)")
    sub = parser.add_subparsers(dest="command")

    predict = sub.add_parser("predict", help="Estimate power, energy and payback for one installation")
    predict.add_argument("--location", default="Mumbai")
    predict.add_argument("--capacity", type=float, required=True, help="Panel capacity in kW")
    predict.add_argument("--efficiency", type=float, required=True, help="Module efficiency in %%")
    predict.add_argument("--tilt", type=float, default=None, help="Tilt angle in degrees (default 30)")
    predict.add_argument("--azimuth", type=float, default=None, help="Azimuth in degrees (default 180)")
    predict.add_argument(
        "--weather-file",
        default=None,
        help="JSON file with the weather object (flat or OpenWeather shape)",
    )
    predict.add_argument("--temperature", type=float, default=None)
    predict.add_argument("--humidity", type=float, default=None)
    predict.add_argument("--cloud-cover", type=float, default=None, dest="cloud_cover")
    predict.add_argument("--wind-speed", type=float, default=None, dest="wind_speed")
    predict.add_argument("--irradiance", type=float, default=None)
    predict.add_argument(
        "--live",
        action="store_true",
        help="Fetch the current weather of the location when no weather is given",
    )

    history = sub.add_parser("history", help="Synthesize a daily production history")
    history.add_argument("location")
    history.add_argument("--days", type=int, default=DEFAULT_HISTORY_DAYS)
    history.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible output")
    history.add_argument("--csv", default=None, help="Write the series to this CSV file")
    history.add_argument(
        "--report",
        action="store_true",
        help="Save CSV and chart in a timestamped folder under results/",
    )
    history.add_argument("--summary", action="store_true", help="Print statistics instead of records")

    requirements = sub.add_parser("requirements", help="Size an installation for a daily consumption")
    requirements.add_argument("--location", default="Mumbai")
    requirements.add_argument("--daily-consumption", type=float, required=True, dest="daily_consumption")
    requirements.add_argument(
        "--appliances-file",
        default=None,
        help="JSON file with a list of appliances (name, wattage, quantity, hours)",
    )

    sub.add_parser("cities", help="List supported cities")

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")

    return parser


def _load_json_file(path: str | Path) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON file ({file_path}): {exc}") from exc


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def _weather_from_args(args: argparse.Namespace) -> dict[str, Any] | None:
    if args.weather_file:
        return _load_json_file(args.weather_file)
    flat = {
        "temperature": args.temperature,
        "humidity": args.humidity,
        "cloudCover": args.cloud_cover,
        "windSpeed": args.wind_speed,
        "solarIrradiance": args.irradiance,
    }
    flat = {key: value for key, value in flat.items() if value is not None}
    if flat:
        return flat
    # Empty object means "use defaults"; None triggers a live lookup.
    return None if args.live else {}


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    port = args.port or get_settings().port
    uvicorn.run(
        "solar_yield.api.app:create_app",
        factory=True,
        host=args.host,
        port=port,
        reload=args.reload,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """
    CLI entry point.

    Args:
        argv: Optional sequence of CLI args (defaults to sys.argv).
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "serve":
        _serve(args)
        return

    rng = None
    if getattr(args, "seed", None) is not None:
        rng = np.random.default_rng(args.seed)

    weather_client = None
    if getattr(args, "live", False):
        weather_client = OpenWeatherClient.from_settings(settings)

    app = SolarApplication(weather_client=weather_client, rng=rng)

    if args.command == "predict":
        summary = app.predict(
            location=args.location,
            panel_capacity=args.capacity,
            panel_efficiency=args.efficiency,
            weather_data=_weather_from_args(args),
            tilt_angle=args.tilt,
            azimuth=args.azimuth,
        )
        _print_json(summary)
        return

    if args.command == "history":
        if args.days < 1:
            parser.error("--days must be a positive integer")
        records = app.historical_records(args.location, args.days)
        if args.csv:
            path = ResultBuilder().export_history_csv(records, args.csv)
            print(f"History written to: {path}", file=sys.stderr)
        if args.report:
            output_dir = ResultBuilder().save_history_report(args.location, records)
            print(f"Report saved in: {output_dir}", file=sys.stderr)
        if args.summary:
            _print_json({"location": args.location, "days": args.days,
                         "summary": summarize_history(history_frame(records))})
        else:
            _print_json({"location": args.location, "days": args.days,
                         "data": [r.to_dict() for r in records]})
        return

    if args.command == "requirements":
        appliances = _load_json_file(args.appliances_file) if args.appliances_file else []
        if not isinstance(appliances, list):
            raise SystemExit("Appliances file must contain a JSON list")
        _print_json(
            app.requirements(
                location=args.location,
                daily_consumption=args.daily_consumption,
                appliances=appliances,
            )
        )
        return

    if args.command == "cities":
        _print_json(app.cities())
        return

    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
