"""Command line entry point: run the API, poll once, or classify a local file."""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from hotelstream.core.config import load_settings
from hotelstream.core.logging import configure_logging
from hotelstream.ingestion.classifier import classify
from hotelstream.ingestion.reservations import normalize
from hotelstream.processing.client import StreamClient


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="PMS event stream ingestion")
    parser.add_argument("--log-level", help="Override LOG_LEVEL for this run")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API with background polling")
    serve.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    serve.add_argument("--port", type=int, help="Port to bind (defaults to PORT or 3000)")

    classify_cmd = subparsers.add_parser("classify", help="Classify events stored in a local file")
    classify_cmd.add_argument("path", type=Path, help="JSON array or NDJSON file of raw events")
    classify_cmd.add_argument(
        "--reservations",
        action="store_true",
        help="Normalize as primary-stream reservation events instead of stats",
    )

    poll = subparsers.add_parser("poll", help="Poll the configured stream once and print the result")
    poll.add_argument("--stats", action="store_true", help="Poll the stats and balances stream")
    poll.add_argument("--num", type=int, default=None, help="Number of messages to request")
    return parser


def read_events(path: Path) -> List[Any]:
    """Read a JSON document (array or single event) or fall back to NDJSON text."""

    text = path.read_text(encoding="utf-8")
    try:
        document = json.loads(text)
    except ValueError:
        return [text]
    return document if isinstance(document, list) else [document]


def _emit(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def _serve(host: str, port: Optional[int]) -> None:
    import uvicorn

    from hotelstream.api.server import Runtime, create_app

    settings = load_settings()
    app = create_app(Runtime(settings))
    uvicorn.run(app, host=host, port=port or settings.port)


def _classify(path: Path, reservations: bool) -> None:
    events = read_events(path)
    if reservations:
        _emit([record.to_dict() for record in normalize(events)])
    else:
        _emit(classify(events).to_dict())


def _poll(stats: bool, num: Optional[int]) -> None:
    settings = load_settings()
    if stats:
        client = StreamClient(settings.host_url, settings.stats_app_id, settings.stats_api_password)
        events = client.poll(num or settings.stats_num_messages)
        _emit(classify(events).to_dict())
    else:
        client = StreamClient(settings.host_url, settings.app_id, settings.api_password)
        events = client.poll(num or 1)
        _emit([record.to_dict() for record in normalize(events)])


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint for the ``hotelstream`` command."""

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "serve":
        _serve(args.host, args.port)
    elif args.command == "classify":
        _classify(args.path, args.reservations)
    elif args.command == "poll":
        _poll(args.stats, args.num)


if __name__ == "__main__":
    main()
