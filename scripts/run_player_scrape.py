"""
Run player profile scraping from CLI.
"""

from __future__ import annotations

import argparse
import json
import signal
import sys
from dataclasses import asdict
from typing import Any

from app.scraping.cancellation import CancellationToken
from app.scraping.errors import BatchAbortedError, FetchError, InvalidRangeError, StoreError
from app.scraping.logging_utils import configure_logging
from app.scraping.progress import LoggingProgressSink
from app.scraping.types import BatchState, PlayerRecord
from app.services.player_scraping_service import PlayerScrapingService
from db.session import session_scope


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run player profile scraping ingestion.")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--player-id", type=int, help="Scrape one profile ID.")
    mode.add_argument("--start-id", type=int, help="First ID of an inclusive batch range.")
    mode.add_argument(
        "--list-recent",
        type=int,
        metavar="LIMIT",
        help="Print the most recently scraped profiles.",
    )
    mode.add_argument("--clear", action="store_true", help="Delete every stored profile.")
    parser.add_argument("--end-id", type=int, help="Last ID of the batch range.")
    parser.add_argument("--chunk-size", type=int, default=None, help="IDs per chunk.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    return parser


def _record_payload(record: PlayerRecord) -> dict[str, Any]:
    payload = asdict(record)
    payload["name"] = record.display_name
    return payload


def _state_payload(state: BatchState) -> dict[str, Any]:
    payload = asdict(state)
    payload["processed"] = state.processed
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.start_id is not None and args.end_id is None:
        parser.error("--end-id is required with --start-id")

    configure_logging(args.log_level)
    service = PlayerScrapingService()
    cancel_token = CancellationToken()
    signal.signal(signal.SIGINT, lambda *_: cancel_token.cancel())

    exit_code = 0
    with session_scope() as db:
        try:
            if args.player_id is not None:
                result: Any = _record_payload(
                    service.scrape_player(db=db, player_id=args.player_id)
                )
            elif args.start_id is not None:
                state = service.scrape_range(
                    db=db,
                    start_id=args.start_id,
                    end_id=args.end_id,
                    chunk_size=args.chunk_size,
                    sink=LoggingProgressSink(),
                    cancel_token=cancel_token,
                )
                result = _state_payload(state)
                exit_code = 0 if state.is_complete else 3
            elif args.list_recent is not None:
                result = [
                    _record_payload(record)
                    for record in service.list_recent(db=db, limit=args.list_recent)
                ]
            else:
                result = {"deleted": service.clear(db=db)}
        except InvalidRangeError as exc:
            parser.error(str(exc))
        except BatchAbortedError as exc:
            result = {"error": str(exc), "state": _state_payload(exc.state)}
            exit_code = 2
        except (FetchError, StoreError) as exc:
            result = {"error": str(exc), "kind": getattr(exc, "kind", "store_error")}
            exit_code = 1

    json.dump(result, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
