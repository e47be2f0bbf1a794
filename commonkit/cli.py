"""Command line access to the distance and cache key helpers.

    commonkit distance 51.5074 -0.1278 48.8566 2.3522
    commonkit cache-key '{"id": 1, "name": "John"}' --prefix App1 --type-name Person
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Sequence

from commonkit.core.config import get_settings
from commonkit.core.exceptions import SerializationError
from commonkit.logging import get_logger, setup_logging
from commonkit.services.cache_keys import to_cache_key_fast, to_cache_key_stable
from commonkit.utils.geo import get_distance

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="commonkit", description="Deterministic helpers")
    sub = parser.add_subparsers(dest="command", required=True)

    distance = sub.add_parser("distance", help="Great-circle distance in metres")
    for name in ("lat1", "lon1", "lat2", "lon2"):
        distance.add_argument(name, type=float)

    key = sub.add_parser("cache-key", help="Cache key for a JSON value")
    key.add_argument("value", help="JSON text of the value to fingerprint")
    key.add_argument(
        "--prefix",
        default=None,
        help="Key prefix (defaults to COMMONKIT_CACHE_KEY_PREFIX)",
    )
    key.add_argument(
        "--type-name",
        default=None,
        help="Type tag to use instead of the JSON value's Python type",
    )
    key.add_argument(
        "--fast",
        action="store_true",
        help="Use the built-in hash (not stable across runs)",
    )
    return parser


def _cache_key(args: argparse.Namespace) -> str:
    value = json.loads(args.value)
    prefix = args.prefix if args.prefix is not None else get_settings().cache_key_prefix
    build = to_cache_key_fast if args.fast else to_cache_key_stable
    return build(value, prefix, type_name=args.type_name)


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "distance":
        print(f"{get_distance(args.lat1, args.lon1, args.lat2, args.lon2):.3f}")
        return 0

    try:
        print(_cache_key(args))
    except json.JSONDecodeError as exc:
        logger.error("invalid_json", error=str(exc))
        return 2
    except SerializationError as exc:
        logger.error("cache_key_failed", error=str(exc))
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
