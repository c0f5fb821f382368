"""Run LightBnB data-access queries from the command line.

Usage:
    cd backend
    python -m tools.lightbnb_query search --city Vancouver --min-rating 4 --limit 5
    python -m tools.lightbnb_query search --max-price 150 --dry-run
    python -m tools.lightbnb_query user --email someone@example.com
    python -m tools.lightbnb_query reservations 1 --limit 3
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Optional

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from lightbnb.core import DatabaseError, ValidationError, create_store, get_cached_settings
from lightbnb.domain import (
    build_property_search,
    get_all_properties,
    get_all_reservations,
    get_user_with_email,
    get_user_with_id,
)

logger = logging.getLogger(__name__)


def _search_options(args: argparse.Namespace) -> dict[str, Any]:
    options = {
        "city": args.city,
        "ownerId": args.owner_id,
        "minimumPricePerNight": args.min_price,
        "maximumPricePerNight": args.max_price,
        "minimumRating": args.min_rating,
    }
    return {key: value for key, value in options.items() if value is not None}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the LightBnB database")
    parser.add_argument("--verbose", action="store_true", help="Log executed SQL")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search properties")
    search.add_argument("--city")
    search.add_argument("--owner-id", type=int)
    search.add_argument("--min-price", help="Minimum price per night in dollars")
    search.add_argument("--max-price", help="Maximum price per night in dollars")
    search.add_argument("--min-rating", type=float)
    search.add_argument("--limit", type=int, default=None)
    search.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the SQL and parameters without connecting",
    )

    user = sub.add_parser("user", help="Look up a user")
    group = user.add_mutually_exclusive_group(required=True)
    group.add_argument("--email")
    group.add_argument("--id", type=int)

    reservations = sub.add_parser("reservations", help="List a guest's reservations")
    reservations.add_argument("guest_id", type=int)
    reservations.add_argument("--limit", type=int, default=None)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_cached_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    limit = args.limit if getattr(args, "limit", None) is not None else settings.default_limit

    try:
        if args.command == "search" and args.dry_run:
            fragment = build_property_search(_search_options(args), limit, settings.max_limit)
            result: Any = {"sql": fragment.text, "params": list(fragment.params)}
        else:
            store = create_store(settings)
            if args.command == "search":
                result = get_all_properties(store, _search_options(args), limit, settings.max_limit)
            elif args.command == "user":
                if args.email is not None:
                    result = get_user_with_email(store, args.email)
                else:
                    result = get_user_with_id(store, args.id)
            else:
                result = get_all_reservations(store, args.guest_id, limit, settings.max_limit)
    except ValidationError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2
    except DatabaseError as exc:
        print(f"Database error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
