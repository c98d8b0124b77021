"""
Minimal script that uses the public API to create an article purchase link.
"""

from __future__ import annotations

import argparse
import logging
import sys

from linketysplit import (
    ConfigError,
    ValidationError,
    create_publication_client,
    load_publication_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a purchase link using the SDK API")
    parser.add_argument("permalink", help="Canonical https:// URL of the article")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing LINKETYSPLIT_* settings",
    )
    parser.add_argument(
        "--api-key",
        help="Provide the publication API key without relying on environment data",
    )
    parser.add_argument(
        "--origin",
        help="Override the service origin (default: https://linketysplit.com)",
    )
    parser.add_argument(
        "--price",
        type=int,
        help="Custom price in U.S. cents shown to this reader only",
    )
    parser.add_argument(
        "--share",
        action="store_true",
        help="Send the reader to the sharing screen",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_publication_config(
            env_file=args.env_file,
            api_key=args.api_key,
            origin=args.origin,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_publication_client(config=config)
    custom_pricing = {"price": args.price} if args.price is not None else None

    try:
        url = client.create_article_purchase_url(
            args.permalink,
            custom_pricing,
            True if args.share else None,
        )
    except ValidationError as exc:
        logging.error("Cannot create purchase link: %s", exc)
        return 1

    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
