"""
Command-line interface for the LinketySplit publication SDK.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import requests

from .api import create_publication_client
from .core.client import ApiCallError, PublicationClient
from .core.config import ConfigError, load_publication_config
from .core.validators import ValidationError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _discount(value: str) -> Dict[str, Any]:
    if ":" not in value:
        raise argparse.ArgumentTypeError("Discounts must look like QUANTITY:PERCENTAGE")
    quantity, percentage = value.split(":", 1)
    try:
        return {
            "minimumQuantity": int(quantity),
            "discountPercentage": int(percentage) if percentage.isdigit() else float(percentage),
        }
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid discount '{value}': quantity must be an integer, percentage a number"
        ) from exc


def _add_pricing_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--price", type=int, help="Unit price in U.S. cents")
    parser.add_argument(
        "--discount",
        action="append",
        type=_discount,
        metavar="QUANTITY:PERCENTAGE",
        default=None,
        help="Bulk discount tier; repeat for several tiers",
    )


def _pricing_from_args(args: argparse.Namespace) -> Optional[Dict[str, Any]]:
    if args.price is None:
        if args.discount:
            raise ValidationError("Discounts require --price.")
        return None
    pricing: Dict[str, Any] = {"price": args.price}
    if args.discount:
        pricing["discounts"] = list(args.discount)
    return pricing


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linketysplit",
        description="Create purchase links and call the LinketySplit publication API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing LINKETYSPLIT_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    purchase = commands.add_parser("purchase-url", help="Create a signed purchase link")
    purchase.add_argument("permalink", help="Canonical https:// URL of the article")
    _add_pricing_arguments(purchase)
    purchase.add_argument(
        "--share",
        action="store_true",
        help="Show the sharing screen instead of the purchase screen",
    )

    meta = commands.add_parser("meta-tags", help="Print the article meta tags")
    meta.add_argument(
        "--disabled",
        action="store_true",
        help="Mark purchases as disabled for the article",
    )
    _add_pricing_arguments(meta)
    meta.add_argument("--published-time", help="ISO-8601 publication timestamp")
    meta.add_argument("--title", help="Article title")
    meta.add_argument("--description", help="Article description")
    meta.add_argument("--image", help="Article image URL")

    commands.add_parser("publication", help="Show the publication for the API key")

    article = commands.add_parser("article", help="Show what is known about an article")
    article.add_argument("permalink")

    upsert = commands.add_parser("upsert", help="Create or refresh an article")
    upsert.add_argument("permalink")

    verify = commands.add_parser("verify", help="Verify an article access ID")
    verify.add_argument("access_id")
    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _dispatch(client: PublicationClient, args: argparse.Namespace) -> int:
    if args.command == "purchase-url":
        print(
            client.create_article_purchase_url(
                args.permalink,
                _pricing_from_args(args),
                True if args.share else None,
            )
        )
    elif args.command == "meta-tags":
        print(
            client.get_meta_tag_html(
                enabled=not args.disabled,
                article_pricing=_pricing_from_args(args),
                published_time=args.published_time,
                article_title=args.title,
                article_description=args.description,
                article_image=args.image,
            )
        )
    elif args.command == "publication":
        _print_json(client.get_publication().raw)
    elif args.command == "article":
        _print_json(client.get_article(args.permalink).raw)
    elif args.command == "upsert":
        _print_json(client.upsert_article(args.permalink).raw)
    elif args.command == "verify":
        response = client.verify_article_access(args.access_id)
        _print_json(response.raw)
        if not response.article_access.grant_access:
            logging.error("Access refused: %s", response.article_access.error)
            return 1
    return 0


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: Optional[requests.Session] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_publication_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_publication_client(config=config, session=session)

    try:
        return _dispatch(client, args)
    except ValidationError as exc:
        logging.error("Invalid input: %s", exc)
        return 1
    except ApiCallError as exc:
        logging.error("API call failed (%s %s): %s", exc.status_code, exc.status_message, exc)
        return 1
    except requests.RequestException as exc:
        logging.error("Request failed: %s", exc)
        return 1


def main(argv: List[str] | None = None) -> None:
    sys.exit(run_cli(argv))


if __name__ == "__main__":
    main()
