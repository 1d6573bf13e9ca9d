"""
CLI main entry point.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ..client import ZaimClient
from ..config import ZaimConfig, create_default_config, load_config
from ..errors import ZaimError
from ..schemas.credentials import TokenPair
from ..schemas.request import ItemType

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="zaim-client",
        description="Authorize against Zaim and query household accounts",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("init", help="Write a default config file")
    subparsers.add_parser("authorize", help="Run the OAuth handshake and print the access token")
    subparsers.add_parser("verify", help="Show the authenticated user")

    money_parser = subparsers.add_parser("money", help="List money entries")
    money_parser.add_argument(
        "--mode",
        choices=[t.value for t in ItemType],
        help="Only entries of this kind",
    )
    money_parser.add_argument("--start-date", type=str, help="First date (YYYY-MM-DD)")
    money_parser.add_argument("--end-date", type=str, help="Last date (YYYY-MM-DD)")
    money_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum entries to return (default: 20)",
    )
    money_parser.add_argument("--page", type=int, help="Result page")

    subparsers.add_parser("categories", help="List categories")
    subparsers.add_parser("genres", help="List genres")
    subparsers.add_parser("accounts", help="List accounts")
    subparsers.add_parser("currencies", help="List currencies")

    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_init(config_path: Path) -> int:
    """Write the default config file."""
    if config_path.exists():
        print(f"❌ {config_path} already exists")
        return 1

    create_default_config(config_path)
    print(f"✓ Wrote {config_path}")
    return 0


def cmd_authorize(config: ZaimConfig) -> int:
    """Run the three-legged handshake interactively."""
    client = ZaimClient(
        consumer_key=config.consumer_key,
        consumer_secret=config.consumer_secret,
        callback=config.callback_url,
        timeout=config.timeout,
    )

    def on_url(url: str) -> None:
        print("🔑 Open this URL and authorize the application:")
        print(f"   {url}")

    client.get_authorization_url(on_url)
    pin = input("Verifier (oauth_verifier): ").strip()

    def on_token(pair: TokenPair) -> None:
        client.set_access_token(pair.token)
        client.set_access_token_secret(pair.secret)

    client.get_oauth_access_token(pin, on_token)

    print("\n✓ Authorized. Add these to your config:")
    print(f"  access_token: {client.token}")
    print(f"  access_token_secret: {client.secret}")
    return 0


def cmd_money(config: ZaimConfig, args: argparse.Namespace) -> int:
    """List money entries."""
    params: dict[str, Any] = {}
    if args.mode:
        params["mode"] = args.mode
    if args.start_date:
        params["start_date"] = args.start_date
    if args.end_date:
        params["end_date"] = args.end_date
    if args.limit:
        params["limit"] = args.limit
    if args.page:
        params["page"] = args.page

    ZaimClient.from_config(config).get_money(params, _print_json)
    return 0


def cmd_listing(config: ZaimConfig, command: str) -> int:
    """Print one of the read-only listings."""
    client = ZaimClient.from_config(config)
    operations = {
        "verify": client.verify,
        "categories": client.get_categories,
        "genres": client.get_genre,
        "accounts": client.get_accounts,
        "currencies": client.get_currencies,
    }
    operations[command](_print_json)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init":
        return cmd_init(parsed.config)

    try:
        config = load_config(parsed.config)
    except ZaimError as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    errors = config.validate()
    if errors:
        print("❌ Invalid configuration:")
        for error in errors:
            print(f"   - {error}")
        return 1

    try:
        if parsed.command == "authorize":
            return cmd_authorize(config)
        elif parsed.command == "money":
            return cmd_money(config, parsed)
        elif parsed.command in ("verify", "categories", "genres", "accounts", "currencies"):
            return cmd_listing(config, parsed.command)
        else:
            parser.print_help()
            return 1
    except ZaimError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
