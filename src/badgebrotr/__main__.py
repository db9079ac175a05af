"""CLI entry point for BadgeBrotr.

Runs one badge query or publishing command against the configured relays
and prints the result as JSON on stdout. Logs go to stderr.

Examples:
    ```bash
    python -m badgebrotr definitions --limit 20
    python -m badgebrotr badges npub1...
    python -m badgebrotr award <definition-id> npub1... npub1...
    PRIVATE_KEY=nsec1... python -m badgebrotr accept <pubkey> <award-event-id>
    python -m badgebrotr --relay wss://nos.lol profile <pubkey>
    ```
"""

import argparse
import asyncio
import json
import sys
from collections.abc import Callable, Coroutine
from dataclasses import asdict
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from badgebrotr.core.exceptions import ConfigurationError, PreconditionError
from badgebrotr.core.logger import Logger, configure_logging
from badgebrotr.core.yaml import load_yaml
from badgebrotr.models.badge import Badge
from badgebrotr.models.event import Event
from badgebrotr.services.badges import (
    AppConfig,
    BadgeActions,
    BadgeDefinitionParams,
    BadgeQueries,
    ProfileBadgesEditor,
)
from badgebrotr.utils.keys import load_keys_from_env
from badgebrotr.utils.protocol import RelayClient
from badgebrotr.utils.recipients import normalize_pubkey


DEFAULT_CONFIG = Path("config") / "badgebrotr.yaml"

EDIT_COMMANDS = ("accept", "reject", "up", "down")
PUBLISH_COMMANDS = ("create", "award", *EDIT_COMMANDS)


# =============================================================================
# Output
# =============================================================================


def to_json(value: Any) -> Any:
    """Convert events, badges and lists of them to JSON-compatible values."""
    if isinstance(value, Event):
        return value.to_dict()
    if isinstance(value, Badge):
        return asdict(value)
    if isinstance(value, list | tuple):
        return [to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    return value


# =============================================================================
# Commands
# =============================================================================


def _pubkey(value: str) -> str:
    try:
        return normalize_pubkey(value)
    except ValueError as e:
        raise PreconditionError(str(e)) from e


async def run_read(args: argparse.Namespace, queries: BadgeQueries) -> Any:
    """Run a read-only command."""
    if args.command == "definitions":
        if args.issuer:
            return await queries.issuer_definitions(_pubkey(args.issuer))
        return await queries.definitions(args.limit)
    if args.command == "definition":
        definition = await queries.definition(args.event_id)
        if definition is None:
            raise PreconditionError(f"badge definition {args.event_id} not found")
        return definition
    if args.command == "awarded":
        return await queries.awarded_badges(_pubkey(args.pubkey))
    if args.command == "badges":
        return await queries.user_badges(_pubkey(args.pubkey))
    return await queries.profile_badges(_pubkey(args.pubkey))


async def run_publish(
    args: argparse.Namespace, queries: BadgeQueries, client: RelayClient, signer: str
) -> Any:
    """Run a command that signs and publishes an event."""
    if args.command == "create":
        params = BadgeDefinitionParams(
            slug=args.slug,
            name=args.name,
            description=args.description,
            image=args.image,
            image_width=args.image_width,
            image_height=args.image_height,
            thumb=args.thumb,
            thumb_width=args.thumb_width,
            thumb_height=args.thumb_height,
        )
        return await BadgeActions(client, queries.config).create_definition(params)

    if args.command == "award":
        definition = await queries.definition(args.definition_id)
        if definition is None:
            raise PreconditionError(f"badge definition {args.definition_id} not found")
        if definition.pubkey != signer:
            raise PreconditionError("only the issuer of a badge definition can award it")
        return await BadgeActions(client, queries.config).award_badge(
            definition, " ".join(args.recipients)
        )

    owner = _pubkey(args.pubkey)
    if owner != signer:
        raise PreconditionError("the signing key does not own this profile badges list")
    editor = await queries.editor(owner, client)
    edits: dict[str, Callable[[str], Coroutine[Any, Any, Event | None]]] = {
        "accept": editor.accept,
        "reject": editor.reject,
        "up": editor.move_up,
        "down": editor.move_down,
    }
    event = await edits[args.command](args.award_event_id)
    return _edit_result(editor, event)


def _edit_result(editor: ProfileBadgesEditor, event: Event | None) -> dict[str, Any]:
    return {"published": event, "badges": editor.badges}


# =============================================================================
# Arguments and configuration
# =============================================================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="badgebrotr",
        description="NIP-58 badge queries and publishing",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Config path (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--relay",
        action="append",
        dest="relays",
        default=[],
        help="Relay URL, repeatable (overrides the configured relays)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit log records as JSON objects",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    definitions = commands.add_parser("definitions", help="List badge definitions")
    definitions.add_argument("--issuer", help="Only definitions issued by this pubkey")
    definitions.add_argument("--limit", type=int, help="Maximum number of definitions")

    definition = commands.add_parser("definition", help="Show one badge definition")
    definition.add_argument("event_id")

    for name, text in (
        ("awarded", "Badges awarded to a user, in award order"),
        ("badges", "A user's ordered badge view"),
        ("profile", "A user's profile badges list event"),
    ):
        commands.add_parser(name, help=text).add_argument("pubkey")

    create = commands.add_parser("create", help="Publish a badge definition")
    create.add_argument("slug")
    create.add_argument("name")
    create.add_argument("--description")
    create.add_argument("--image")
    create.add_argument("--image-width", type=int)
    create.add_argument("--image-height", type=int)
    create.add_argument("--thumb")
    create.add_argument("--thumb-width", type=int)
    create.add_argument("--thumb-height", type=int)

    award = commands.add_parser("award", help="Award a badge to one or more users")
    award.add_argument("definition_id")
    award.add_argument("recipients", nargs="+")

    for name, text in (
        ("accept", "Accept an awarded badge"),
        ("reject", "Remove a badge from the profile list"),
        ("up", "Move an accepted badge up"),
        ("down", "Move an accepted badge down"),
    ):
        edit = commands.add_parser(name, help=text)
        edit.add_argument("pubkey")
        edit.add_argument("award_event_id")

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> AppConfig:
    """Load the config file, letting ``--relay`` flags replace its relays."""
    data: dict[str, Any] = {}
    if args.config.exists():
        data = load_yaml(args.config)
    elif args.config != DEFAULT_CONFIG:
        raise ConfigurationError(f"config file not found: {args.config}")

    if args.relays:
        relays = data.get("relays") or {}
        data["relays"] = {**relays, "relays": args.relays}
    if not data.get("relays"):
        raise ConfigurationError("no relays configured: pass --relay or a config file")

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {e}") from e


# =============================================================================
# Main
# =============================================================================


async def main(argv: list[str] | None = None) -> int:
    """Main entry point: parse args, connect to relays, and run the command."""
    args = parse_args(argv)
    configure_logging(args.log_level, json_output=args.json_logs)
    logger = Logger("cli")

    try:
        config = load_config(args)
        keys = None
        if args.command in PUBLISH_COMMANDS:
            keys = load_keys_from_env(config.relays.keys_env)

        async with RelayClient(
            config.relays.relays,
            keys,
            connect_timeout=config.relays.connect_timeout,
            fetch_timeout=config.relays.fetch_timeout,
        ) as client:
            queries = BadgeQueries(client, config.badges)
            if keys is None:
                result = await run_read(args, queries)
            else:
                signer = keys.public_key().to_hex()
                result = await run_publish(args, queries, client, signer)
    except Exception as e:  # Intentionally broad: CLI error boundary
        logger.error(f"{args.command}_failed", error=str(e), type=type(e).__name__)
        return 1

    print(json.dumps(to_json(result), indent=2))  # noqa: T201
    return 0


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
