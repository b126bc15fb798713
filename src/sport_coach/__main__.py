"""
Entry point for running sport_coach as a module.

Usage:
    python -m sport_coach check-in                      # Weekly check-in, print the result
    python -m sport_coach check-in -q "Run today?"      # Ask the coach a question
    python -m sport_coach check-in --notify             # Also send the result to Telegram
    python -m sport_coach bot                           # Telegram bot (long polling)
    python -m sport_coach serve                         # MCP server over stdio
    python -m sport_coach serve --http --port 9000      # MCP server over HTTP
    python -m sport_coach check                         # Check Intervals.icu and Notion access
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from sport_coach.config import ConfigError, load_config

logger = logging.getLogger("sport_coach")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sport Coach - AI running coach on Intervals.icu, Notion, and Telegram"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    check_in = commands.add_parser("check-in", help="Run one coaching check-in")
    check_in.add_argument(
        "-q", "--question",
        default=None,
        help="Question for the coach"
    )
    check_in.add_argument(
        "--notify",
        action="store_true",
        help="Send the result to the configured Telegram chat"
    )

    commands.add_parser("bot", help="Run the Telegram bot in long polling mode")
    commands.add_parser("check", help="Check access to Intervals.icu and Notion")

    serve = commands.add_parser("serve", help="Run the MCP server")
    serve.add_argument(
        "--http",
        action="store_true",
        help="Use http transport instead of stdio"
    )
    serve.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    serve.add_argument(
        "--port",
        type=int,
        default=8081,
        help="Port for HTTP transport (default: 8081)"
    )
    return parser


def run_check_in_command(args, config) -> int:
    from sport_coach.client_factory import create_telegram_client, get_collaborators
    from sport_coach.coach.formatting import format_coach_response
    from sport_coach.runner import run_check_in
    from sport_coach.telegram_bot import notify_result

    result = run_check_in(args.question, collaborators=get_collaborators(config))
    print(format_coach_response(result))

    if args.notify:
        telegram_config = config.require_telegram()
        if not telegram_config.chat_id:
            raise ConfigError("Missing TELEGRAM_CHAT_ID; cannot send the result")
        notify_result(create_telegram_client(config), telegram_config.chat_id, result)
        logger.info("Result sent to Telegram chat %s", telegram_config.chat_id)
    return 0


def run_bot_command(config) -> int:
    from sport_coach.client_factory import create_telegram_client, get_collaborators
    from sport_coach.runner import run_check_in
    from sport_coach.telegram_bot import CoachBot

    collaborators = get_collaborators(config)
    bot = CoachBot(
        create_telegram_client(config),
        config.require_telegram().chat_id,
        handler=lambda text: run_check_in(text, collaborators=collaborators),
    )
    bot.run_forever()
    return 0


def run_check_command(config) -> int:
    from sport_coach.client_factory import get_collaborators
    from sport_coach.runner import run_connectivity_checks

    print("=== Sport Coach Checks ===\n")
    results = run_connectivity_checks(get_collaborators(config))
    for r in results:
        icon = "✓" if r.passed else "✗"
        print(f"{icon} {r.name}")
        print(f"  {r.message}\n")

    failed = sum(1 for r in results if not r.passed)
    print(f"=== {len(results) - failed} passed, {failed} failed ===")
    return 1 if failed else 0


def run_serve_command(args, config) -> int:
    from sport_coach import create_app
    from sport_coach.client_factory import get_collaborators

    # Tools resolve collaborators lazily; wire them before the server starts
    get_collaborators(config)

    if args.http:
        os.environ["MCP_TRANSPORT"] = "http"
        os.environ["MCP_HOST"] = args.host
        os.environ["MCP_PORT"] = str(args.port)
    else:
        os.environ["MCP_TRANSPORT"] = "stdio"

    app = create_app()
    if args.http:
        print(f"Starting Sport Coach MCP server on http://{args.host}:{args.port}/mcp")
        app.run(transport="http", host=args.host, port=args.port)
    else:
        app.run()
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config()
        if args.command == "serve":
            return run_serve_command(args, config)
        if args.command == "check":
            return run_check_command(config)
        if args.command == "bot":
            return run_bot_command(config)
        return run_check_in_command(args, config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nExiting...")
        return 0
    except Exception as e:
        logger.debug("Check-in failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
