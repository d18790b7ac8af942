"""
=============================================================================
IN-MEMORY WEB API CLI
=============================================================================

Issue requests against an in-memory backend from the shell.

=============================================================================
USAGE
=============================================================================

    # Demo: GET app/heroes, PUT app/heroes/7, GET app/heroes
    python -m in_memory_web_api

    # One request against the built-in heroes
    python -m in_memory_web_api GET app/heroes/3

    # Against your own seed data, with simulated latency
    python -m in_memory_web_api --seed db.json --delay 500 \\
        POST app/villains --body '{"name": "Dr. IQ"}'

    # Settings from the environment; flags still win
    IN_MEMORY_API_DELETE_404=1 python -m in_memory_web_api DELETE app/heroes/9

The seed file is a JSON object of collection name → list of records.

=============================================================================
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .config import BackendConfig
from .http.request import build_request
from .http.response import HTTPResponse
from .middleware import LoggingMiddleware
from .service import InMemoryBackendService


def heroes() -> Dict[str, List[Dict[str, Any]]]:
    """Built-in seed data."""
    return {
        "heroes": [
            {"id": 1, "name": "Windstorm"},
            {"id": 2, "name": "Bombasto"},
            {"id": 3, "name": "Magneta"},
            {"id": 4, "name": "Tornado"},
        ]
    }


def load_seed(path: str):
    """Seed factory reading `path` afresh on every reset."""
    def seed() -> Dict[str, List[Dict[str, Any]]]:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    return seed


def print_response(method: str, url: str, response: HTTPResponse) -> None:
    print(f"[{method}] /{url}")
    print(response.status_code)
    print(response.headers)
    print(response.text)


async def run_demo(service: InMemoryBackendService) -> None:
    """The classic sequence: list, upsert hero 7, list again."""
    print_response("GET", "app/heroes", await service.get("app/heroes"))

    body = json.dumps({"id": 7, "name": "Windstorm: the great"})
    print_response("PUT", "app/heroes/7", await service.put("app/heroes/7", body=body))

    print_response("GET", "app/heroes", await service.get("app/heroes"))


async def run_one(
    service: InMemoryBackendService,
    method: str,
    url: str,
    body: Optional[str],
) -> HTTPResponse:
    headers = {"Content-Type": "application/json"} if body is not None else None
    response = await service.send(build_request(method, url, headers, body))
    print_response(method.upper(), url, response)
    return response


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m in_memory_web_api",
        description="Send requests to an in-memory REST backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m in_memory_web_api                              # Run the demo
  python -m in_memory_web_api GET app/heroes               # List heroes
  python -m in_memory_web_api DELETE app/heroes/1 --delete-404
  python -m in_memory_web_api --seed db.json GET app/villains
        """
    )

    parser.add_argument("method", nargs="?", help="GET, POST, PUT or DELETE")
    parser.add_argument("url", nargs="?", help="Request URL, e.g. app/heroes/7")
    parser.add_argument("--body", "-b", help="JSON request body for POST/PUT")

    parser.add_argument(
        "--seed", "-s",
        help="JSON file with seed data (default: built-in heroes)"
    )
    # Options left unset (None) fall back to IN_MEMORY_API_* and then to
    # the BackendConfig defaults
    parser.add_argument(
        "--delay", "-d",
        type=float,
        default=None,
        help="Simulated latency in milliseconds (env: IN_MEMORY_API_DELAY, default: 0)"
    )
    parser.add_argument(
        "--delete-404",
        action="store_true",
        default=None,
        help="Answer 404 when deleting a record that does not exist "
             "(env: IN_MEMORY_API_DELETE_404)"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Backend host (env: IN_MEMORY_API_HOST, default: localhost)"
    )
    parser.add_argument(
        "--root-path",
        default=None,
        help="API path prefix (env: IN_MEMORY_API_ROOT_PATH, default: /)"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (env: IN_MEMORY_API_LOG_LEVEL, default: INFO)"
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=None,
        help="Access log format (env: IN_MEMORY_API_LOG_FORMAT, default: text)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"in-memory-web-api {__version__}"
    )
    return parser


def build_config(args: argparse.Namespace) -> BackendConfig:
    """
    Environment configuration overridden by the flags actually given.

    Raises:
        ValueError: If an IN_MEMORY_API_* variable cannot be parsed.
    """
    config = BackendConfig.from_env()
    overrides = {
        "delay": args.delay,
        "delete_404": args.delete_404,
        "host": args.host,
        "root_path": args.root_path,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.method is None) != (args.url is None):
        parser.error("method and url must be given together")

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        service = InMemoryBackendService(load_seed(args.seed) if args.seed else heroes, config)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    service.use(LoggingMiddleware(log_format=config.log_format))

    if args.method is None:
        asyncio.run(run_demo(service))
        return 0

    response = asyncio.run(run_one(service, args.method, args.url, args.body))
    return 0 if response.status_code < 400 else 1


if __name__ == "__main__":
    sys.exit(main())
