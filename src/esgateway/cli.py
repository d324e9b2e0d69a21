"""
esgateway CLI: Command-Line Interface
=====================================

Usage:
    python -m esgateway serve
    python -m esgateway serve --port 9000 --log-level DEBUG
    python -m esgateway --hosts http://es1:9200 health
"""

import argparse
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import Settings
from .exceptions import BackendError
from .log import configure_logging

logger = structlog.get_logger(__name__)


def load_settings(args, **overrides) -> Optional[Settings]:
    """
    Environment settings with CLI overrides applied.

    Returns:
        Settings, or None (after logging why) if a value is invalid
    """
    try:
        settings = Settings().override(
            elasticsearch_url=args.hosts,
            elasticsearch_api_key=args.api_key,
            **overrides
        )
    except ValidationError as e:
        configure_logging()
        for error in e.errors():
            logger.critical(
                "Invalid configuration",
                setting=".".join(str(part) for part in error["loc"]),
                error=error["msg"]
            )
        return None

    configure_logging(settings.log_level, settings.log_format)
    return settings


def open_store(settings: Settings):
    """Build the document store, or None if the client cannot be created."""
    from .core import DocumentStore

    try:
        return DocumentStore.from_settings(settings)
    except ValueError as e:
        logger.critical(
            "Error creating the Elasticsearch client",
            hosts=settings.hosts,
            error=str(e)
        )
        return None


def cmd_serve(args) -> int:
    """Run the HTTP gateway."""
    import uvicorn

    from .app import create_app

    settings = load_settings(
        args,
        gateway_host=args.host,
        gateway_port=args.port,
        log_level=args.log_level
    )
    if settings is None:
        return 1

    store = open_store(settings)
    if store is None:
        return 1

    logger.info(
        "Server running",
        host=settings.gateway_host,
        port=settings.gateway_port,
        backend=settings.hosts
    )
    uvicorn.run(
        create_app(store),
        host=settings.gateway_host,
        port=settings.gateway_port,
        log_config=None
    )
    return 0


def cmd_health(args) -> int:
    """Show cluster health."""
    settings = load_settings(args)
    if settings is None:
        return 1

    store = open_store(settings)
    if store is None:
        return 1

    with store:
        try:
            health = store.health()
        except BackendError as e:
            print(f"Backend unavailable: {e}")
            return 1

    print(f"\nCluster: {health['cluster_name']}")
    print(f"Status: {health['status']}")
    print(f"Nodes: {health['number_of_nodes']}")
    print(f"Data nodes: {health['number_of_data_nodes']}")
    print(f"Active shards: {health['active_shards']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esgateway",
        description="HTTP gateway for Elasticsearch documents"
    )

    # Global options
    parser.add_argument(
        "--hosts",
        help="Elasticsearch hosts (comma-separated, overrides ELASTICSEARCH_URL)",
        default=None
    )
    parser.add_argument(
        "--api-key",
        dest="api_key",
        help="Elasticsearch API key",
        default=None
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP gateway")
    serve_parser.add_argument("--host", help="Listen address (default: GATEWAY_HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, help="Listen port (default: GATEWAY_PORT or 8080)")
    serve_parser.add_argument("--log-level", dest="log_level", help="Log level (default: LOG_LEVEL or INFO)")

    subparsers.add_parser("health", help="Show Elasticsearch cluster health")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args)
    elif args.command == "health":
        return cmd_health(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
